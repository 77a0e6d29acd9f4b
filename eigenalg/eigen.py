# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .hessenberg import make_hessenberg_inplace
from .schur import block_eigenvalues, eigenvalues_2x2, francis_qr
from .utils import TOLERANCE, check_square

logger = logging.getLogger(__name__)


class ConvergenceError(np.linalg.LinAlgError):
    """An iterative solver ran out of iterations; `solver` names it."""

    def __init__(self, solver: str, iterations: int):
        super().__init__(f"{solver} did not converge in {iterations} iterations")
        self.solver = solver
        self.iterations = iterations


def calc_eigenvalues(
    A: np.ndarray, num_iters: int, tolerance: float = TOLERANCE
) -> np.ndarray:
    """
    Real parts of the eigenvalues of a square matrix, Francis double-shift QR.

    Unlike RealSchurDecomposition no orthogonal factor is accumulated and
    running out of iterations is an error.

    Parameters
    ----------
    A : (n, n) ndarray
        Real square matrix, left untouched.
    num_iters : int
        Maximum number of QR sweeps.
    tolerance : float
        Relative threshold for treating a sub-diagonal entry as zero.

    Returns
    -------
    eigenvalues : (n,) ndarray
        Complex-conjugate pairs contribute their common real part twice.

    Raises
    ------
    ValueError : if A is not square.
    ConvergenceError : if the matrix did not deflate within num_iters sweeps.
    """
    H = np.array(A, dtype=float, copy=True)
    check_square(H)
    n = H.shape[0]
    if n == 1:
        return np.array([H[0, 0]])
    if n == 2:
        pair = eigenvalues_2x2(H[0, 0], H[0, 1], H[1, 0], H[1, 1])
        return np.array([ev.real for ev in pair])

    make_hessenberg_inplace(H)
    p, sweeps = francis_qr(H, None, num_iters, tolerance)
    if p > 1:
        logger.debug(f"calc_eigenvalues: block ending at row {p} still active")
        raise ConvergenceError("calc_eigenvalues", sweeps)
    return np.array([ev.real for ev in block_eigenvalues(H, tolerance)])
