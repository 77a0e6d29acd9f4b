# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Polynomial roots as eigenvalues of the companion matrix.

Coefficients are given highest degree first, as in numpy.poly / numpy.roots.
"""

from typing import Sequence

import numpy as np

from .eigen import ConvergenceError, calc_eigenvalues
from .schur import RealSchurDecomposition
from .utils import DEFAULT_NUM_ITERS, TOLERANCE


def _trim(coeffs: Sequence[float]) -> np.ndarray:
    c = np.atleast_1d(np.asarray(coeffs, dtype=float))
    if c.ndim != 1:
        raise ValueError("coefficients must be a 1-D sequence")
    nonzero = np.flatnonzero(c)
    if nonzero.size == 0 or nonzero[0] == c.size - 1:
        raise ValueError("polynomial must have degree at least 1")
    return c[nonzero[0] :]


def companion_matrix(coeffs: Sequence[float]) -> np.ndarray:
    """
    Upper Hessenberg companion matrix of the polynomial.

    First row -c[1:] / c[0], ones on the sub-diagonal; its characteristic
    polynomial is the monic version of the input.
    """
    c = _trim(coeffs)
    n = c.size - 1
    C = np.zeros((n, n))
    C[0, :] = -c[1:] / c[0]
    C[np.arange(1, n), np.arange(n - 1)] = 1.0
    return C


def poly_from_roots(roots: Sequence[complex]) -> np.ndarray:
    """Real coefficients of the monic polynomial with the given roots."""
    coeffs = np.poly(np.asarray(roots))
    if np.iscomplexobj(coeffs):
        raise ValueError("complex roots must come in conjugate pairs")
    return coeffs


def real_roots(
    coeffs: Sequence[float],
    num_iters: int = DEFAULT_NUM_ITERS,
    tolerance: float = TOLERANCE,
) -> np.ndarray:
    """Real parts of all roots (see calc_eigenvalues)."""
    return calc_eigenvalues(companion_matrix(coeffs), num_iters, tolerance)


def roots(coeffs: Sequence[float], num_iters: int = DEFAULT_NUM_ITERS) -> np.ndarray:
    """All roots as a complex array, conjugate pairs adjacent."""
    schur = RealSchurDecomposition(companion_matrix(coeffs), num_iters)
    if not schur.converged:
        raise ConvergenceError("roots", schur.iterations)
    return schur.eigenvalues()
