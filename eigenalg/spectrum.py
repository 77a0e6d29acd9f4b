# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Optional

import numpy as np

from .schur import RealSchurDecomposition
from .symmetric import SymmetricEigendecomposition
from .utils import SMALL_TOLERANCE, check_square, is_symmetric, scale_tol

logger = logging.getLogger(__name__)


class MatrixSpectrum:
    """
    Spectral quantities of a square matrix.

    Symmetric input goes through SymmetricEigendecomposition, everything
    else (and symmetric input the symmetric engine could not finish) through
    RealSchurDecomposition. If neither converges the answer is nan.
    """

    @staticmethod
    def _eigenvalues(A: np.ndarray, num_iters: int) -> Optional[np.ndarray]:
        A = np.asarray(A, dtype=float)
        check_square(A)
        if is_symmetric(A, scale_tol(A, SMALL_TOLERANCE)):
            solver = SymmetricEigendecomposition(A, num_iters)
            if solver.D is not None:
                return solver.D
        schur = RealSchurDecomposition(A, num_iters)
        if schur.converged:
            return schur.eigenvalues()
        logger.warning(
            f"no eigendecomposition of the {A.shape[0]}x{A.shape[0]} matrix "
            f"converged in {num_iters} iterations"
        )
        return None

    @staticmethod
    def condition_number(A: np.ndarray, num_iters: int = 20) -> float:
        """max |λ| / min |λ|; inf for a singular matrix."""
        eigenvalues = MatrixSpectrum._eigenvalues(A, num_iters)
        if eigenvalues is None:
            return float("nan")
        magnitudes = np.abs(eigenvalues)
        smallest = magnitudes.min()
        if smallest == 0:
            return float("inf")
        return float(magnitudes.max() / smallest)

    @staticmethod
    def spectral_radius(A: np.ndarray, num_iters: int = 20) -> float:
        """max |λ|."""
        eigenvalues = MatrixSpectrum._eigenvalues(A, num_iters)
        if eigenvalues is None:
            return float("nan")
        return float(np.max(np.abs(eigenvalues)))


def condition_number(A: np.ndarray, num_iters: int = 20) -> float:
    return MatrixSpectrum.condition_number(A, num_iters)


def spectral_radius(A: np.ndarray, num_iters: int = 20) -> float:
    return MatrixSpectrum.spectral_radius(A, num_iters)
