# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
import math
from typing import Optional

import numpy as np

from .givens import GivensRotation, apply_transpose_givens_from_right, givens, jacobi_rotation
from .hessenberg import make_tridiagonal_inplace, symmetrize_band
from .result import Converged, Factorization, NotConverged
from .utils import (
    DEFAULT_NUM_ITERS,
    SMALL_TOLERANCE,
    SMALLEST_TOLERANCE,
    TOLERANCE,
    check_square,
    is_symmetric,
    is_tridiagonal,
    scale_tol,
    sign,
)

logger = logging.getLogger(__name__)


def wilkinson_shift(app: float, aqq: float, bpq: float) -> float:
    """
    Eigenvalue of [[aqq, bpq], [bpq, app]] closer to app.

    d == 0 (both roots equally close) is handled separately since the
    general formula would divide by bpq alone.
    """
    d = (aqq - app) / 2
    if d == 0:
        return app - abs(bpq)
    return app - bpq * bpq / (d + sign(d) * math.sqrt(d * d + bpq * bpq))


class SymmetricEigendecomposition:
    """
    Q - orthogonal matrix, D - vector of eigenvalues of A, A = Q diag(D) Qᵀ.

    Symmetric matrices only have real eigenvalues, so a single-shift
    implicit QR sweep of Givens rotations over the tridiagonal form is
    enough. If the sweep budget runs out, Q and D are None and `result`
    holds the partially reduced tridiagonal matrix instead.
    """

    def __init__(
        self,
        A: Optional[np.ndarray] = None,
        num_iters: int = DEFAULT_NUM_ITERS,
        tolerance: float = TOLERANCE,
    ):
        self.tolerance = tolerance
        self._q: Optional[np.ndarray] = None
        self._d: Optional[np.ndarray] = None
        self._result: Optional[Factorization] = None
        if A is not None:
            self.factorize(A, num_iters)

    def factorize(self, A: np.ndarray, num_iters: int = DEFAULT_NUM_ITERS) -> Factorization:
        T = np.array(A, dtype=float, copy=True)
        check_square(T)
        if not is_symmetric(T, scale_tol(T, SMALL_TOLERANCE)):
            raise ValueError("SymmetricEigendecomposition requires a symmetric matrix")
        n = T.shape[0]
        Q = np.eye(n)
        self._q = self._d = self._result = None

        if is_tridiagonal(T, scale_tol(T, SMALLEST_TOLERANCE)):
            symmetrize_band(T)
        else:
            make_tridiagonal_inplace(T, Q)
            Q = np.ascontiguousarray(Q.T)

        fallback = np.linalg.norm(T, ord=np.inf)
        p = n - 1
        it = 0
        while p > 0:
            lo = p
            while lo > 0 and not self._negligible(T, lo, fallback):
                lo -= 1
            if lo > 0:
                T[lo, lo - 1] = T[lo - 1, lo] = 0.0
            if lo == p:
                p -= 1
                continue
            if it >= num_iters:
                break
            self._sweep(T, Q, lo, p)
            it += 1
            if self._negligible(T, p, fallback):
                T[p, p - 1] = T[p - 1, p] = 0.0
                p -= 1

        if p > 0:
            logger.debug(
                f"Symmetric eigendecomposition of order {n} did not converge in {it} sweeps"
            )
            self._result = NotConverged(Q, T, it, p)
            return self._result

        logger.debug(f"Symmetric eigendecomposition of order {n} converged in {it} sweeps")
        self._q = Q
        self._d = np.diag(T).copy()
        self._result = Converged(self._q, self._d, it)
        return self._result

    def _negligible(self, T: np.ndarray, k: int, fallback: float) -> bool:
        scale = abs(T[k - 1, k - 1]) + abs(T[k, k])
        if scale == 0.0:
            scale = fallback
        return abs(T[k, k - 1]) <= self.tolerance * scale

    @staticmethod
    def _sweep(T: np.ndarray, Q: np.ndarray, lo: int, p: int) -> None:
        """
        One implicit single-shift step on the unreduced block T[lo:p+1, lo:p+1].

        The first rotation is taken from the first column of T - σI, each
        following one pushes the bulge T[k+1, k-1] one row down. A 2x2 block
        is diagonalised directly by a Jacobi rotation.
        """
        q = p - 1
        shift = wilkinson_shift(T[p, p], T[q, q], T[p, q])
        x = T[lo, lo] - shift
        y = T[lo + 1, lo]
        for k in range(lo, p):
            if p - lo > 1:
                c, s, _ = givens(x, y)
            else:
                c, s = jacobi_rotation(T[lo, lo], T[lo + 1, lo + 1], y)
            w = c * x - s * y
            t = T[k, k] - T[k + 1, k + 1]
            z = (2 * c * T[k + 1, k] + s * t) * s
            T[k, k] -= z
            T[k + 1, k + 1] += z
            T[k + 1, k] = T[k, k + 1] = t * c * s + (c * c - s * s) * T[k + 1, k]
            x = T[k + 1, k]
            if k > lo:
                T[k, k - 1] = T[k - 1, k] = w
            if k < q:
                y = -s * T[k + 2, k + 1]
                T[k + 2, k + 1] = T[k + 1, k + 2] = c * T[k + 2, k + 1]
            apply_transpose_givens_from_right(Q, GivensRotation(c, s, w), k, k + 1)

    @property
    def D(self) -> Optional[np.ndarray]:
        return self._d

    @property
    def Q(self) -> Optional[np.ndarray]:
        return self._q

    @property
    def result(self) -> Optional[Factorization]:
        return self._result

    @property
    def converged(self) -> bool:
        return self._result is not None and self._result.converged

    @property
    def iterations(self) -> int:
        return 0 if self._result is None else self._result.iterations
