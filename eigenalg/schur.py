# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Real Schur decomposition A = Q D Qᵀ by the Francis double-shift QR algorithm.

D is quasi-upper-triangular: upper triangular except for 2x2 diagonal
blocks that carry complex-conjugate eigenvalue pairs (or, for the leading
block and for blocks isolated two rows at a time, a pair of real ones).

Outline (Golub & Van Loan, Alg. 7.5.2):
    1. Reduce A to Hessenberg form H, accumulating Q.
    2. Repeatedly chase a 3x3 bulge down the trailing unreduced block of H
       with Householder reflectors, seeded by the first column of
       (H - σ₁I)(H - σ₂I) for the two shifts σ₁, σ₂, and finish with a
       Givens rotation on the last two rows.
    3. Deflate once a trailing sub-diagonal entry is negligible relative to
       its diagonal neighbours.
"""

import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from .givens import (
    apply_givens_from_left,
    apply_transpose_givens_from_right,
    givens,
)
from .hessenberg import make_hessenberg_inplace
from .householder import (
    apply_householder_from_left,
    apply_householder_from_right,
    householder_vector,
)
from .result import Converged, Factorization, NotConverged
from .utils import (
    DEFAULT_NUM_ITERS,
    SMALLEST_TOLERANCE,
    TOLERANCE,
    check_square,
    is_hessenberg,
    scale_tol,
    sign,
    zero_below_subdiagonal,
)

logger = logging.getLogger(__name__)

# Classical Francis exceptional shift (EISPACK hqr): every 10th sweep the
# shifts are replaced by roots built from 0.75·s and -0.4375·s², where
# s = |h[p, p-1]| + |h[p-1, p-2]|. Breaks the cycles plain double-shift QR
# falls into, e.g. on permutation matrices.
EXCEPTIONAL_SHIFT_PERIOD = 10
EXCEPTIONAL_SHIFT_COEFF = 0.75
EXCEPTIONAL_SHIFT_PRODUCT = -0.4375

# A sub-diagonal entry larger than this multiple of tolerance · ‖D‖∞ marks a 2x2 block.
COMPLEX_BLOCK_FACTOR = 10.0


def eigenvalues_2x2(a: float, b: float, c: float, d: float) -> Tuple[complex, complex]:
    """
    Eigenvalues of [[a, b], [c, d]].

    The discriminant trace² - 4·det is evaluated as (a - d)² + 4bc, which is
    the same quantity without the cancellation. Real pairs come back larger
    first, complex pairs with the positive imaginary part first.
    """
    half_trace = (a + d) / 2
    disc = (a - d) * (a - d) + 4.0 * b * c
    if disc >= 0:
        root = math.sqrt(disc) / 2
        return complex(half_trace + root), complex(half_trace - root)
    root = math.sqrt(-disc) / 2
    return complex(half_trace, root), complex(half_trace, -root)


def _negligible(H: np.ndarray, k: int, tol: float, fallback: float) -> bool:
    """Is H[k, k-1] negligible next to its diagonal neighbours?"""
    scale = abs(H[k - 1, k - 1]) + abs(H[k, k])
    if scale == 0.0:
        scale = fallback
    return abs(H[k, k - 1]) <= tol * scale


def _double_shift(H: np.ndarray, p: int, sweep: int) -> Tuple[float, float]:
    """
    Sum s and product t of the two shifts for the block ending at row p.

    Normally the eigenvalues of the trailing 2x2 block. When those are real
    both shifts are set to the one nearer h[p, p], which converges faster
    than two different real shifts.
    """
    q = p - 1
    hpp = H[p, p]
    hqq = H[q, q]
    hpqhqp = H[p, q] * H[q, p]
    if sweep % EXCEPTIONAL_SHIFT_PERIOD == 0:
        ex = abs(H[p, q]) + abs(H[q, q - 1])
        hpp = hpp + EXCEPTIONAL_SHIFT_COEFF * ex
        hqq = hpp
        hpqhqp = EXCEPTIONAL_SHIFT_PRODUCT * ex * ex
    else:
        disc = (hqq - hpp) / 2
        disc = disc * disc + hpqhqp
        if disc > 0:
            disc = math.sqrt(disc)
            average = (hqq + hpp) / 2
            larger = sign(average) * disc + average
            if abs(hqq) > abs(hpp):
                # smaller root via det / larger root, avoids cancellation
                hpp = (hqq * hpp - hpqhqp) / larger
            else:
                hpp = larger
            hqq = hpp
            hpqhqp = 0.0
    return hqq + hpp, hqq * hpp - hpqhqp


def _francis_sweep(
    H: np.ndarray, Q: Optional[np.ndarray], lo: int, p: int, s: float, t: float
) -> None:
    """
    One implicit double-shift QR step on the unreduced block H[lo:p+1, lo:p+1].

    Rows are updated up to the last column and columns from row 0 so the
    whole of H stays similar to the input; Q (if given) collects every
    transformation from the right.
    """
    q = p - 1
    x = H[lo, lo] * H[lo, lo] + H[lo, lo + 1] * H[lo + 1, lo] - s * H[lo, lo] + t
    y = H[lo + 1, lo] * (H[lo, lo] + H[lo + 1, lo + 1] - s)
    z = H[lo + 1, lo] * H[lo + 2, lo + 1]
    for k in range(lo, p - 1):
        v = householder_vector(np.array([x, y, z]))
        apply_householder_from_left(v, H, k, start=max(lo, k - 1))
        apply_householder_from_right(v, H, k, stop=min(k + 3, p) + 1)
        if Q is not None:
            apply_householder_from_right(v, Q, k)
        if k > lo:
            # the reflector maps (x, y, z) of column k-1 onto e_1
            H[k + 1, k - 1] = 0.0
            H[k + 2, k - 1] = 0.0
        x = H[k + 1, k]
        y = H[k + 2, k]
        if k < p - 2:
            z = H[k + 3, k]

    rot = givens(x, y)
    apply_givens_from_left(H, rot, q, p, start=p - 2)
    apply_transpose_givens_from_right(H, rot, q, p, stop=p + 1)
    if Q is not None:
        apply_transpose_givens_from_right(Q, rot, q, p)
    H[p, p - 2] = 0.0


def francis_qr(
    H: np.ndarray,
    Q: Optional[np.ndarray],
    num_iters: int,
    tolerance: float,
) -> Tuple[int, int]:
    """
    Iterate Francis sweeps on the Hessenberg matrix H in place.

    Returns (p, sweeps): the last row of the block still undeflated when the
    loop stopped and the number of sweeps spent. p <= 1 means H is
    quasi-triangular.
    """
    n = H.shape[0]
    fallback = np.linalg.norm(H, ord=np.inf)
    p = n - 1
    it = 0
    while p > 1:
        lo = p
        while lo > 0 and not _negligible(H, lo, tolerance, fallback):
            lo -= 1
        if lo > 0:
            H[lo, lo - 1] = 0.0
        if lo >= p - 1:
            # trailing 1x1 or 2x2 block already isolated
            p = lo - 1
            continue
        if it >= num_iters:
            break

        s, t = _double_shift(H, p, it)
        _francis_sweep(H, Q, lo, p, s, t)
        it += 1

        q = p - 1
        if _negligible(H, p, tolerance, fallback):
            H[p, q] = 0.0
            p = q
        elif _negligible(H, q, tolerance, fallback):
            H[q, q - 1] = 0.0
            p = q - 1
    return p, it


def block_eigenvalues(D: np.ndarray, tolerance: float) -> List[complex]:
    """Eigenvalues read off the 1x1 and 2x2 diagonal blocks of D."""
    n = D.shape[0]
    threshold = scale_tol(D, COMPLEX_BLOCK_FACTOR * tolerance)
    eigenvalues: List[complex] = [0j] * n
    for i in range(n):
        if i > 0 and abs(D[i, i - 1]) > threshold:
            eigenvalues[i - 1], eigenvalues[i] = eigenvalues_2x2(
                D[i - 1, i - 1], D[i - 1, i], D[i, i - 1], D[i, i]
            )
        else:
            eigenvalues[i] = complex(D[i, i])
    return eigenvalues


class RealSchurDecomposition:
    """
    Q - orthogonal matrix, D - quasi-upper-triangular matrix, A = Q D Qᵀ.

    Non-convergence is not an error: D and Q then hold the partially
    deflated state (still an exact similarity up to rounding) and
    `converged` is False.

    Example
    -------
    >>> import numpy as np
    >>> schur = RealSchurDecomposition(np.array([[1.0, 2.0], [2.0, 1.0]]))
    >>> sorted(schur.real_eigenvalues().tolist())
    [-1.0, 3.0]
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
        D = np.array(A, dtype=float, copy=True)
        check_square(D)
        n = D.shape[0]
        Q = np.eye(n)
        self._q = self._d = self._result = None

        if n < 3:
            p, sweeps = 0, 0
        else:
            if is_hessenberg(D, scale_tol(D, SMALLEST_TOLERANCE)):
                zero_below_subdiagonal(D)
            else:
                make_hessenberg_inplace(D, Q)
                # reduction gives H = Q A Qᵀ, the decomposition wants A = Q H Qᵀ
                Q = np.ascontiguousarray(Q.T)
            p, sweeps = francis_qr(D, Q, num_iters, self.tolerance)

        self._q, self._d = Q, D
        if p <= 1:
            logger.debug(f"Schur decomposition of order {n} converged in {sweeps} sweeps")
            self._result = Converged(Q, D, sweeps)
        else:
            logger.debug(
                f"Schur decomposition of order {n} did not converge in {sweeps} sweeps, "
                f"active block ends at row {p}"
            )
            self._result = NotConverged(Q, D, sweeps, p)
        return self._result

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

    def _require_factorized(self) -> np.ndarray:
        if self._d is None:
            raise ValueError("factorize() has not been called")
        return self._d

    def real_eigenvalues(self) -> np.ndarray:
        """Real parts of the n eigenvalues, one per diagonal position."""
        D = self._require_factorized()
        return np.array([ev.real for ev in block_eigenvalues(D, self.tolerance)])

    def eigenvalues(self) -> np.ndarray:
        """The n eigenvalues as a complex array; conjugate pairs are adjacent."""
        D = self._require_factorized()
        return np.array(block_eigenvalues(D, self.tolerance), dtype=complex)
