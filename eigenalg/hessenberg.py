# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Optional, Tuple, Union

import numpy as np

from .householder import (
    apply_householder_from_left,
    apply_householder_from_right,
    householder_vector,
)
from .utils import check_square, zero_below_subdiagonal


def make_hessenberg_inplace(A: np.ndarray, Q: Optional[np.ndarray] = None) -> None:
    """
    Reduce the square matrix A to upper Hessenberg form in place.

    Step i reflects A[i+1:, i] onto a multiple of e_1 with H_i and replaces
    A by H_i A H_i. When Q is given it is replaced by H_i Q at every step,
    so starting from Q = I the result satisfies A_out = Q A_in Qᵀ.

    Entries below the first sub-diagonal are set to exactly 0 on return.
    """
    check_square(A)
    n = A.shape[0]
    for i in range(n - 2):
        x = A[i + 1 :, i]
        if not np.any(x[1:]):
            # column already reduced
            continue
        v = householder_vector(x)
        # columns < i are zero in rows i+1.. (already reduced)
        apply_householder_from_left(v, A, i + 1, start=i)
        apply_householder_from_right(v, A, i + 1)
        if Q is not None:
            apply_householder_from_left(v, Q, i + 1)
    zero_below_subdiagonal(A)


def hessenberg(
    A: np.ndarray, calc_q: bool = True
) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    """
    Hessenberg form H = Q A Qᵀ of a square matrix.

    Parameters
    ----------
    A : (n, n) ndarray
        Input matrix, left untouched.
    calc_q : bool
        Also return the orthogonal factor Q.

    Returns
    -------
    H : (n, n) ndarray
        Upper Hessenberg, exactly zero below the first sub-diagonal.
    Q : (n, n) ndarray
        Only when calc_q is True.
    """
    H = np.array(A, dtype=float, copy=True)
    check_square(H)
    Q = np.eye(H.shape[0]) if calc_q else None
    make_hessenberg_inplace(H, Q)
    return (H, Q) if calc_q else H


def make_tridiagonal_inplace(T: np.ndarray, Q: Optional[np.ndarray] = None) -> None:
    """
    Reduce a symmetric matrix to tridiagonal form in place.

    Same reflections as make_hessenberg_inplace; afterwards everything outside
    the band is exactly 0 and the band is made exactly symmetric (the
    super-diagonal is replaced by the mean of both off-diagonals).
    """
    make_hessenberg_inplace(T, Q)
    symmetrize_band(T)


def symmetrize_band(T: np.ndarray) -> None:
    """Zero T outside its tridiagonal band and make the band exactly symmetric."""
    n = T.shape[0]
    zero_below_subdiagonal(T)
    off = (np.diag(T, -1) + np.diag(T, 1)) / 2
    rows, cols = np.triu_indices(n, 2)
    T[rows, cols] = 0.0
    idx = np.arange(n - 1)
    T[idx + 1, idx] = off
    T[idx, idx + 1] = off


def tridiagonal(
    A: np.ndarray, calc_q: bool = True
) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    """Tridiagonal form T = Q A Qᵀ of a symmetric matrix (see `hessenberg`)."""
    T = np.array(A, dtype=float, copy=True)
    check_square(T)
    Q = np.eye(T.shape[0]) if calc_q else None
    make_tridiagonal_inplace(T, Q)
    return (T, Q) if calc_q else T
