# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Householder reflections.

A reflector is stored as its unit vector v only; H = I - 2 v vᵀ is never
formed by the solvers. The apply functions update a band of rows / columns
in place so a step of a reduction costs O(|v| · band) instead of a dense
matrix product.
"""

from typing import Optional

import numpy as np

from .utils import SMALLEST_TOLERANCE, sign


def normalize_reflector(v: np.ndarray, pivot: int = 0) -> np.ndarray:
    """
    Scale v to unit length in place and return it.

    A zero vector becomes e_pivot (H is then a plain sign flip, still
    orthogonal). A vector too small to square safely is first divided by
    its largest component.
    """
    scale = np.max(np.abs(v)) if v.size else 0.0
    if scale == 0.0:
        v[:] = 0.0
        v[pivot] = 1.0
        return v
    length = np.linalg.norm(v)
    if length < SMALLEST_TOLERANCE:
        v /= scale
        length = np.linalg.norm(v)
    v /= length
    return v


def householder_vector(x: np.ndarray, pivot: int = 0) -> np.ndarray:
    """
    Unit vector v with (I - 2 v vᵀ) x = ρ ‖x‖ e_pivot.

    ρ = -sign(x[pivot]) (ρ = +1 when x[pivot] == 0) so that building
    v[pivot] = x[pivot] - ρ‖x‖ never subtracts two close numbers.
    """
    v = np.array(x, dtype=float, copy=True)
    if v.ndim != 1:
        raise ValueError("x must be a 1-D vector")
    if not 0 <= pivot < v.size:
        raise ValueError(f"pivot {pivot} out of range for a vector of size {v.size}")
    scale = np.max(np.abs(v))
    if scale == 0.0:
        return normalize_reflector(v, pivot)
    # ‖x‖ of a tiny x would underflow
    v /= scale
    x_pivot = v[pivot]
    rho = 1.0 if x_pivot == 0 else -sign(x_pivot)
    v[pivot] -= rho * np.linalg.norm(v)
    return normalize_reflector(v, pivot)


def householder_vector_col(
    A: np.ndarray, row: int, col: int, size: Optional[int] = None, pivot: int = 0
) -> np.ndarray:
    """Reflector for the sub-column A[row:row+size, col]."""
    m = A.shape[0]
    if not 0 <= row < m:
        raise ValueError("Incorrect row")
    if size is None:
        size = m - row
    elif size > m - row:
        raise ValueError("Incorrect size")
    return householder_vector(A[row : row + size, col], pivot)


def householder_vector_row(
    A: np.ndarray, row: int, col: int, size: Optional[int] = None, pivot: int = 0
) -> np.ndarray:
    """Reflector for the sub-row A[row, col:col+size]."""
    n = A.shape[1]
    if not 0 <= col < n:
        raise ValueError("Incorrect column")
    if size is None:
        size = n - col
    elif size > n - col:
        raise ValueError("Incorrect size")
    return householder_vector(A[row, col : col + size], pivot)


def apply_householder_from_left(
    v: np.ndarray,
    A: np.ndarray,
    idx: int,
    start: int = 0,
    stop: Optional[int] = None,
) -> None:
    """A[idx:idx+m, start:stop] <- H · A[idx:idx+m, start:stop], in place."""
    block = A[idx : idx + v.size, start:stop]
    block -= 2.0 * np.outer(v, v @ block)


def apply_householder_from_right(
    v: np.ndarray,
    A: np.ndarray,
    idx: int,
    start: int = 0,
    stop: Optional[int] = None,
) -> None:
    """A[start:stop, idx:idx+m] <- A[start:stop, idx:idx+m] · H, in place."""
    block = A[start:stop, idx : idx + v.size]
    block -= 2.0 * np.outer(block @ v, v)


def householder_matrix(v: np.ndarray, start: int, size: int) -> np.ndarray:
    """Explicit reflector I - 2 v vᵀ embedded at [start, start+|v|) of I_size."""
    if size < start + v.size:
        raise ValueError("Incorrect sizes")
    H = np.eye(size)
    H[start : start + v.size, start : start + v.size] -= 2.0 * np.outer(v, v)
    return H
