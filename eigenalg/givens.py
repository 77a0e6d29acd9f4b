# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Plane rotations.

A rotation acting on the index pair (i, k) is

    G = [[c, -s],
         [s,  c]]

so G applied from the left replaces rows i, k by c·row_i - s·row_k and
s·row_i + c·row_k. `givens(a, b)` picks (c, s) such that G [a, b]ᵀ = [r, 0]ᵀ.
"""

import math
from typing import NamedTuple, Optional, Tuple

import numpy as np


class GivensRotation(NamedTuple):
    c: float
    s: float
    r: float


def givens(a: float, b: float) -> GivensRotation:
    """
    Rotation zeroing b against a: c·a - s·b = r and s·a + c·b = 0.

    Follows Golub & Van Loan (Alg. 5.1.3), dividing by the larger of |a|, |b|
    so neither a == 0 nor b == 0 divides by zero.
    """
    if b == 0:
        return GivensRotation(1.0, 0.0, a)
    if abs(b) > abs(a):
        tau = -a / b
        s = 1.0 / math.sqrt(1.0 + tau * tau)
        c = s * tau
    else:
        tau = -b / a
        c = 1.0 / math.sqrt(1.0 + tau * tau)
        s = c * tau
    return GivensRotation(c, s, c * a - s * b)


def apply_givens_from_left(
    A: np.ndarray,
    rot: GivensRotation,
    i: int,
    k: int,
    start: int = 0,
    stop: Optional[int] = None,
) -> None:
    """Rows i, k of A[:, start:stop] <- G · rows, in place."""
    c, s = rot.c, rot.s
    row_i = A[i, start:stop].copy()
    row_k = A[k, start:stop]
    A[i, start:stop] = c * row_i - s * row_k
    A[k, start:stop] = s * row_i + c * row_k


def apply_transpose_givens_from_left(
    A: np.ndarray,
    rot: GivensRotation,
    i: int,
    k: int,
    start: int = 0,
    stop: Optional[int] = None,
) -> None:
    """Rows i, k of A[:, start:stop] <- Gᵀ · rows, in place."""
    apply_givens_from_left(A, GivensRotation(rot.c, -rot.s, rot.r), i, k, start, stop)


def apply_givens_from_right(
    A: np.ndarray,
    rot: GivensRotation,
    i: int,
    k: int,
    start: int = 0,
    stop: Optional[int] = None,
) -> None:
    """Columns i, k of A[start:stop, :] <- columns · G, in place."""
    c, s = rot.c, rot.s
    col_i = A[start:stop, i].copy()
    col_k = A[start:stop, k]
    A[start:stop, i] = c * col_i + s * col_k
    A[start:stop, k] = c * col_k - s * col_i


def apply_transpose_givens_from_right(
    A: np.ndarray,
    rot: GivensRotation,
    i: int,
    k: int,
    start: int = 0,
    stop: Optional[int] = None,
) -> None:
    """Columns i, k of A[start:stop, :] <- columns · Gᵀ, in place."""
    apply_givens_from_right(A, GivensRotation(rot.c, -rot.s, rot.r), i, k, start, stop)


def givens_matrix(rot: GivensRotation, size: int, i: int, k: int) -> np.ndarray:
    """Explicit G embedded in the identity of order size."""
    if not (0 <= i < size and 0 <= k < size) or i == k:
        raise ValueError("Incorrect rotation indices")
    G = np.eye(size)
    G[i, i] = rot.c
    G[i, k] = -rot.s
    G[k, i] = rot.s
    G[k, k] = rot.c
    return G


def jacobi_rotation(a1: float, a2: float, b: float) -> Tuple[float, float]:
    """
    Compute c = cos(theta), s = sin(theta) such that

        [c -s] [a1 b] [ c s]   [d1  0]
        [s  c] [b a2] [-s c] = [ 0 d2]

    b == 0 is already diagonal and returns the identity rotation.
    """
    if b == 0:
        return 1.0, 0.0
    beta = (a2 - a1) / (2.0 * b)
    t = math.copysign(1.0, beta) / (abs(beta) + math.sqrt(beta * beta + 1.0))
    c = 1.0 / math.sqrt(t * t + 1.0)
    return c, c * t
