# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Sequence

import numpy as np

# Relative threshold for deflating a sub-diagonal entry.
TOLERANCE: float = 1e-10
SMALL_TOLERANCE: float = 1e-8
# Loosest comparison against zero: structure checks, reflector underflow.
# Structure and symmetry thresholds are relative, see scale_tol.
SMALLEST_TOLERANCE: float = 1e-14

DEFAULT_NUM_ITERS: int = 100


def scale_tol(A: np.ndarray, tol: float) -> float:
    """
    Absolute threshold tol · ‖A‖∞.

    No lower bound: a matrix with entries around 1e-150 gets a threshold
    around 1e-150 · tol, and the zero matrix gets 0 (exact comparison).
    """
    return tol * np.linalg.norm(A, ord=np.inf)


def sign(x: float) -> float:
    """Sign of x with sign(0) == +1, so it can always be used as a factor."""
    return -1.0 if x < 0 else 1.0


def check_square(A: np.ndarray, name: str = "A") -> None:
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"{name} must be a square matrix, got shape {A.shape}")


def is_square(A: np.ndarray) -> bool:
    return A.ndim == 2 and A.shape[0] == A.shape[1]


def is_symmetric(A: np.ndarray, tol: float = SMALL_TOLERANCE) -> bool:
    if not is_square(A):
        return False
    return bool(np.all(np.abs(A - A.T) <= tol))


def is_hessenberg(A: np.ndarray, tol: float = SMALLEST_TOLERANCE) -> bool:
    """True if every entry below the first sub-diagonal is within tol of 0."""
    if not is_square(A):
        return False
    return bool(np.all(np.abs(np.tril(A, -2)) <= tol))


def is_tridiagonal(A: np.ndarray, tol: float = SMALLEST_TOLERANCE) -> bool:
    if not is_square(A):
        return False
    return bool(
        np.all(np.abs(np.tril(A, -2)) <= tol) and np.all(np.abs(np.triu(A, 2)) <= tol)
    )


def is_quasi_triangular(A: np.ndarray, tol: float = 0.0) -> bool:
    """
    True if A is block upper-triangular with 1x1 and 2x2 diagonal blocks,
    i.e. Hessenberg with no two consecutive non-zero sub-diagonal entries.
    """
    if not is_hessenberg(A, tol):
        return False
    sub = np.abs(np.diag(A, -1)) > tol
    return not bool(np.any(sub[1:] & sub[:-1]))


def is_orthogonal(Q: np.ndarray, tol: float = SMALL_TOLERANCE) -> bool:
    if not is_square(Q):
        return False
    return bool(np.max(np.abs(Q.T @ Q - np.eye(Q.shape[0]))) <= tol)


def random_orthogonal(n: int, seed=None) -> np.ndarray:
    """Random orthogonal matrix from the QR factor of a Gaussian matrix."""
    rng = np.random.default_rng(seed)
    Q, R = np.linalg.qr(rng.standard_normal((n, n)))
    # fix column signs so the distribution does not depend on the QR sign convention
    return Q * np.where(np.diag(R) < 0, -1.0, 1.0)


def random_symmetric(n: int, low=-10.0, high=10.0, seed=None) -> np.ndarray:
    rng = np.random.default_rng(seed)
    M = rng.uniform(low, high, size=(n, n))
    return (M + M.T) / 2


def random_with_eigenvalues(
    eigenvalues: Sequence[float], seed=None, symmetric: bool = False
) -> np.ndarray:
    """
    Build a matrix with a prescribed real spectrum.

    symmetric=True gives Q diag(eigs) Qᵀ; otherwise a similarity with a
    random, well conditioned upper-triangular factor is used so the result
    is non-normal.
    """
    eigs = np.asarray(eigenvalues, dtype=float)
    n = eigs.size
    Q = random_orthogonal(n, seed)
    if symmetric:
        return Q @ np.diag(eigs) @ Q.T
    rng = np.random.default_rng(None if seed is None else seed + 1)
    T = np.diag(eigs) + np.triu(rng.uniform(-1.0, 1.0, size=(n, n)), 1)
    return Q @ T @ Q.T


def hilbert(n: int) -> np.ndarray:
    """Hilbert matrix H[i, j] = 1 / (i + j + 1)."""
    idx = np.arange(n, dtype=float)
    return 1.0 / (idx[:, None] + idx[None, :] + 1.0)


def zero_below_subdiagonal(A: np.ndarray, k: int = 2) -> None:
    """Set every entry of A on or below the k-th sub-diagonal to exactly 0."""
    rows, cols = np.tril_indices(A.shape[0], -k, A.shape[1])
    A[rows, cols] = 0.0
