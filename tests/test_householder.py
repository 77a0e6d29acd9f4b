# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from eigenalg.householder import (
    apply_householder_from_left,
    apply_householder_from_right,
    householder_matrix,
    householder_vector,
    householder_vector_col,
    householder_vector_row,
    normalize_reflector,
)

A = np.array(
    [
        [1, 2, 3, 4],
        [5, 6, 7, 8],
        [3, 4, 2, -2],
        [3, 5, 1, 2],
    ],
    dtype=float,
)


def _reflect(v, x):
    return x - 2.0 * v * (v @ x)


def test_householder_vector_maps_onto_e1():
    x = np.array([3.0, 4.0, 0.0, 12.0])
    v = householder_vector(x)
    assert np.isclose(np.linalg.norm(v), 1.0)
    # rho = -sign(3) so the image is -13 e_0
    np.testing.assert_allclose(_reflect(v, x), [-13.0, 0.0, 0.0, 0.0], atol=1e-12)


def test_householder_vector_pivot():
    x = np.array([1.0, 2.0, -2.0])
    v = householder_vector(x, pivot=1)
    np.testing.assert_allclose(_reflect(v, x), [0.0, -3.0, 0.0], atol=1e-12)


def test_householder_vector_zero_pivot_entry():
    x = np.array([0.0, 3.0, 4.0])
    v = householder_vector(x)
    np.testing.assert_allclose(_reflect(v, x), [5.0, 0.0, 0.0], atol=1e-12)


def test_householder_vector_zero_input_falls_back_to_basis_vector():
    v = householder_vector(np.zeros(4), pivot=2)
    assert np.all(np.isfinite(v))
    np.testing.assert_array_equal(v, [0.0, 0.0, 1.0, 0.0])


def test_householder_vector_tiny_input():
    x = np.array([1e-200, 1e-200])
    v = householder_vector(x)
    assert np.all(np.isfinite(v))
    assert np.isclose(np.linalg.norm(v), 1.0)
    np.testing.assert_allclose(_reflect(v, x) / 1e-200, [-np.sqrt(2.0), 0.0], atol=1e-12)


def test_normalize_reflector_rescales_underflowing_vector():
    v = normalize_reflector(np.array([1e-170, 0.0, 2e-170]))
    np.testing.assert_allclose(v, np.array([1.0, 0.0, 2.0]) / np.sqrt(5.0))


def test_householder_vector_rejects_matrix():
    with pytest.raises(ValueError):
        householder_vector(np.eye(2))


def test_householder_matrix_is_orthogonal_and_symmetric():
    v = householder_vector(np.array([1.0, -2.0, 2.0]))
    H = householder_matrix(v, 1, 5)
    np.testing.assert_allclose(H.T @ H, np.eye(5), atol=1e-12)
    np.testing.assert_allclose(H, H.T)
    # identity outside the embedded block
    assert H[0, 0] == 1.0 and H[4, 4] == 1.0


def test_householder_matrix_bad_size():
    with pytest.raises(ValueError):
        householder_matrix(np.ones(3) / np.sqrt(3), 2, 4)


def test_apply_from_left_matches_explicit_product():
    rng = np.random.default_rng(0)
    M = rng.normal(size=(6, 4))
    v = householder_vector_col(M, 2, 1)
    expected = householder_matrix(v, 2, 6) @ M
    apply_householder_from_left(v, M, 2)
    np.testing.assert_allclose(M, expected, atol=1e-12)
    np.testing.assert_allclose(M[3:, 1], 0.0, atol=1e-12)


def test_apply_from_right_matches_explicit_product():
    rng = np.random.default_rng(1)
    M = rng.normal(size=(4, 6))
    v = householder_vector_row(M, 1, 2)
    expected = M @ householder_matrix(v, 2, 6)
    apply_householder_from_right(v, M, 2)
    np.testing.assert_allclose(M, expected, atol=1e-12)
    np.testing.assert_allclose(M[1, 3:], 0.0, atol=1e-12)


def test_apply_only_touches_requested_band():
    rng = np.random.default_rng(2)
    M = rng.normal(size=(6, 6))
    original = M.copy()
    v = householder_vector(rng.normal(size=3))
    apply_householder_from_left(v, M, 1, start=2, stop=5)
    np.testing.assert_array_equal(M[:, :2], original[:, :2])
    np.testing.assert_array_equal(M[:, 5:], original[:, 5:])
    np.testing.assert_array_equal(M[0], original[0])
    np.testing.assert_array_equal(M[4:], original[4:])
    expected = householder_matrix(v, 1, 6) @ original
    np.testing.assert_allclose(M[1:4, 2:5], expected[1:4, 2:5], atol=1e-12)


def test_householder_qr():
    R = A.copy()
    Q = np.eye(4)
    for col in range(3):
        norm = -np.sign(R[col, col]) * np.linalg.norm(R[col:, col])
        v = householder_vector_col(R, col, col)
        apply_householder_from_left(v, R, col)
        apply_householder_from_right(v, Q, col)
        assert np.isclose(R[col, col], norm)
        np.testing.assert_allclose(R[col + 1 :, col], 0.0, atol=1e-12)
    np.testing.assert_allclose(Q.T @ Q, np.eye(4), atol=1e-12)
    np.testing.assert_allclose(Q @ R, A, atol=1e-12)


def test_householder_lq():
    L = A.copy()
    Q = np.eye(4)
    for row in range(3):
        v = householder_vector_row(L, row, row)
        apply_householder_from_right(v, L, row)
        apply_householder_from_left(v, Q, row)
        np.testing.assert_allclose(L[row, row + 1 :], 0.0, atol=1e-12)
    np.testing.assert_allclose(Q.T @ Q, np.eye(4), atol=1e-12)
    np.testing.assert_allclose(L @ Q, A, atol=1e-12)


def test_householder_vector_col_bad_arguments():
    with pytest.raises(ValueError):
        householder_vector_col(A, 4, 0)
    with pytest.raises(ValueError):
        householder_vector_col(A, 2, 0, size=3)
    with pytest.raises(ValueError):
        householder_vector_row(A, 0, 2, size=3)
