# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from eigenalg.givens import (
    GivensRotation,
    apply_givens_from_left,
    apply_givens_from_right,
    apply_transpose_givens_from_left,
    apply_transpose_givens_from_right,
    givens,
    givens_matrix,
    jacobi_rotation,
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


@pytest.mark.parametrize("a,b", [(3.0, 4.0), (-4.0, 3.0), (1e-3, -7.0), (5.0, 1e-9)])
def test_givens_zeroes_second_entry(a, b):
    c, s, r = givens(a, b)
    assert np.isclose(c * c + s * s, 1.0)
    assert np.isclose(c * a - s * b, r)
    assert abs(s * a + c * b) < 1e-12
    assert np.isclose(abs(r), np.hypot(a, b))


def test_givens_degenerate_inputs():
    assert givens(2.5, 0.0) == GivensRotation(1.0, 0.0, 2.5)
    assert givens(0.0, 0.0) == GivensRotation(1.0, 0.0, 0.0)
    c, s, r = givens(0.0, 3.0)
    assert c == 0.0
    assert abs(s) == 1.0
    assert abs(r) == 3.0
    assert s * 0.0 + c * 3.0 == 0.0


def test_givens_matrix_is_orthogonal():
    G = givens_matrix(givens(1.0, 2.0), 5, 1, 3)
    np.testing.assert_allclose(G.T @ G, np.eye(5), atol=1e-12)
    with pytest.raises(ValueError):
        givens_matrix(givens(1.0, 2.0), 5, 2, 2)


@pytest.mark.parametrize(
    "apply,explicit",
    [
        (apply_givens_from_left, lambda G, M: G @ M),
        (apply_transpose_givens_from_left, lambda G, M: G.T @ M),
        (apply_givens_from_right, lambda G, M: M @ G),
        (apply_transpose_givens_from_right, lambda G, M: M @ G.T),
    ],
)
def test_implicit_application_matches_explicit(apply, explicit):
    rng = np.random.default_rng(3)
    M = rng.normal(size=(5, 5))
    rot = givens(rng.normal(), rng.normal())
    G = givens_matrix(rot, 5, 1, 4)
    expected = explicit(G, M)
    apply(M, rot, 1, 4)
    np.testing.assert_allclose(M, expected, atol=1e-12)


def test_apply_respects_bounds():
    M = np.arange(25, dtype=float).reshape(5, 5)
    original = M.copy()
    apply_givens_from_left(M, givens(1.0, 1.0), 0, 2, start=3)
    np.testing.assert_array_equal(M[:, :3], original[:, :3])
    np.testing.assert_array_equal(M[[1, 3, 4]], original[[1, 3, 4]])

    M = original.copy()
    apply_givens_from_right(M, givens(1.0, 1.0), 0, 2, stop=2)
    np.testing.assert_array_equal(M[2:], original[2:])
    np.testing.assert_array_equal(M[:, [1, 3, 4]], original[:, [1, 3, 4]])


def test_givens_qr():
    R = A.copy()
    Q = np.eye(4)
    for col in range(4):
        for row in range(3, col, -1):
            rot = givens(R[col, col], R[row, col])
            apply_givens_from_left(R, rot, col, row)
            apply_transpose_givens_from_right(Q, rot, col, row)
            assert np.isclose(R[col, col], rot.r)
            assert abs(R[row, col]) < 1e-12
    np.testing.assert_allclose(np.tril(R, -1), 0.0, atol=1e-12)
    np.testing.assert_allclose(Q.T @ Q, np.eye(4), atol=1e-12)
    np.testing.assert_allclose(Q @ R, A, atol=1e-12)


def test_givens_rq():
    R = A.copy()
    Q = np.eye(4)
    for row in range(3, -1, -1):
        for col in range(row):
            rot = givens(R[row, row], R[row, col])
            apply_transpose_givens_from_right(R, rot, row, col)
            apply_givens_from_left(Q, rot, row, col)
            assert abs(R[row, col]) < 1e-12
    np.testing.assert_allclose(np.tril(R, -1), 0.0, atol=1e-12)
    np.testing.assert_allclose(R @ Q, A, atol=1e-12)


def test_jacobi_diagonalises():
    a1, a2, b = 2.0, 1.0, 11.0
    c, s = jacobi_rotation(a1, a2, b)
    assert np.isclose(c * c + s * s, 1.0)
    assert abs(b * (c * c - s * s) + (a1 - a2) * c * s) < 1e-12
    G = np.array([[c, -s], [s, c]])
    D = G @ np.array([[a1, b], [b, a2]]) @ G.T
    assert abs(D[0, 1]) < 1e-12 and abs(D[1, 0]) < 1e-12
    np.testing.assert_allclose(
        np.sort(np.diag(D)), np.linalg.eigvalsh([[a1, b], [b, a2]]), atol=1e-12
    )


def test_jacobi_equal_diagonal():
    c, s = jacobi_rotation(1.0, 1.0, 1.0)
    assert np.isclose(abs(c), np.sqrt(0.5))
    assert np.isclose(abs(s), np.sqrt(0.5))
    G = np.array([[c, -s], [s, c]])
    D = G @ np.array([[1.0, 1.0], [1.0, 1.0]]) @ G.T
    assert abs(D[0, 1]) < 1e-12


def test_jacobi_already_diagonal():
    assert jacobi_rotation(3.0, -1.0, 0.0) == (1.0, 0.0)
