# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
eigenalg
========

Dense eigenvalue solvers written on top of NumPy arrays: Householder and
Givens primitives, Hessenberg / tridiagonal reduction, the Francis
double-shift QR algorithm for the real Schur form and implicit-shift QR for
symmetric matrices.

Public API
~~~~~~~~~~
- Decompositions
    - `RealSchurDecomposition`, `SymmetricEigendecomposition`
    - `hessenberg`, `tridiagonal`
- Eigenvalues
    - `calc_eigenvalues`, `MatrixSpectrum`
    - `condition_number`, `spectral_radius`
- Polynomials
    - `companion_matrix`, `roots`, `real_roots`
- Primitives
    - `householder_vector`, `apply_householder_from_left`,
      `apply_householder_from_right`
    - `givens`, `jacobi_rotation` and the `apply_*givens*` family

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import numpy as np, eigenalg as ea
>>> A = np.random.randn(5, 5)
>>> schur = ea.RealSchurDecomposition(A)
>>> np.allclose(schur.Q @ schur.D @ schur.Q.T, A)
True
"""

from importlib.metadata import version as _pkg_version

# ---------------------------------------------------------------------
# Re-export the high-level functions users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .eigen import ConvergenceError, calc_eigenvalues
from .givens import (
    GivensRotation,
    apply_givens_from_left,
    apply_givens_from_right,
    apply_transpose_givens_from_left,
    apply_transpose_givens_from_right,
    givens,
    jacobi_rotation,
)
from .hessenberg import (
    hessenberg,
    make_hessenberg_inplace,
    make_tridiagonal_inplace,
    tridiagonal,
)
from .householder import (
    apply_householder_from_left,
    apply_householder_from_right,
    householder_vector,
)
from .polynomial import companion_matrix, real_roots, roots
from .result import Converged, NotConverged
from .schur import RealSchurDecomposition
from .spectrum import MatrixSpectrum, condition_number, spectral_radius
from .symmetric import SymmetricEigendecomposition
from .utils import SMALLEST_TOLERANCE, TOLERANCE, scale_tol

__all__ = [
    "RealSchurDecomposition",
    "SymmetricEigendecomposition",
    "Converged",
    "NotConverged",
    "hessenberg",
    "tridiagonal",
    "make_hessenberg_inplace",
    "make_tridiagonal_inplace",
    "calc_eigenvalues",
    "ConvergenceError",
    "MatrixSpectrum",
    "condition_number",
    "spectral_radius",
    "companion_matrix",
    "roots",
    "real_roots",
    "householder_vector",
    "apply_householder_from_left",
    "apply_householder_from_right",
    "GivensRotation",
    "givens",
    "jacobi_rotation",
    "apply_givens_from_left",
    "apply_givens_from_right",
    "apply_transpose_givens_from_left",
    "apply_transpose_givens_from_right",
    "scale_tol",
    "TOLERANCE",
    "SMALLEST_TOLERANCE",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show eigenalg”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
