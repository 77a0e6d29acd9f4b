# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Outcome of an iterative factorization.

Both engines return one of the two classes below from `factorize`, so a
caller can branch on `result.converged` instead of probing for `None`
outputs or re-scanning the sub-diagonal.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np


@dataclass(frozen=True)
class Converged:
    """
    Q : (n, n) orthogonal factor, A = Q D Qᵀ
    D : quasi-triangular (n, n) matrix for the Schur engine,
        (n,) eigenvalue vector for the symmetric engine
    iterations : number of sweeps spent
    """

    Q: np.ndarray
    D: np.ndarray
    iterations: int
    converged = True


@dataclass(frozen=True)
class NotConverged:
    """
    Partial state left when the sweep budget ran out.

    D is the working matrix at that point (still A = Q D Qᵀ), active_size
    the index of the last row of the block that was not yet deflated.
    """

    Q: np.ndarray
    D: np.ndarray
    iterations: int
    active_size: int
    converged = False


Factorization = Union[Converged, NotConverged]
