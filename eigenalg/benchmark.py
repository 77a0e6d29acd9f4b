#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Time the eigen-solvers against NumPy/LAPACK.

    python -m eigenalg.benchmark

Needs the `bench` extra (pandas, tabulate).
"""

import time

import numpy as np

from .schur import RealSchurDecomposition
from .symmetric import SymmetricEigendecomposition
from .utils import random_symmetric

REPEATS = 5  # best of 5 runs leads to stable numbers
SIZES = [10, 50, 100]
NUM_ITERS = 1000


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def run_benchmark(sizes=SIZES, repeats=REPEATS, seed=0):
    import pandas as pd

    rng = np.random.default_rng(seed)
    records = []
    for n in sizes:
        A = rng.standard_normal((n, n))
        S = random_symmetric(n, seed=seed + n)

        t_np = min(wall(np.linalg.eigvals, A) for _ in range(repeats))
        t_schur = min(wall(RealSchurDecomposition, A, NUM_ITERS) for _ in range(repeats))
        schur = RealSchurDecomposition(A, NUM_ITERS)
        recon = np.linalg.norm(schur.Q @ schur.D @ schur.Q.T - A, np.inf)
        ortho = np.linalg.norm(schur.Q.T @ schur.Q - np.eye(n), np.inf)
        records.append(("Schur", n, t_schur, t_schur / t_np, recon, ortho, schur.converged))

        t_np = min(wall(np.linalg.eigvalsh, S) for _ in range(repeats))
        t_sym = min(wall(SymmetricEigendecomposition, S, NUM_ITERS) for _ in range(repeats))
        sym = SymmetricEigendecomposition(S, NUM_ITERS)
        if sym.converged:
            recon = np.linalg.norm(sym.Q @ np.diag(sym.D) @ sym.Q.T - S, np.inf)
            ortho = np.linalg.norm(sym.Q.T @ sym.Q - np.eye(n), np.inf)
        else:
            recon = ortho = np.nan
        records.append(("Symmetric", n, t_sym, t_sym / t_np, recon, ortho, sym.converged))

    return pd.DataFrame(
        records,
        columns=["kernel", "n", "sec", "sec/NumPy", "recon_err", "orth_err", "converged"],
    )


def main():
    df = run_benchmark()
    print(df.to_markdown(index=False))


if __name__ == "__main__":
    main()
