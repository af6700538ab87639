# tests/utils.py
"""
Small, reusable helpers used across the colcluster test suite.

Functions:
- flatten_partition(partition): all member positions of a partition, sorted.
- reference_similarity(column, distance): dense (n, n) numpy similarity built pair by pair.
- reference_round(S, R, A, damping): one cell-by-cell affinity propagation round in numpy.
- time_block(label): context manager that prints wall-clock time.

Notes:
- The reference round sweeps cells in the same order as the naive algorithm:
  every responsibility first, then every availability.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Callable, List, Sequence, Tuple

import numpy as np


def flatten_partition(partition) -> List[int]:
    """Sorted member positions across every cluster (sentinels excluded)."""
    positions: List[int] = []
    for cluster in partition:
        positions.extend(cluster.indices)
    return sorted(positions)


def reference_similarity(column: Sequence, distance: Callable[[Any, Any], float]) -> np.ndarray:
    """Dense similarity with the minimum off-diagonal value on the diagonal."""
    n = len(column)
    S = np.zeros((n, n), dtype=np.float64)
    min_val = np.inf
    for i in range(n - 1):
        for j in range(i + 1, n):
            val = -float(distance(column[i], column[j]))
            S[i, j] = S[j, i] = val
            min_val = min(min_val, val)
    if n < 2:
        min_val = 0.0
    np.fill_diagonal(S, min_val)
    return S


def reference_round(S: np.ndarray, R: np.ndarray, A: np.ndarray,
                    damping: float) -> Tuple[np.ndarray, np.ndarray]:
    """One affinity propagation round, one cell at a time.

    R and A are indexed [candidate, element] and updated in place.
    """
    n = S.shape[0]

    for i in range(n):
        for j in range(n):
            max_diff = -np.inf
            for jj in range(n):
                if jj == j:
                    continue
                max_diff = max(max_diff, S[i, jj] + A[jj, i])
            R[j, i] = (1.0 - damping) * (S[i, j] - max_diff) + damping * R[j, i]

    for i in range(n):
        for j in range(n):
            if i == j:
                total = sum(max(0.0, R[j, ii]) for ii in range(n) if ii != i)
                A[j, i] = (1.0 - damping) * total + damping * A[j, i]
            else:
                total = sum(max(0.0, R[j, ii]) for ii in range(n) if ii != i and ii != j)
                A[j, i] = (1.0 - damping) * min(0.0, R[j, j] + total) + damping * A[j, i]

    return R, A


@contextmanager
def time_block(label: str):
    """Print the wall-clock time spent inside the block."""
    start = time.perf_counter()
    try:
        yield
    finally:
        print(f"[timing] {label}: {time.perf_counter() - start:.4f}s")
