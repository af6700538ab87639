"""
Packed similarity matrix for affinity propagation.

Only the upper triangle (diagonal included) is stored, row by row, in a flat
tensor of n(n+1)/2 entries. Entry (i, j) with i <= j lives at
``i*n + j - i(i+1)/2``; lookups with i > j read the symmetric entry.
"""

from typing import Any, Callable, Sequence, Tuple

import torch
from torch import Tensor


def packed_size(n: int) -> int:
    """Number of stored entries for an n x n symmetric matrix."""
    return (n * (n + 1)) // 2


def packed_index(i: int, j: int, n: int) -> int:
    """Position of entry (i, j) in packed upper-triangular storage.

    Args:
        i: Row
        j: Column
        n: Matrix size

    Returns:
        Flat index; (i, j) and (j, i) map to the same position
    """
    if i > j:
        i, j = j, i
    if i < 0 or j >= n:
        raise IndexError(f"Entry ({i}, {j}) is outside a {n}x{n} matrix")
    return i * n + j - ((i * (i + 1)) >> 1)


class SimilarityMatrix:
    """Symmetric similarity s(i, j) = -distance(i, j) with a shared diagonal.

    The diagonal (self-preference) holds the minimum off-diagonal similarity,
    or 0 for a single element.
    """

    def __init__(self, values: Tensor, size: int):
        """
        Args:
            values: Packed float64 tensor of packed_size(size) entries
            size: Matrix size n
        """
        if values.shape != (packed_size(size),):
            raise ValueError(f"Expected {packed_size(size)} packed values, got {tuple(values.shape)}")
        self.values = values
        self.size = size

    @classmethod
    def from_column(cls, column: Sequence, n_points: int,
                    distance: Callable[[Any, Any], float],
                    device: torch.device = torch.device('cpu')) -> 'SimilarityMatrix':
        """Compute similarities for the first n_points elements of a column.

        The distance is called once per unordered pair as distance(col[i], col[j])
        with i < j.
        """
        values = torch.zeros(packed_size(n_points), dtype=torch.float64)
        min_val = float('inf')

        for i in range(n_points - 1):
            for j in range(i + 1, n_points):
                val = -float(distance(column[i], column[j]))
                values[packed_index(i, j, n_points)] = val
                if val < min_val:
                    min_val = val

        if n_points < 2:
            min_val = 0.0

        for i in range(n_points):
            values[packed_index(i, i, n_points)] = min_val

        return cls(values.to(device), n_points)

    @property
    def preference(self) -> float:
        """Self-preference shared by every diagonal entry."""
        if self.size == 0:
            return 0.0
        return self.values[0].item()

    def __getitem__(self, item: Tuple[int, int]) -> float:
        i, j = item
        return self.values[packed_index(i, j, self.size)].item()

    def diagonal_indices(self) -> Tensor:
        """Packed positions of the diagonal entries."""
        rows = torch.arange(self.size)
        return rows * self.size + rows - (rows * (rows + 1)) // 2

    def to_dense(self) -> Tensor:
        """Expand to a full symmetric (n, n) tensor."""
        n = self.size
        rows, cols = torch.triu_indices(n, n, device=self.values.device)
        # triu_indices enumerates row-major, matching packed order
        dense = torch.zeros(n, n, dtype=self.values.dtype, device=self.values.device)
        dense[rows, cols] = self.values
        dense[cols, rows] = self.values
        return dense

    def __repr__(self) -> str:
        return f"SimilarityMatrix(size={self.size}, preference={self.preference:.6g})"
