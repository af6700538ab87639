"""
Data structures shared by the clustering visitors.

Partitions never copy column elements. A ``ColumnView`` holds a reference to
the host column plus a list of positions into it, so the column must outlive
every view or partition derived from it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

import torch
from torch import Tensor


class ColumnView:
    """Borrowed, read-only view of selected positions of a column."""

    def __init__(self, column: Sequence, indices: Sequence[int]):
        """
        Args:
            column: The viewed column (not copied)
            indices: Positions into the column, in view order
        """
        self._column = column
        self._indices = [int(i) for i in indices]

    @property
    def column(self) -> Sequence:
        """The column this view borrows from."""
        return self._column

    @property
    def indices(self) -> List[int]:
        """Positions into the column."""
        return list(self._indices)

    def __len__(self) -> int:
        return len(self._indices)

    def __getitem__(self, item: int) -> Any:
        return self._column[self._indices[item]]

    def __iter__(self) -> Iterator[Any]:
        for i in self._indices:
            yield self._column[i]

    def to_list(self) -> List[Any]:
        """Materialize the viewed elements."""
        return list(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(indices={self._indices})"


class ClusterView(ColumnView):
    """Members of one cluster plus the representative they were assigned to.

    For K-means the representative is the centroid, which plays the role of a
    sentinel first entry: ``with_sentinel()`` yields it before the members.
    """

    def __init__(self, column: Sequence, indices: Sequence[int],
                 cluster_id: int, representative: Any,
                 has_sentinel: bool = False):
        super().__init__(column, indices)
        self.cluster_id = cluster_id
        self.representative = representative
        self.has_sentinel = has_sentinel

    def with_sentinel(self) -> List[Any]:
        """Members prefixed by the sentinel representative, if any."""
        members = self.to_list()
        if self.has_sentinel:
            return [self.representative] + members
        return members

    def __repr__(self) -> str:
        return (f"ClusterView(cluster_id={self.cluster_id}, "
                f"representative={self.representative!r}, indices={self._indices})")


class ClusterPartition:
    """Mapping from cluster id (0..K-1) to the elements of that cluster.

    Empty when the producing visitor had no representatives (affinity
    propagation without exemplars).
    """

    def __init__(self, clusters: List[ClusterView], labels: Tensor):
        """
        Args:
            clusters: One view per cluster id, in id order
            labels: (n,) long tensor, cluster id per element or -1
        """
        self._clusters = clusters
        self.labels = labels

    @property
    def n_clusters(self) -> int:
        return len(self._clusters)

    @property
    def is_empty(self) -> bool:
        return not self._clusters

    def __len__(self) -> int:
        return len(self._clusters)

    def __getitem__(self, cluster_id: int) -> ClusterView:
        return self._clusters[cluster_id]

    def __iter__(self) -> Iterator[ClusterView]:
        return iter(self._clusters)

    def sizes(self) -> List[int]:
        """Number of members per cluster (sentinels excluded)."""
        return [len(c) for c in self._clusters]

    def to_dict(self) -> Dict[int, List[int]]:
        """Cluster id -> member positions."""
        return {c.cluster_id: c.indices for c in self._clusters}

    def __repr__(self) -> str:
        return f"ClusterPartition(n_clusters={self.n_clusters}, sizes={self.sizes()})"


@dataclass
class AlgorithmState:
    """State of a visitor at the end of one iteration (K-means) or round
    (affinity propagation).
    """
    iteration: int
    n_clusters: int
    objective_value: Optional[float] = None
    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
