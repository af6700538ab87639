"""Assignment strategies and partitioning."""

from .hard import HardAssignment, distance_matrix
from .partition import ClusterPartitioner

__all__ = [
    'HardAssignment',
    'distance_matrix',
    'ClusterPartitioner'
]
