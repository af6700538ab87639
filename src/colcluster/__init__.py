"""
colcluster: clustering visitors over ordered numeric columns.

This package implements two unsupervised clustering algorithms that run as
visitors over a column handed over by a host tabular engine:
- K-means (centroid based, fixed K)
- Affinity propagation (message passing, number of exemplars emerges)

Example usage:
    >>> from colcluster import KMeansVisitor
    >>>
    >>> column = [1.0, 2.0, 3.0, 10.0, 11.0, 12.0]
    >>> index = list(range(len(column)))
    >>>
    >>> visitor = KMeansVisitor(n_clusters=2, max_iter=10, random_state=0)
    >>> visitor.pre()
    >>> visitor(index, column)
    >>> visitor.post()
    >>>
    >>> centroids = visitor.get_result()
    >>> clusters = visitor.get_clusters(index, column)
"""

__version__ = '0.1.0'

# Import main visitors
from .algorithms.kmeans import KMeansVisitor
from .algorithms.affinity import AffinityPropagationVisitor

# Convenience imports
from .base import (
    BaseClusteringVisitor,
    ColumnView,
    ClusterView,
    ClusterPartition,
    AlgorithmState
)
from .distances import squared_difference, absolute_difference, squared_euclidean
from .initialization import RandomSource, TorchRandomSource, SequenceRandomSource
from .exceptions import (
    ClusteringError,
    InvalidConfigurationError,
    InsufficientDataError,
    DegenerateClusterWarning,
    EmptyExemplarSetWarning
)

__all__ = [
    # Visitors
    'KMeansVisitor',
    'AffinityPropagationVisitor',
    'BaseClusteringVisitor',

    # Data structures
    'ColumnView',
    'ClusterView',
    'ClusterPartition',
    'AlgorithmState',

    # Distances
    'squared_difference',
    'absolute_difference',
    'squared_euclidean',

    # Random sources
    'RandomSource',
    'TorchRandomSource',
    'SequenceRandomSource',

    # Errors
    'ClusteringError',
    'InvalidConfigurationError',
    'InsufficientDataError',
    'DegenerateClusterWarning',
    'EmptyExemplarSetWarning',

    # Version
    '__version__'
]
