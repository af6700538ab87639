"""Base classes, interfaces and data structures for the clustering visitors."""

from .interfaces import (
    RandomSource,
    InitializationStrategy,
    AssignmentStrategy,
    ParameterUpdater,
    ConvergenceCriterion
)

from .data_structures import (
    ColumnView,
    ClusterView,
    ClusterPartition,
    AlgorithmState
)

from .clustering_base import BaseClusteringVisitor

__all__ = [
    # Interfaces
    'RandomSource',
    'InitializationStrategy',
    'AssignmentStrategy',
    'ParameterUpdater',
    'ConvergenceCriterion',

    # Data structures
    'ColumnView',
    'ClusterView',
    'ClusterPartition',
    'AlgorithmState',

    # Base visitor
    'BaseClusteringVisitor'
]
