"""Utility functions for the clustering visitors."""

from .convergence import (
    CentroidShift,
    StableExemplars,
    MaxIterations
)

from .metrics import (
    inertia,
    cluster_sizes
)

from .validation import (
    working_size,
    check_n_clusters,
    check_max_iter,
    check_damping,
    check_tolerance,
    check_empty_cluster_policy,
    check_working_size
)

__all__ = [
    # Convergence criteria
    'CentroidShift',
    'StableExemplars',
    'MaxIterations',

    # Metrics
    'inertia',
    'cluster_sizes',

    # Validation
    'working_size',
    'check_n_clusters',
    'check_max_iter',
    'check_damping',
    'check_tolerance',
    'check_empty_cluster_policy',
    'check_working_size'
]
