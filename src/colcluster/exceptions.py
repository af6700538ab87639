"""
Errors and warnings raised by the clustering visitors.

Hard failures (bad configuration, not enough data) are exceptions.
Data-dependent outcomes such as an emptied cluster or an empty exemplar set
are recoverable and only ever surface as warnings.
"""


class ClusteringError(Exception):
    """Base class for all colcluster errors."""


class InvalidConfigurationError(ClusteringError, ValueError):
    """Raised when a visitor is constructed with unusable parameters."""


class InsufficientDataError(ClusteringError, ValueError):
    """Raised when the working range is too small for the requested run."""


class DegenerateClusterWarning(UserWarning):
    """A K-means cluster received no members during an update step."""


class EmptyExemplarSetWarning(UserWarning):
    """Affinity propagation finished without selecting any exemplar."""
