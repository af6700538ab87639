"""
Input validation utilities.

Checks for visitor configuration and for the (index, column) pairs handed
over by the host engine. Only the length of the index sequence is consulted.
"""

from typing import Any, Sized
import numbers

from ..exceptions import InvalidConfigurationError, InsufficientDataError


EMPTY_CLUSTER_POLICIES = ('reset', 'keep')


def working_size(index: Sized, column: Sized) -> int:
    """Effective number of elements processed: min(len(index), len(column)).

    Args:
        index: Index sequence (only its length is used)
        column: Column of elements

    Returns:
        Working size
    """
    return min(len(index), len(column))


def check_n_clusters(n_clusters: Any) -> int:
    """Validate the number of K-means clusters.

    Raises:
        InvalidConfigurationError: If not a positive integer
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, numbers.Integral):
        raise InvalidConfigurationError(
            f"n_clusters must be int, got {type(n_clusters).__name__}")

    if n_clusters <= 0:
        raise InvalidConfigurationError(f"n_clusters must be positive, got {n_clusters}")

    return int(n_clusters)


def check_max_iter(max_iter: Any) -> int:
    """Validate an iteration budget.

    Raises:
        InvalidConfigurationError: If not a positive integer
    """
    if isinstance(max_iter, bool) or not isinstance(max_iter, numbers.Integral):
        raise InvalidConfigurationError(
            f"max_iter must be int, got {type(max_iter).__name__}")

    if max_iter <= 0:
        raise InvalidConfigurationError(f"max_iter must be positive, got {max_iter}")

    return int(max_iter)


def check_damping(damping: Any) -> float:
    """Validate a damping factor, which must lie in the open interval (0, 1).

    Raises:
        InvalidConfigurationError: If outside (0, 1) or not a real number
    """
    if isinstance(damping, bool) or not isinstance(damping, numbers.Real):
        raise InvalidConfigurationError(
            f"damping must be a real number, got {type(damping).__name__}")

    if not 0.0 < damping < 1.0:
        raise InvalidConfigurationError(f"damping must be in (0, 1), got {damping}")

    return float(damping)


def check_tolerance(tol: Any) -> float:
    """Validate a convergence tolerance (non-negative real)."""
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real):
        raise InvalidConfigurationError(f"tol must be a real number, got {type(tol).__name__}")

    if tol < 0:
        raise InvalidConfigurationError(f"tol must be non-negative, got {tol}")

    return float(tol)


def check_empty_cluster_policy(policy: Any) -> str:
    """Validate the K-means empty cluster policy."""
    if policy not in EMPTY_CLUSTER_POLICIES:
        raise InvalidConfigurationError(
            f"empty_cluster must be one of {EMPTY_CLUSTER_POLICIES}, got {policy!r}")
    return policy


def check_working_size(n_points: int, min_points: int = 1) -> None:
    """Reject working ranges that are too small.

    Args:
        n_points: Working size
        min_points: Minimum number of elements required

    Raises:
        InsufficientDataError: If n_points < min_points
    """
    if n_points < max(1, min_points):
        raise InsufficientDataError(
            f"Found {n_points} elements in the working range, but need at least "
            f"{max(1, min_points)}")
