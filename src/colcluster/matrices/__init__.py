"""Matrices used by affinity propagation."""

from .similarity import SimilarityMatrix, packed_index, packed_size
from .messages import (
    MessageMatrix,
    ResponsibilityMatrix,
    AvailabilityMatrix,
    exemplar_mask
)

__all__ = [
    'SimilarityMatrix',
    'packed_index',
    'packed_size',
    'MessageMatrix',
    'ResponsibilityMatrix',
    'AvailabilityMatrix',
    'exemplar_mask'
]
