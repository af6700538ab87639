"""Clustering visitor implementations."""

from .kmeans import KMeansVisitor
from .affinity import AffinityPropagationVisitor

__all__ = [
    'KMeansVisitor',
    'AffinityPropagationVisitor'
]
