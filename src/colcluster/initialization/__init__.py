"""Initialization strategies and random sources."""

from .random import RandomInit, TorchRandomSource, SequenceRandomSource, check_random_state, copy_element
from ..base.interfaces import RandomSource

__all__ = [
    'RandomSource',
    'RandomInit',
    'TorchRandomSource',
    'SequenceRandomSource',
    'check_random_state',
    'copy_element'
]
