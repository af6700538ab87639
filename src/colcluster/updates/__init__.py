"""Parameter update strategies."""

from .mean import MeanUpdater, zero_like

__all__ = [
    'MeanUpdater',
    'zero_like'
]
