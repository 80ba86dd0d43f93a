"""Batched distance computations over record sets."""

from .mixed import MixedDistance

__all__ = [
    'MixedDistance'
]
