"""Multidimensional fuzzy index.

This module composes named, weighted single-dimension indexes and folds
their per-query RankedSets into one ranked result with weighted joins.
"""

from fuzzydex.multidex.config import MultidexConfig
from fuzzydex.multidex.multidex import MultidimensionalIndex, ResolutionMode

__all__ = [
    "MultidexConfig",
    "MultidimensionalIndex",
    "ResolutionMode",
]
