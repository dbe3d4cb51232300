"""Ranked containers.

This module provides the score-ordered multiset used to carry fuzzy
lookup results, its element type, and a few small value types.
"""

from fuzzydex.collections.models import AccumulationSet, KeyValue
from fuzzydex.collections.ranked_set import (
    BoundType,
    Entry,
    Order,
    RankedSet,
    RankedSetConfig,
)
from fuzzydex.collections.scored_item import DEFAULT_EPSILON, ScoredItem

__all__ = [
    "DEFAULT_EPSILON",
    "ScoredItem",
    "RankedSet",
    "RankedSetConfig",
    "Order",
    "BoundType",
    "Entry",
    "KeyValue",
    "AccumulationSet",
]
