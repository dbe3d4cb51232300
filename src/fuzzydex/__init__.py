"""Approximate multi-attribute lookup for in-memory datasets.

This package provides:
- Ranked containers (fuzzydex.collections): score-ordered multisets and weighted joins
- Metrics (fuzzydex.metrics): Levenshtein edit distance
- Queries (fuzzydex.query): single-dimension and compound query shapes
- Entities (fuzzydex.entity): attributes and fact containers
- Indexes (fuzzydex.index): scanning and bucketed fuzzy indexes
- Multidex (fuzzydex.multidex): weighted multidimensional fuzzy index
- Audit (fuzzydex.audit): structured JSONL event logging
- CLI (fuzzydex.cli): command-line interface
- Public API (fuzzydex.api): high-level convenience functions
"""

__version__ = "0.2.0"
__license__ = "MIT"

from fuzzydex.api import ParseError, build_index, load_facts, search
from fuzzydex.collections import Order, RankedSet, RankedSetConfig, ScoredItem
from fuzzydex.entity import Attribute, Entity
from fuzzydex.errors import (
    DimensionNotFoundError,
    FactStateError,
    FuzzydexError,
    QueryShapeError,
    StateViolationError,
    ValidationError,
)
from fuzzydex.index import BucketedFuzzyIndex, LevenshteinFuzzyIndex
from fuzzydex.metrics import levenshtein, levenshtein_matrix
from fuzzydex.multidex import MultidexConfig, MultidimensionalIndex
from fuzzydex.query import Match, NAryQuery

__all__ = [
    "__version__",
    "__license__",
    "ScoredItem",
    "RankedSet",
    "RankedSetConfig",
    "Order",
    "levenshtein",
    "levenshtein_matrix",
    "Match",
    "NAryQuery",
    "Attribute",
    "Entity",
    "LevenshteinFuzzyIndex",
    "BucketedFuzzyIndex",
    "MultidimensionalIndex",
    "MultidexConfig",
    "load_facts",
    "build_index",
    "search",
    "ParseError",
    "FuzzydexError",
    "ValidationError",
    "DimensionNotFoundError",
    "StateViolationError",
    "FactStateError",
    "QueryShapeError",
]
