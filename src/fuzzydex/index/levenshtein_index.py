"""Linear-scan fuzzy index scored by edit distance.

This is not an efficient fuzzy index: every fuzzy lookup computes the
edit distance to every stored key, O(n) per query. It stands in for a
proper approximate-match engine on small in-memory datasets.
"""

from collections.abc import Iterable
from typing import TypeVar

from fuzzydex.collections import KeyValue
from fuzzydex.index.base import DEFAULT_TOLERANCE, FuzzyIndexBase

__all__ = ["LevenshteinFuzzyIndex"]

V = TypeVar("V")


class LevenshteinFuzzyIndex(FuzzyIndexBase[V]):
    """Multimap whose lookups scan every entry.

    Entries are kept in insertion order. Duplicate keys and duplicate
    values are both allowed; there is no delete.

    Parameters
    ----------
    weight : float, optional
        Dimension weight, by default 1.0.
    tolerance : int, optional
        Maximum edit distance for ranked matches, by default 6.
    """

    def __init__(self, weight: float = 1.0, tolerance: int = DEFAULT_TOLERANCE) -> None:
        super().__init__(weight=weight, tolerance=tolerance)
        self._entries: list[KeyValue[V]] = []

    def add_entry(self, key: str, value: V) -> None:
        """Append an entry."""
        self._entries.append(KeyValue(key, value))

    def _candidates(self, key: str) -> Iterable[KeyValue[V]]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)
