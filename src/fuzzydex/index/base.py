"""Index protocol and shared behaviour of single-dimension fuzzy indexes.

Architecture
------------
* ``Index``: structural protocol the multidimensional index relies on.
* ``FuzzyIndexBase``: weight/tolerance bookkeeping, the key-based lookups
  and the query-object entry points. Concrete indexes only decide where
  entries live and which of them a key can reach (``_candidates``).
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Generic, Protocol, TypeVar, runtime_checkable

from fuzzydex.collections import KeyValue, RankedSet
from fuzzydex.errors import ValidationError
from fuzzydex.metrics import levenshtein
from fuzzydex.query import Query, expect_match

__all__ = [
    "DEFAULT_RANKING",
    "DEFAULT_TOLERANCE",
    "FuzzyIndexBase",
    "Index",
]

V = TypeVar("V")

# Score given to every literal match on the exact paths.
DEFAULT_RANKING = 1.0

DEFAULT_TOLERANCE = 6


@runtime_checkable
class Index(Protocol[V]):
    """Structural protocol every dimension index must satisfy.

    Attributes
    ----------
    weight : float
        Weight of this dimension when joined with others.
    """

    weight: float

    def add_entry(self, key: str, value: V) -> None:
        """Store ``value`` under ``key``."""
        ...

    def match_exact(self, query: Query) -> RankedSet[V]:
        """Resolve a Match query to its literal matches."""
        ...

    def match_nearest(self, query: Query) -> RankedSet[V]:
        """Resolve a Match query to its single nearest value."""
        ...

    def match_ranked(self, threshold: float, query: Query) -> RankedSet[V]:
        """Resolve a Match query to values ranked by edit distance."""
        ...


class FuzzyIndexBase(ABC, Generic[V]):
    """Key to value multimap with exact, nearest and ranked lookup.

    Every lookup scans the entries returned by ``_candidates(key)`` in
    insertion order. Subclasses store entries and choose the candidates.

    Parameters
    ----------
    weight : float, optional
        Dimension weight, by default 1.0.
    tolerance : int, optional
        Maximum edit distance accepted by ``get_ranked_matches``,
        by default 6.
    """

    def __init__(self, weight: float = 1.0, tolerance: int = DEFAULT_TOLERANCE) -> None:
        self.weight = weight
        self.tolerance = tolerance

    @property
    def weight(self) -> float:
        """Return the dimension weight."""
        return self._weight

    @weight.setter
    def weight(self, weight: float) -> None:
        if weight is None or not weight >= 0:
            raise ValidationError(f"weight must be >= 0, got {weight!r}")
        self._weight = float(weight)

    @property
    def tolerance(self) -> int:
        """Return the default maximum edit distance for ranked matches."""
        return self._tolerance

    @tolerance.setter
    def tolerance(self, tolerance: int) -> None:
        check_tolerance(tolerance)
        self._tolerance = tolerance

    # ------------------------------------------------------------------
    # Storage (implemented by subclasses)
    # ------------------------------------------------------------------

    @abstractmethod
    def add_entry(self, key: str, value: V) -> None:
        """Store ``value`` under ``key``. Duplicates are kept."""

    @abstractmethod
    def _candidates(self, key: str) -> Iterable[KeyValue[V]]:
        """Return the entries a lookup for ``key`` may match, in insertion order."""

    @abstractmethod
    def __len__(self) -> int: ...

    # ------------------------------------------------------------------
    # Key-based lookups
    # ------------------------------------------------------------------

    def get_exact_match(self, key: str) -> V | None:
        """Return the first value stored under exactly ``key``, or None."""
        check_key(key)

        for entry in self._candidates(key):
            if entry.key == key:
                return entry.value
        return None

    def get_nearest_match(self, key: str) -> V | None:
        """Return the value whose key is fewest edits from ``key``.

        Ties go to the entry inserted first. Returns None when there is
        no candidate.
        """
        check_key(key)

        best_distance: int | None = None
        nearest: V | None = None
        for entry in self._candidates(key):
            distance = levenshtein(entry.key, key)
            if best_distance is None or distance < best_distance:
                best_distance = distance
                nearest = entry.value
        return nearest

    def get_exact_matches(self, key: str) -> RankedSet[V]:
        """Return every value stored under exactly ``key`` at the default rank."""
        check_key(key)

        results: RankedSet[V] = RankedSet()
        for entry in self._candidates(key):
            if entry.key == key:
                results.add(DEFAULT_RANKING, entry.value)
        return results

    def get_ranked_matches_within_tolerance(self, key: str, tolerance: int) -> RankedSet[V]:
        """Return values within ``tolerance`` edits of ``key``, scored by distance."""
        check_key(key)
        check_tolerance(tolerance)

        results: RankedSet[V] = RankedSet()
        for entry in self._candidates(key):
            distance = levenshtein(entry.key, key)
            if distance <= tolerance:
                results.add(distance, entry.value)
        return results

    def get_ranked_matches(self, key: str, tolerance: int | None = None) -> RankedSet[V]:
        """Return values whose key is within ``tolerance`` edits of ``key``.

        Parameters
        ----------
        key : str
            Lookup key.
        tolerance : int | None, optional
            Override for the configured tolerance.

        Returns
        -------
        RankedSet[V]
            Ascending set scored by edit distance.
        """
        if tolerance is None:
            tolerance = self._tolerance
        return self.get_ranked_matches_within_tolerance(key, tolerance)

    # ------------------------------------------------------------------
    # Query-object entry points
    # ------------------------------------------------------------------

    def match_exact(self, query: Query) -> RankedSet[V]:
        """Resolve a Match query via ``get_exact_matches``."""
        return self.get_exact_matches(_match_key(query))

    def match_nearest(self, query: Query) -> RankedSet[V]:
        """Resolve a Match query to its nearest value at the default rank.

        Returns an empty set when the index holds no candidate.
        """
        nearest = self.get_nearest_match(_match_key(query))
        results: RankedSet[V] = RankedSet()
        if nearest is not None:
            results.add(DEFAULT_RANKING, nearest)
        return results

    def match_ranked(self, threshold: float, query: Query) -> RankedSet[V]:
        """Resolve a Match query via ``get_ranked_matches``.

        The score threshold is applied when dimensions are joined; a single
        index bounds its candidates by tolerance instead.
        """
        return self.get_ranked_matches(_match_key(query))


def _match_key(query: Query) -> str:
    return expect_match(query).key


def check_key(key: str) -> None:
    if key is None:
        raise ValidationError("key must not be None")


def check_tolerance(tolerance: int) -> None:
    if tolerance is None or not tolerance >= 0:
        raise ValidationError(f"tolerance must be >= 0, got {tolerance!r}")
