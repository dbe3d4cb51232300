"""Score-ordered multiset of scored items with weighted join operations.

Membership and counting are governed entirely by the epsilon-banded
ordering of ``ScoredItem``: two insertions land in the same slot when
their scores share a band and their items are equal. This is the
behaviour of a comparator-grouped tree multiset, reproduced here with an
ordered vector, binary-search insertion and explicit per-slot counts.
"""

import sys
from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any, Generic, NamedTuple, TypeVar

from fuzzydex.collections.scored_item import DEFAULT_EPSILON, ScoredItem
from fuzzydex.errors import ValidationError

__all__ = [
    "BoundType",
    "Entry",
    "Order",
    "RankedSet",
    "RankedSetConfig",
]

T = TypeVar("T")


class Order(StrEnum):
    """Ranking direction of a RankedSet.

    Attributes
    ----------
    ASCENDING : str
        Lowest score ranks first (distances).
    DESCENDING : str
        Highest score ranks first (similarities).
    """

    ASCENDING = "ascending"
    DESCENDING = "descending"


class BoundType(StrEnum):
    """Inclusivity of a range bound."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class RankedSetConfig:
    """Construction configuration for a RankedSet.

    Attributes
    ----------
    order : Order
        Ranking direction, by default ascending.
    max_score : float
        Sentinel substituted for a missing side of an outer join on an
        ascending set, by default the largest finite float.
    min_score : float
        Sentinel substituted for a missing side of an outer join on a
        descending set, by default the smallest positive normal float.
    epsilon : float
        Score band given to the ScoredItems this set creates.
    """

    order: Order = Order.ASCENDING
    max_score: float = sys.float_info.max
    min_score: float = sys.float_info.min
    epsilon: float = DEFAULT_EPSILON

    def __post_init__(self) -> None:
        """Validate configuration and normalize ``order`` to an Order member."""
        try:
            object.__setattr__(self, "order", Order(self.order))
        except ValueError as e:
            raise ValidationError(
                f"Unrecognized ordering direction {self.order!r}. Use ascending or descending"
            ) from e
        if not self.min_score >= 0:
            raise ValidationError(f"min_score must be >= 0, got {self.min_score}")
        if not self.max_score >= self.min_score:
            raise ValidationError(
                f"max_score ({self.max_score}) must not be below min_score ({self.min_score})"
            )
        if not self.epsilon > 0:
            raise ValidationError(f"epsilon must be > 0, got {self.epsilon}")

    @property
    def missing_score(self) -> float:
        """Score pushing an unmatched join side toward the bad end of the ranking."""
        return self.max_score if self.order == Order.ASCENDING else self.min_score


class Entry(NamedTuple, Generic[T]):
    """A distinct element together with its occurrence count."""

    element: ScoredItem[T]
    count: int


class RankedSet(Generic[T]):
    """Ordered multiset of ScoredItem, ranked by score.

    Parameters
    ----------
    order : Order | str | None, optional
        Ranking direction. Overrides ``config.order`` when given.
    config : RankedSetConfig | None, optional
        Sentinels, epsilon and direction. Defaults to ``RankedSetConfig()``.

    Notes
    -----
    Range queries (``head_multiset`` and friends) return snapshots that
    share this set's configuration, not live views.
    """

    def __init__(
        self,
        order: Order | str | None = None,
        config: RankedSetConfig | None = None,
    ) -> None:
        if config is None:
            config = RankedSetConfig()
        if order is not None and order != config.order:
            config = replace(config, order=order)

        self._config = config
        self._elements: list[ScoredItem[T]] = []
        self._counts: list[int] = []
        self._size = 0

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> RankedSetConfig:
        """Return the construction configuration."""
        return self._config

    @property
    def order(self) -> Order:
        """Return the ranking direction."""
        return self._config.order

    @property
    def max_score(self) -> float:
        """Return the maximum sentinel score."""
        return self._config.max_score

    @property
    def min_score(self) -> float:
        """Return the minimum sentinel score."""
        return self._config.min_score

    @property
    def missing_score(self) -> float:
        """Return the sentinel used for an absent join side."""
        return self._config.missing_score

    def compare(self, left: ScoredItem[Any], right: ScoredItem[Any]) -> int:
        """Compare two elements in this set's ranking direction."""
        result = left.compare(right)
        return result if self._config.order == Order.ASCENDING else -result

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, score: float, item: T) -> bool:
        """Insert ``item`` with ``score``. Always succeeds.

        Raises
        ------
        ValidationError
            If score is negative or item is None.
        """
        self.add_element(ScoredItem(score, item, epsilon=self._config.epsilon))
        return True

    def add_element(self, element: ScoredItem[T], occurrences: int = 1) -> int:
        """Add ``occurrences`` copies of ``element``.

        Returns
        -------
        int
            Count of the element's slot before the call.
        """
        _check_element(element)
        _check_occurrences(occurrences)

        index, found = self._search(element)
        if found:
            previous = self._counts[index]
            self._counts[index] += occurrences
        else:
            previous = 0
            if occurrences == 0:
                return 0
            self._elements.insert(index, element)
            self._counts.insert(index, occurrences)
        self._size += occurrences
        return previous

    def remove(self, element: ScoredItem[T], occurrences: int = 1) -> int:
        """Remove up to ``occurrences`` copies of ``element``.

        Returns
        -------
        int
            Count of the element's slot before the call.
        """
        _check_element(element)
        _check_occurrences(occurrences)

        index, found = self._search(element)
        if not found:
            return 0
        previous = self._counts[index]
        self._set_slot(index, max(previous - occurrences, 0))
        return previous

    def set_count(self, element: ScoredItem[T], count: int) -> int:
        """Set the count of ``element`` to ``count``; returns the previous count."""
        _check_element(element)
        _check_occurrences(count)

        index, found = self._search(element)
        if found:
            previous = self._counts[index]
            self._set_slot(index, count)
            return previous
        self.add_element(element, count)
        return 0

    def set_count_if(self, element: ScoredItem[T], old_count: int, new_count: int) -> bool:
        """Set the count of ``element`` only if it currently equals ``old_count``."""
        _check_occurrences(old_count)
        if self.count(element) != old_count:
            return False
        self.set_count(element, new_count)
        return True

    def _set_slot(self, index: int, count: int) -> None:
        self._size += count - self._counts[index]
        if count == 0:
            del self._elements[index]
            del self._counts[index]
        else:
            self._counts[index] = count

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def count(self, element: Any) -> int:
        """Return how many times ``element`` (a ScoredItem) is held."""
        if not isinstance(element, ScoredItem):
            return 0
        index, found = self._search(element)
        return self._counts[index] if found else 0

    def element_set(self) -> tuple[ScoredItem[T], ...]:
        """Return the distinct elements in rank order."""
        return tuple(self._elements)

    def entry_set(self) -> tuple[Entry[T], ...]:
        """Return (element, count) entries in rank order."""
        return tuple(Entry(e, c) for e, c in zip(self._elements, self._counts, strict=True))

    def items(self) -> list[T]:
        """Return held items in rank order, with multiplicity."""
        return [element.item for element in self]

    def first_entry(self) -> Entry[T] | None:
        """Return the best-ranked entry, or None when empty."""
        if not self._elements:
            return None
        return Entry(self._elements[0], self._counts[0])

    def last_entry(self) -> Entry[T] | None:
        """Return the worst-ranked entry, or None when empty."""
        if not self._elements:
            return None
        return Entry(self._elements[-1], self._counts[-1])

    def poll_first_entry(self) -> Entry[T] | None:
        """Remove and return the best-ranked entry (all of its occurrences)."""
        entry = self.first_entry()
        if entry is not None:
            self._set_slot(0, 0)
        return entry

    def poll_last_entry(self) -> Entry[T] | None:
        """Remove and return the worst-ranked entry (all of its occurrences)."""
        entry = self.last_entry()
        if entry is not None:
            self._set_slot(len(self._elements) - 1, 0)
        return entry

    # ------------------------------------------------------------------
    # Derived sets
    # ------------------------------------------------------------------

    def head_multiset(self, upper: ScoredItem[T], bound: BoundType) -> "RankedSet[T]":
        """Return the entries ranked before ``upper`` (inclusive when CLOSED)."""
        return self._derive(0, self._upper_index(upper, bound))

    def tail_multiset(self, lower: ScoredItem[T], bound: BoundType) -> "RankedSet[T]":
        """Return the entries ranked after ``lower`` (inclusive when CLOSED)."""
        return self._derive(self._lower_index(lower, bound), len(self._elements))

    def sub_multiset(
        self,
        lower: ScoredItem[T],
        lower_bound: BoundType,
        upper: ScoredItem[T],
        upper_bound: BoundType,
    ) -> "RankedSet[T]":
        """Return the entries ranked between ``lower`` and ``upper``.

        Raises
        ------
        ValidationError
            If ``lower`` ranks after ``upper``.
        """
        _check_element(lower)
        _check_element(upper)
        if self.compare(lower, upper) > 0:
            raise ValidationError(f"Range bounds out of order: {lower!r} ranks after {upper!r}")
        start = self._lower_index(lower, lower_bound)
        stop = self._upper_index(upper, upper_bound)
        return self._derive(start, max(start, stop))

    def descending(self) -> "RankedSet[T]":
        """Return a copy of this set ranked in the opposite direction."""
        flipped = Order.DESCENDING if self.order == Order.ASCENDING else Order.ASCENDING
        result: RankedSet[T] = RankedSet(config=replace(self._config, order=flipped))
        for element, count in zip(self._elements, self._counts, strict=True):
            result.add_element(element, count)
        return result

    def _derive(self, start: int, stop: int) -> "RankedSet[T]":
        result: RankedSet[T] = RankedSet(config=self._config)
        result._elements = self._elements[start:stop]
        result._counts = self._counts[start:stop]
        result._size = sum(result._counts)
        return result

    def _upper_index(self, upper: ScoredItem[T], bound: BoundType) -> int:
        _check_element(upper)
        index, found = self._search(upper)
        if found and BoundType(bound) == BoundType.CLOSED:
            return index + 1
        return index

    def _lower_index(self, lower: ScoredItem[T], bound: BoundType) -> int:
        _check_element(lower)
        index, found = self._search(lower)
        if found and BoundType(bound) == BoundType.OPEN:
            return index + 1
        return index

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def weighted_inside_join(
        self,
        other: "RankedSet[T]",
        l_weight: float,
        r_weight: float,
    ) -> "RankedSet[T]":
        """Return the inner join (items present on both sides).

        Each joined item is scored ``(l_score * l_weight + r_score * r_weight) / 2``
        and keeps the left-hand item.

        Parameters
        ----------
        other : RankedSet
            Right-hand side.
        l_weight : float
            Weight of this set's scores.
        r_weight : float
            Weight of ``other``'s scores.

        Returns
        -------
        RankedSet
            New set with this set's configuration.
        """
        _check_join_args(other, l_weight, r_weight)

        results: RankedSet[T] = RankedSet(config=self._config)
        join_index = _build_join_index(other)

        for l_tuple in self:
            partner = join_index.get(l_tuple)
            if partner is not None:
                score = (l_tuple.score * l_weight + partner.score * r_weight) / 2
                results.add(score, l_tuple.item)

        return results

    def weighted_left_outer_join(
        self,
        other: "RankedSet[T]",
        l_weight: float,
        r_weight: float,
        threshold: float,
    ) -> "RankedSet[T]":
        """Return the outer join (items present on either side).

        An item missing from one side takes ``missing_score`` for that side
        before averaging, which pushes it toward the bad end of the
        ranking. Only items whose combined score passes ``threshold``
        (``<=`` when ascending, ``>=`` when descending) are kept. With a
        maximally permissive threshold the result holds at least
        ``|L| + |R| - |L & R|`` elements.

        Parameters
        ----------
        other : RankedSet
            Right-hand side.
        l_weight : float
            Weight of this set's scores.
        r_weight : float
            Weight of ``other``'s scores.
        threshold : float
            Score cut-off applied after averaging.

        Returns
        -------
        RankedSet
            New set with this set's configuration.
        """
        _check_join_args(other, l_weight, r_weight)
        if threshold is None or not threshold >= 0:
            raise ValidationError(f"threshold must be >= 0, got {threshold!r}")

        results: RankedSet[T] = RankedSet(config=self._config)
        join_index = _build_join_index(other)
        missing = self._config.missing_score

        for l_tuple in self:
            partner = join_index.get(l_tuple)
            r_score = partner.score * r_weight if partner is not None else missing * r_weight

            score = (l_tuple.score * l_weight + r_score) / 2
            if self._passes(score, threshold):
                results.add(score, l_tuple.item)

            # Consumed right-hand tuples are not emitted again as right-only rows.
            if partner is not None:
                del join_index[l_tuple]

        for r_tuple in join_index.values():
            score = (missing * l_weight + r_tuple.score * r_weight) / 2
            if self._passes(score, threshold):
                results.add(score, r_tuple.item)

        return results

    def _passes(self, score: float, threshold: float) -> bool:
        if self._config.order == Order.ASCENDING:
            return score <= threshold
        return score >= threshold

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _search(self, element: ScoredItem[Any]) -> tuple[int, bool]:
        """Binary search for ``element``'s slot.

        Returns
        -------
        tuple[int, bool]
            Leftmost insertion index and whether that index holds an
            element comparing equal to ``element``.
        """
        lo, hi = 0, len(self._elements)
        while lo < hi:
            mid = (lo + hi) // 2
            if self.compare(self._elements[mid], element) < 0:
                lo = mid + 1
            else:
                hi = mid
        found = lo < len(self._elements) and self.compare(self._elements[lo], element) == 0
        return lo, found

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[ScoredItem[T]]:
        for element, count in zip(self._elements, self._counts, strict=True):
            for _ in range(count):
                yield element

    def __contains__(self, element: object) -> bool:
        return self.count(element) > 0

    def __repr__(self) -> str:
        body = ", ".join(
            f"{e.item!r}:{e.score:g}x{c}"
            for e, c in zip(self._elements, self._counts, strict=True)
        )
        return f"RankedSet({self.order.value}, [{body}])"


def _build_join_index(other: "RankedSet[T]") -> dict[ScoredItem[T], ScoredItem[T]]:
    """Index right-hand tuples by item so the join runs in O(L + R).

    Duplicate items collapse into one bucket whose value is the last
    (worst-ranked) tuple seen.
    """
    join_index: dict[ScoredItem[T], ScoredItem[T]] = {}
    for r_tuple in other:
        join_index[r_tuple] = r_tuple
    return join_index


def _check_element(element: Any) -> None:
    if element is None:
        raise ValidationError("element must not be None")
    if not isinstance(element, ScoredItem):
        raise ValidationError(f"Expected a ScoredItem, got {type(element).__name__}")


def _check_occurrences(occurrences: int) -> None:
    if occurrences < 0:
        raise ValidationError(f"occurrences must be >= 0, got {occurrences}")


def _check_join_args(other: Any, l_weight: float, r_weight: float) -> None:
    if other is None:
        raise ValidationError("join operand must not be None")
    if not isinstance(other, RankedSet):
        raise ValidationError(f"Expected a RankedSet to join, got {type(other).__name__}")
    if l_weight is None or not l_weight >= 0:
        raise ValidationError(f"l_weight must be >= 0, got {l_weight!r}")
    if r_weight is None or not r_weight >= 0:
        raise ValidationError(f"r_weight must be >= 0, got {r_weight!r}")
