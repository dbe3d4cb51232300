"""Scored item: the element type of ranked containers."""

from typing import Any, Generic, TypeVar

from fuzzydex.errors import ValidationError

__all__ = ["DEFAULT_EPSILON", "ScoredItem"]

T = TypeVar("T")

DEFAULT_EPSILON = 0.0004


class ScoredItem(Generic[T]):
    """A (score, item) pair with an epsilon-banded ordering.

    Ordering and equality are different relations:

    - Ordering (``compare``, ``<``): scores closer than ``epsilon`` are
      treated as the same rank. Within a rank, equal items compare as 0,
      otherwise the items' natural ordering decides, and when the items
      are not orderable a consistent identity-based order is used. A
      within-band comparison of unequal items never returns 0.
    - Equality and hashing use the item alone, so two ScoredItems holding
      the same item with different scores are ``==``.

    Attributes
    ----------
    score : float
        Non-negative score. Lower is better for ascending sets.
    item : T
        The ranked value. Must not be None.
    epsilon : float
        Score band within which two scores are considered equal.

    Notes
    -----
    Epsilon banding is not transitive: ``a`` may be within band of ``b``
    and ``b`` within band of ``c`` while ``a`` and ``c`` are not. Sorted
    containers built on this ordering inherit that limitation. Mutating
    ``score`` or ``item`` while the instance sits in a container breaks
    that container's ordering.
    """

    __slots__ = ("_score", "_item", "_epsilon")

    def __init__(self, score: float, item: T, epsilon: float = DEFAULT_EPSILON) -> None:
        _check_score(score)
        _check_item(item)
        _check_epsilon(epsilon)

        self._score = float(score)
        self._item = item
        self._epsilon = float(epsilon)

    @property
    def score(self) -> float:
        """Return the score."""
        return self._score

    @score.setter
    def score(self, score: float) -> None:
        _check_score(score)
        self._score = float(score)

    @property
    def item(self) -> T:
        """Return the ranked item."""
        return self._item

    @item.setter
    def item(self, item: T) -> None:
        _check_item(item)
        self._item = item

    @property
    def epsilon(self) -> float:
        """Return the comparison band."""
        return self._epsilon

    @epsilon.setter
    def epsilon(self, epsilon: float) -> None:
        _check_epsilon(epsilon)
        self._epsilon = float(epsilon)

    def compare(self, other: "ScoredItem[Any]") -> int:
        """Three-way comparison under the epsilon-banded rule.

        Parameters
        ----------
        other : ScoredItem
            Item to compare against.

        Returns
        -------
        int
            -1, 0 or 1. Zero only when scores are within this instance's
            epsilon and the items are equal.
        """
        # Exact equality also covers infinite scores, whose difference is NaN.
        if self._score == other._score or abs(self._score - other._score) < self._epsilon:
            if self._item == other._item:
                return 0
            return _tie_break(self._item, other._item)
        if self._score < other._score:
            return -1
        return 1

    def __lt__(self, other: "ScoredItem[Any]") -> bool:
        return self.compare(other) < 0

    def __gt__(self, other: "ScoredItem[Any]") -> bool:
        return self.compare(other) > 0

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ScoredItem):
            return NotImplemented
        return bool(self._item == other._item)

    def __hash__(self) -> int:
        return hash(self._item)

    def __repr__(self) -> str:
        return f"ScoredItem(score={self._score!r}, item={self._item!r})"


def _tie_break(left: Any, right: Any) -> int:
    """Order two unequal items that share a score band."""
    try:
        if left < right:
            return -1
        if right < left:
            return 1
    except TypeError:
        pass
    # Unorderable (or order-equal but unequal) items.
    return -1 if id(left) < id(right) else 1


def _check_score(score: float) -> None:
    if score is None or not score >= 0:
        raise ValidationError(f"score must be >= 0, got {score!r}")


def _check_item(item: Any) -> None:
    if item is None:
        raise ValidationError("item must not be None")


def _check_epsilon(epsilon: float) -> None:
    if epsilon is None or not epsilon > 0:
        raise ValidationError(
            f"epsilon should be a small value close to but greater than zero, got {epsilon!r}"
        )
