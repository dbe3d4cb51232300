"""Small value types used by the indexes."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from fuzzydex.collections.ranked_set import Order, RankedSet
from fuzzydex.errors import ValidationError

__all__ = ["AccumulationSet", "KeyValue"]

V = TypeVar("V")
T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class KeyValue(Generic[V]):
    """A string key paired with an indexed value.

    Attributes
    ----------
    key : str
        Lookup key.
    value : V
        Stored value.
    """

    key: str
    value: V

    def __post_init__(self) -> None:
        """Reject missing keys or values."""
        if self.key is None:
            raise ValidationError("key must not be None")
        if self.value is None:
            raise ValidationError("value must not be None")


class AccumulationSet(Generic[T]):
    """Weighted counter whose totals can be read back as a RankedSet.

    Parameters
    ----------
    weight : float, optional
        Amount each unit of quantity contributes, by default 1.0.
    """

    def __init__(self, weight: float = 1.0) -> None:
        if weight is None or not weight >= 0:
            raise ValidationError(f"weight must be >= 0, got {weight!r}")
        self._weight = weight
        self._totals: dict[T, float] = {}

    def add(self, item: T, quantity: float = 1.0) -> None:
        """Accumulate ``weight * quantity`` for ``item``."""
        if item is None:
            raise ValidationError("item must not be None")
        self._totals[item] = self._totals.get(item, 0.0) + self._weight * quantity

    def total(self, item: T) -> float:
        """Return the accumulated score for ``item`` (0.0 when unseen)."""
        return self._totals.get(item, 0.0)

    def get_rankings(self, order: Order = Order.ASCENDING) -> RankedSet[T]:
        """Return accumulated totals as a RankedSet."""
        rankings: RankedSet[T] = RankedSet(order)
        for item, score in self._totals.items():
            rankings.add(score, item)
        return rankings

    def __len__(self) -> int:
        return len(self._totals)
