"""Query shapes consumed by the indexes.

A query is a tagged union of two shapes:

- ``Match``: one dimension name and the key to look up in it.
- ``NAryQuery``: an ordered sequence of ``Match`` sub-queries, one per
  dimension.

A bare ``Match`` passed where a compound query is expected is treated as
a one-dimension ``NAryQuery``.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from fuzzydex.entity import Attribute
from fuzzydex.errors import QueryShapeError, ValidationError

__all__ = ["Match", "NAryQuery", "Query", "as_nary", "expect_match"]


@dataclass(frozen=True, slots=True)
class Match:
    """Single-dimension lookup.

    Attributes
    ----------
    dimension : str
        Name of the dimension to search.
    key : str
        Key to look up.
    """

    dimension: str
    key: str

    def __post_init__(self) -> None:
        """Reject missing fields."""
        if self.dimension is None:
            raise ValidationError("match dimension must not be None")
        if self.key is None:
            raise ValidationError(f"match key for {self.dimension!r} must not be None")

    @classmethod
    def from_attribute(cls, attribute: Attribute[str]) -> "Match":
        """Build a match from an attribute's name and value."""
        if attribute is None:
            raise ValidationError("attribute must not be None")
        return cls(attribute.name, attribute.value)


@dataclass(frozen=True, slots=True)
class NAryQuery:
    """Ordered sequence of single-dimension matches.

    Attributes
    ----------
    subqueries : tuple[Match, ...]
        Matches resolved in order.
    """

    subqueries: tuple[Match, ...]

    def __post_init__(self) -> None:
        """Require every sub-query to be a Match."""
        for subquery in self.subqueries:
            if not isinstance(subquery, Match):
                raise QueryShapeError(
                    f"Expected Match sub-queries. Actually got: {type(subquery).__name__}"
                )

    @classmethod
    def of(cls, *matches: Match) -> "NAryQuery":
        """Build a query from matches."""
        return cls(tuple(matches))

    @classmethod
    def from_attributes(cls, *attributes: Attribute[str]) -> "NAryQuery":
        """Build a query with one match per attribute."""
        return cls(tuple(Match.from_attribute(a) for a in attributes))

    def dimensions(self) -> list[str]:
        """Return dimension names in resolution order."""
        return [subquery.dimension for subquery in self.subqueries]

    def __iter__(self) -> Iterator[Match]:
        return iter(self.subqueries)

    def __len__(self) -> int:
        return len(self.subqueries)


Query = Match | NAryQuery


def as_nary(query: Any) -> NAryQuery:
    """Normalize a query to its compound shape.

    Raises
    ------
    ValidationError
        If query is None.
    QueryShapeError
        If query is neither a Match nor an NAryQuery.
    """
    match query:
        case None:
            raise ValidationError("query must not be None")
        case NAryQuery():
            return query
        case Match():
            return NAryQuery((query,))
        case _:
            raise QueryShapeError(
                f"Expected a Match or NAryQuery. Actually got: {type(query).__name__}"
            )


def expect_match(query: Any) -> Match:
    """Return ``query`` if it is a single-dimension match.

    Raises
    ------
    ValidationError
        If query is None.
    QueryShapeError
        For any other query shape.
    """
    match query:
        case None:
            raise ValidationError("query must not be None")
        case Match():
            return query
        case _:
            raise QueryShapeError(
                f"Expected a Match query. Actually got: {type(query).__name__}"
            )
