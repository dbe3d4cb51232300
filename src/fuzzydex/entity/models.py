"""Attributes and the entity container used to build facts."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fuzzydex.errors import StateViolationError, ValidationError

__all__ = ["Attribute", "Entity"]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Attribute(Generic[T]):
    """Immutable (name, value) pair with value equality.

    Attributes
    ----------
    name : str
        Dimension name the value belongs to.
    value : T
        Attribute value, typically the string indexed for fuzzy lookup.
    """

    name: str
    value: T

    def __post_init__(self) -> None:
        """Reject missing names or values."""
        if self.name is None:
            raise ValidationError("attribute name must not be None")
        if self.value is None:
            raise ValidationError(f"attribute {self.name!r} must have a value")


class Entity:
    """Named-attribute container identified by ``identifier``.

    Primary attributes are unique by name. Aliases are extra
    (name, value) pairs for the same entity and may repeat a name.
    Entities compare, hash and sort by identifier, so they can be used
    directly as facts.

    Parameters
    ----------
    identifier : str
        Stable entity identifier.
    attributes : Iterable[Attribute], optional
        Initial primary attributes.
    """

    def __init__(self, identifier: str, attributes: Iterable[Attribute[Any]] = ()) -> None:
        if identifier is None:
            raise ValidationError("identifier must not be None")
        self.identifier = identifier
        self._attributes: dict[str, Attribute[Any]] = {}
        self._aliases: list[Attribute[Any]] = []
        self.add_all(attributes)

    def attributes(self) -> list[Attribute[Any]]:
        """Return primary attributes in insertion order."""
        return list(self._attributes.values())

    def aliases(self) -> list[Attribute[Any]]:
        """Return alias attributes in insertion order."""
        return list(self._aliases)

    def add_attribute(self, attribute: Attribute[Any]) -> None:
        """Add a primary attribute.

        Raises
        ------
        StateViolationError
            If an attribute with the same name already exists.
        """
        if attribute is None:
            raise ValidationError("attribute must not be None")
        if attribute.name in self._attributes:
            raise StateViolationError(
                f"Entity {self.identifier!r} already has attribute {attribute.name!r}"
            )
        self._attributes[attribute.name] = attribute

    def add_all(self, attributes: Iterable[Attribute[Any]]) -> None:
        """Add several primary attributes, stopping at the first duplicate."""
        if attributes is None:
            raise ValidationError("attributes must not be None")
        for attribute in attributes:
            self.add_attribute(attribute)

    def add_alias(self, attribute: Attribute[Any]) -> None:
        """Attach an extra indexable value without replacing the primary one."""
        if attribute is None:
            raise ValidationError("attribute must not be None")
        self._aliases.append(attribute)

    def get_attribute(self, name: str) -> Attribute[Any] | None:
        """Return the primary attribute called ``name``, if any."""
        if name is None:
            raise ValidationError("attribute name must not be None")
        return self._attributes.get(name)

    def set_attribute(self, attribute: Attribute[Any]) -> None:
        """Replace an existing primary attribute.

        Raises
        ------
        StateViolationError
            If no attribute with that name exists yet.
        """
        if attribute is None:
            raise ValidationError("attribute must not be None")
        if attribute.name not in self._attributes:
            raise StateViolationError(
                f"Entity {self.identifier!r} has no attribute {attribute.name!r} to replace"
            )
        self._attributes[attribute.name] = attribute

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __lt__(self, other: "Entity") -> bool:
        return self.identifier < other.identifier

    def __repr__(self) -> str:
        return f"Entity({self.identifier!r})"
