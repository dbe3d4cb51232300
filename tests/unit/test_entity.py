"""Tests for attributes and entities."""

import pytest

from fuzzydex.entity import Attribute, Entity
from fuzzydex.errors import StateViolationError, ValidationError


@pytest.mark.unit
def test_attribute_value_equality() -> None:
    """Test attributes compare by name and value."""
    assert Attribute("first", "alpha") == Attribute("first", "alpha")
    assert Attribute("first", "alpha") != Attribute("first", "alfa")
    assert hash(Attribute("first", "alpha")) == hash(Attribute("first", "alpha"))


@pytest.mark.unit
def test_attribute_requires_name_and_value() -> None:
    """Test None name or value is rejected."""
    with pytest.raises(ValidationError):
        Attribute(None, "alpha")  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        Attribute("first", None)


@pytest.mark.unit
def test_entity_attributes_and_aliases() -> None:
    """Test primary attributes are unique and aliases may repeat."""
    entity = Entity("F1", [Attribute("first", "alpha")])
    entity.add_attribute(Attribute("last", "lincoln"))
    entity.add_alias(Attribute("last", "linkon"))
    entity.add_alias(Attribute("last", "lincon"))

    assert [a.name for a in entity.attributes()] == ["first", "last"]
    assert [a.value for a in entity.aliases()] == ["linkon", "lincon"]
    assert entity.get_attribute("last") == Attribute("last", "lincoln")
    assert entity.get_attribute("middle") is None


@pytest.mark.unit
def test_entity_duplicate_attribute_rejected() -> None:
    """Test adding a second attribute with the same name fails."""
    entity = Entity("F1", [Attribute("first", "alpha")])

    with pytest.raises(StateViolationError):
        entity.add_attribute(Attribute("first", "alfa"))


@pytest.mark.unit
def test_entity_set_attribute() -> None:
    """Test set_attribute replaces only existing attributes."""
    entity = Entity("F1", [Attribute("first", "alpha")])
    entity.set_attribute(Attribute("first", "alfa"))

    assert entity.get_attribute("first") == Attribute("first", "alfa")
    with pytest.raises(StateViolationError):
        entity.set_attribute(Attribute("last", "lincoln"))


@pytest.mark.unit
def test_entity_identity() -> None:
    """Test entities compare, hash and sort by identifier."""
    a = Entity("A", [Attribute("first", "alpha")])
    a_again = Entity("A")
    b = Entity("B")

    assert a == a_again
    assert hash(a) == hash(a_again)
    assert sorted([b, a]) == [a, b]


@pytest.mark.unit
def test_entity_requires_identifier() -> None:
    """Test None identifier is rejected."""
    with pytest.raises(ValidationError):
        Entity(None)  # type: ignore[arg-type]
