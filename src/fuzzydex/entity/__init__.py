"""Caller-side fact building blocks: attributes and entities."""

from fuzzydex.entity.models import Attribute, Entity

__all__ = ["Attribute", "Entity"]
