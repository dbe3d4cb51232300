"""Public API for building and querying fuzzy indexes.

This module provides high-level convenience functions:
- Loading facts from JSONL files into Entity objects
- Building a MultidimensionalIndex from entities
- Running a query in one of the three resolution modes
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from fuzzydex.audit import AuditLogger
from fuzzydex.collections import RankedSet
from fuzzydex.entity import Attribute, Entity
from fuzzydex.errors import FuzzydexError, ValidationError
from fuzzydex.index import create_index
from fuzzydex.multidex import MultidexConfig, MultidimensionalIndex, ResolutionMode
from fuzzydex.query import Match, NAryQuery

__all__ = [
    "ParseError",
    "load_facts",
    "build_index",
    "search",
]


class ParseError(FuzzydexError, ValueError):
    """Raised when a facts file cannot be parsed."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
        line: int | None = None,
    ) -> None:
        """Initialize parse error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        line : int | None, optional
            1-based line number where error occurred.
        """
        super().__init__(message)
        self.file = file
        self.line = line


def load_facts(path: str | Path) -> list[Entity]:
    """Load facts from a JSONL file.

    Each non-blank line is an object of the form::

        {"fact": "F1", "attributes": {"first": "alpha", "last": ["lincoln", "lincon"]}}

    A string value becomes a primary attribute. For a list, the first value
    is the primary attribute and the rest become aliases.

    Parameters
    ----------
    path : str | Path
        Path to JSONL file.

    Returns
    -------
    list[Entity]
        One entity per line, identified by its ``fact`` field.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    ParseError
        If a line is not valid JSON or does not match the expected shape.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    entities: list[Entity] = []
    with file_path.open(encoding="utf-8") as f:
        for line_num, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                raise ParseError(
                    f"Malformed JSON at line {line_num}: {e}", file=str(file_path), line=line_num
                ) from e
            entities.append(_entity_from_dict(data, file_path, line_num))

    return entities


def _entity_from_dict(data: Any, file_path: Path, line_num: int) -> Entity:
    def fail(reason: str) -> ParseError:
        return ParseError(f"Invalid fact at line {line_num}: {reason}", str(file_path), line_num)

    if not isinstance(data, dict):
        raise fail("expected a JSON object")

    fact = data.get("fact")
    if not isinstance(fact, str) or not fact:
        raise fail("'fact' must be a non-empty string")

    attributes = data.get("attributes", {})
    if not isinstance(attributes, dict):
        raise fail("'attributes' must be an object")

    entity = Entity(fact)
    for name, value in attributes.items():
        values = value if isinstance(value, list) else [value]
        if not values or not all(isinstance(v, str) for v in values):
            raise fail(f"attribute {name!r} must be a string or a non-empty list of strings")
        entity.add_attribute(Attribute(name, values[0]))
        for alias in values[1:]:
            entity.add_alias(Attribute(name, alias))

    return entity


def build_index(
    entities: Iterable[Entity],
    dimensions: Mapping[str, float],
    *,
    config: MultidexConfig | None = None,
    audit_logger: AuditLogger | None = None,
) -> MultidimensionalIndex[str]:
    """Build a MultidimensionalIndex from entities.

    Parameters
    ----------
    entities : Iterable[Entity]
        Facts to index, e.g. from ``load_facts``.
    dimensions : Mapping[str, float]
        Dimension name to weight. Every attribute an entity carries must
        name one of these.
    config : MultidexConfig | None, optional
        Index configuration. If None, uses defaults.
    audit_logger : AuditLogger | None, optional
        Audit logger for tracking. If None, no logging.

    Returns
    -------
    MultidimensionalIndex[str]
        Index whose facts are the entity identifiers.

    Examples
    --------
        >>> from fuzzydex import build_index, load_facts
        >>> index = build_index(load_facts("people.jsonl"), {"first": 1.0, "last": 2.0})
    """
    if config is None:
        config = MultidexConfig()

    multidex: MultidimensionalIndex[str] = MultidimensionalIndex(config, audit_logger=audit_logger)
    for name, weight in dimensions.items():
        multidex.add_index_dimension(
            name,
            create_index(config.index_type, weight=weight, tolerance=config.default_tolerance),
        )

    for entity in entities:
        multidex.add_entity(entity)

    return multidex


def search(
    multidex: MultidimensionalIndex[Any],
    matches: Mapping[str, str],
    *,
    mode: ResolutionMode | str = ResolutionMode.RANKED,
    threshold: float | None = None,
) -> RankedSet[Any]:
    """Run a query built from ``{dimension: key}`` pairs.

    Parameters
    ----------
    multidex : MultidimensionalIndex
        Index to search.
    matches : Mapping[str, str]
        Dimension name to lookup key, resolved in mapping order.
    mode : ResolutionMode | str, optional
        "exact", "nearest" or "ranked", by default "ranked".
    threshold : float | None, optional
        Score threshold for ranked mode. If None, no threshold is applied,
        so facts missing from some dimensions are always kept.

    Returns
    -------
    RankedSet
        Ranked facts.
    """
    try:
        resolution = ResolutionMode(mode)
    except ValueError as e:
        valid = ", ".join(m.value for m in ResolutionMode)
        raise ValidationError(f"Unknown mode: {mode!r}. Valid modes: {valid}") from e

    query = NAryQuery.of(*(Match(name, key) for name, key in matches.items()))

    match resolution:
        case ResolutionMode.EXACT:
            return multidex.get_exact_matches(query)
        case ResolutionMode.NEAREST:
            return multidex.get_nearest_matches(query)
        case ResolutionMode.RANKED:
            if threshold is None:
                threshold = math.inf
            return multidex.get_ranked_matches(threshold, query)
