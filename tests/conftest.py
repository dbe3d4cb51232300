"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from fuzzydex.audit import AuditLogger  # noqa: E402
from fuzzydex.entity import Attribute  # noqa: E402
from fuzzydex.index import (  # noqa: E402
    BucketedFuzzyIndex,
    FuzzyIndexBase,
    LevenshteinFuzzyIndex,
)
from fuzzydex.multidex import MultidexConfig, MultidimensionalIndex  # noqa: E402

# Keys used by the single-index tests; value is the key upper-cased.
INDEX_KEYS = (
    "alpha",
    "baker",
    "charlie",
    "charlie1",
    "charlie2",
    "delta",
    "eager",
    "foxtrot",
    "epsilon",
)


@pytest.fixture(params=[LevenshteinFuzzyIndex, BucketedFuzzyIndex], ids=["scan", "bucketed"])
def populated_index(request: pytest.FixtureRequest) -> FuzzyIndexBase[str]:
    """Index of both variants holding every key in INDEX_KEYS."""
    index = request.param()
    for key in INDEX_KEYS:
        index.add_entry(key, key.upper())
    return index


@pytest.fixture
def make_multidex() -> Callable[..., MultidimensionalIndex[str]]:
    """Factory for a multidex with weighted scanning dimensions.

    ``facts`` maps fact -> {dimension: key}; every dimension named in
    ``weights`` is registered first.
    """

    def _factory(
        weights: dict[str, float],
        facts: dict[str, dict[str, str]] | None = None,
        config: MultidexConfig | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> MultidimensionalIndex[str]:
        multidex: MultidimensionalIndex[str] = MultidimensionalIndex(config, audit_logger)
        for name, weight in weights.items():
            multidex.add_index_dimension(name, LevenshteinFuzzyIndex(weight=weight))
        for fact, attributes in (facts or {}).items():
            multidex.add_fact(fact, *(Attribute(n, v) for n, v in attributes.items()))
        return multidex

    return _factory


@pytest.fixture
def facts_file(tmp_path: Path) -> Path:
    """JSONL facts file with three people."""
    path = tmp_path / "people.jsonl"
    path.write_text(
        '{"fact": "F1", "attributes": {"first": "alpha", "last": ["lincoln", "linkon"]}}\n'
        '{"fact": "F2", "attributes": {"first": "baker", "last": "washington"}}\n'
        "\n"
        '{"fact": "F3", "attributes": {"first": "charlie", "last": "jefferson"}}\n',
        encoding="utf-8",
    )
    return path
