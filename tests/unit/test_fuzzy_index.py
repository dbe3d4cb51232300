"""Tests for single-dimension fuzzy indexes."""

from collections.abc import Iterable

import pytest

from fuzzydex.collections import KeyValue
from fuzzydex.errors import QueryShapeError, ValidationError
from fuzzydex.index import (
    DEFAULT_RANKING,
    BucketedFuzzyIndex,
    FuzzyIndexBase,
    Index,
    LevenshteinFuzzyIndex,
    create_index,
    default_bucket_key,
    identity_bucket_key,
)
from fuzzydex.query import Match, NAryQuery

# ---------------------------------------------------------------------------
# Behaviour shared by both variants
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_exact_match(populated_index) -> None:
    """Test exact lookup returns the stored value or None."""
    assert populated_index.get_exact_match("charlie") == "CHARLIE"
    assert populated_index.get_exact_match("charley") is None


@pytest.mark.unit
def test_exact_matches_use_default_ranking(populated_index) -> None:
    """Test literal matches are scored with the default rank."""
    results = populated_index.get_exact_matches("delta")

    assert results.items() == ["DELTA"]
    assert results.first_entry().element.score == DEFAULT_RANKING


@pytest.mark.unit
def test_nearest_match_prefers_first_inserted_on_ties(populated_index) -> None:
    """Test equidistant candidates resolve to the earliest entry."""
    assert populated_index.get_nearest_match("charlie3") == "CHARLIE"


@pytest.mark.unit
def test_ranked_matches_within_tolerance(populated_index) -> None:
    """Test ranked matches are scored by distance and bounded by tolerance."""
    results = populated_index.get_ranked_matches("charlie", tolerance=1)
    scores = [element.score for element in results]

    assert results.items() == ["CHARLIE", "CHARLIE1", "CHARLIE2"]
    assert scores == [0.0, 1.0, 1.0]


@pytest.mark.unit
def test_zero_tolerance_is_exact(populated_index) -> None:
    """Test tolerance 0 only keeps identical keys."""
    assert populated_index.get_ranked_matches("eager", tolerance=0).items() == ["EAGER"]


@pytest.mark.unit
def test_len_counts_entries(populated_index) -> None:
    """Test every added entry is counted."""
    assert len(populated_index) == 9


@pytest.mark.unit
def test_match_entry_points(populated_index) -> None:
    """Test query-object entry points unwrap a Match."""
    assert populated_index.match_exact(Match("name", "alpha")).items() == ["ALPHA"]
    assert populated_index.match_nearest(Match("name", "Alpha")).items() == ["ALPHA"]
    assert "FOXTROT" in populated_index.match_ranked(0.0, Match("name", "Foxtrot")).items()


@pytest.mark.unit
def test_match_entry_points_reject_compound_query(populated_index) -> None:
    """Test a single index only accepts Match queries."""
    with pytest.raises(QueryShapeError):
        populated_index.match_exact(NAryQuery.of(Match("name", "alpha")))
    with pytest.raises(ValidationError):
        populated_index.match_ranked(0.0, None)


@pytest.mark.unit
def test_none_key_rejected(populated_index) -> None:
    """Test None keys fail on every lookup and on insert."""
    with pytest.raises(ValidationError):
        populated_index.get_exact_match(None)
    with pytest.raises(ValidationError):
        populated_index.get_ranked_matches(None)
    with pytest.raises(ValidationError):
        populated_index.add_entry(None, "X")
    with pytest.raises(ValidationError):
        populated_index.add_entry("x", None)


@pytest.mark.unit
@pytest.mark.parametrize("cls", [LevenshteinFuzzyIndex, BucketedFuzzyIndex])
def test_duplicate_keys_are_kept(cls) -> None:
    """Test the index is a multimap."""
    index = cls()
    index.add_entry("alpha", "A1")
    index.add_entry("alpha", "A2")

    assert index.get_exact_match("alpha") == "A1"
    assert sorted(index.get_exact_matches("alpha").items()) == ["A1", "A2"]


@pytest.mark.unit
@pytest.mark.parametrize("cls", [LevenshteinFuzzyIndex, BucketedFuzzyIndex])
def test_empty_index(cls) -> None:
    """Test lookups on an empty index return nothing."""
    index = cls()

    assert index.get_nearest_match("alpha") is None
    assert len(index.match_nearest(Match("name", "alpha"))) == 0
    assert len(index.get_ranked_matches("alpha")) == 0


@pytest.mark.unit
@pytest.mark.parametrize("cls", [LevenshteinFuzzyIndex, BucketedFuzzyIndex])
def test_weight_and_tolerance_validated(cls) -> None:
    """Test negative weight or tolerance fails."""
    with pytest.raises(ValidationError):
        cls(weight=-1.0)
    with pytest.raises(ValidationError):
        cls(tolerance=-1)

    index = cls(weight=2.5, tolerance=3)
    assert index.weight == 2.5
    assert index.tolerance == 3
    assert isinstance(index, Index)


# ---------------------------------------------------------------------------
# Variant-specific behaviour
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_default_tolerance_reach(populated_index) -> None:
    """Test the scanning index reaches keys the bucketed index never sees."""
    results = populated_index.get_ranked_matches("charlie")

    assert results.first_entry().element.item == "CHARLIE"
    if isinstance(populated_index, BucketedFuzzyIndex):
        assert len(results) == 3
    else:
        assert len(results) > 3


@pytest.mark.unit
def test_bucketed_index_misses_other_buckets() -> None:
    """Test fuzzy lookups only see candidates in the query's bucket."""
    index: BucketedFuzzyIndex[str] = BucketedFuzzyIndex()
    index.add_entry("charlie", "C")

    assert index.get_nearest_match("Charlie-7") == "C"
    assert index.get_nearest_match("charlei") is None
    assert [kv.value for kv in index.bucket_for("CHARLIE")] == ["C"]


@pytest.mark.unit
def test_bucketed_index_custom_bucket_key() -> None:
    """Test identity buckets only group identical keys."""
    index: BucketedFuzzyIndex[str] = BucketedFuzzyIndex(bucket_key=identity_bucket_key)
    index.add_entry("charlie", "C")
    index.add_entry("charlie1", "C1")

    assert index.get_ranked_matches("charlie").items() == ["C"]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("key", "expected"),
    [("Charlie-2", "charlie"), ("1024", "1024"), ("ÉCOLE", "école"), ("", "")],
)
def test_default_bucket_key(key: str, expected: str) -> None:
    """Test bucket keys keep case-folded letters only."""
    assert default_bucket_key(key) == expected


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_create_index() -> None:
    """Test registry names map to index classes."""
    index = create_index("bucketed", weight=2.0, tolerance=2)

    assert isinstance(index, BucketedFuzzyIndex)
    assert index.weight == 2.0
    assert isinstance(create_index("levenshtein"), LevenshteinFuzzyIndex)


@pytest.mark.unit
def test_create_index_unknown_type() -> None:
    """Test an unknown registry name fails with the valid names listed."""
    with pytest.raises(ValidationError, match="bucketed, levenshtein"):
        create_index("ngram")


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


class _ReversedIndex(FuzzyIndexBase[str]):
    """Minimal index scanning its entries newest first."""

    def __init__(self) -> None:
        super().__init__()
        self._entries: list[KeyValue[str]] = []

    def add_entry(self, key: str, value: str) -> None:
        self._entries.append(KeyValue(key, value))

    def _candidates(self, key: str) -> Iterable[KeyValue[str]]:
        return reversed(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@pytest.mark.unit
def test_base_index_is_abstract() -> None:
    """Test the base class cannot be used without a storage strategy."""
    with pytest.raises(TypeError):
        FuzzyIndexBase()  # type: ignore[abstract]


@pytest.mark.unit
def test_lookups_come_from_candidates() -> None:
    """Test every lookup walks the subclass's candidates in their order."""
    index = _ReversedIndex()
    index.add_entry("alpha", "OLD")
    index.add_entry("alpha", "NEW")
    index.add_entry("alphb", "NEAR")

    assert index.get_exact_match("alpha") == "NEW"
    assert index.get_nearest_match("alphc") == "NEAR"
    assert len(index.get_exact_matches("alpha")) == 2
    assert index.match_ranked(0.0, Match("name", "alpha")).items() == ["NEW", "OLD", "NEAR"]
    assert isinstance(index, Index)
