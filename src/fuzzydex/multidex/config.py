"""Multidimensional index configuration."""

from dataclasses import asdict, dataclass
from typing import Any

from fuzzydex.errors import ValidationError
from fuzzydex.index import DEFAULT_TOLERANCE, INDEX_REGISTRY

__all__ = ["MultidexConfig"]


@dataclass
class MultidexConfig:
    """Configuration for a MultidimensionalIndex.

    Attributes
    ----------
    track_facts : bool
        Keep the master fact set, enforcing fact uniqueness and
        existence checks (default: True). Disable to save memory.
    index_type : str
        Registry name of the index created by ``add_index_dimension``
        when no index is supplied (default: "levenshtein").
    default_tolerance : int
        Tolerance given to indexes created from this config (default: 6).
    """

    track_facts: bool = True
    index_type: str = "levenshtein"
    default_tolerance: int = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.index_type not in INDEX_REGISTRY:
            valid = ", ".join(sorted(INDEX_REGISTRY))
            raise ValidationError(
                f"Unknown index type: {self.index_type!r}. Valid types: {valid}"
            )

        if self.default_tolerance is None or self.default_tolerance < 0:
            raise ValidationError(
                f"default_tolerance must be >= 0, got {self.default_tolerance!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
