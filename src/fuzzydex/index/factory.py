"""Registry-based factory for dimension index instantiation.

New index types are added by extending ``INDEX_REGISTRY``.
"""

from typing import Any

from fuzzydex.errors import ValidationError
from fuzzydex.index.base import FuzzyIndexBase
from fuzzydex.index.bucketed import BucketedFuzzyIndex
from fuzzydex.index.levenshtein_index import LevenshteinFuzzyIndex

__all__ = ["INDEX_REGISTRY", "create_index"]

# type -> index class
INDEX_REGISTRY: dict[str, type[FuzzyIndexBase[Any]]] = {
    "levenshtein": LevenshteinFuzzyIndex,
    "bucketed": BucketedFuzzyIndex,
}


def create_index(index_type: str, **params: Any) -> FuzzyIndexBase[Any]:
    """Instantiate a dimension index by registry name.

    Parameters
    ----------
    index_type : str
        Key in ``INDEX_REGISTRY``.
    **params : Any
        Keyword arguments forwarded to the index constructor
        (``weight``, ``tolerance``, ...).

    Returns
    -------
    FuzzyIndexBase
        Empty index.

    Raises
    ------
    ValidationError
        If ``index_type`` is not in the registry.
    """
    cls = INDEX_REGISTRY.get(index_type)
    if cls is None:
        valid = ", ".join(sorted(INDEX_REGISTRY))
        raise ValidationError(f"Unknown index type: {index_type!r}. Valid types: {valid}")
    return cls(**params)
