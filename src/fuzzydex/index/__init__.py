"""Single-dimension fuzzy indexes.

Two interchangeable implementations of the ``Index`` protocol:

- ``LevenshteinFuzzyIndex`` scans every entry.
- ``BucketedFuzzyIndex`` scans only the query's bucket.
"""

from fuzzydex.index.base import DEFAULT_RANKING, DEFAULT_TOLERANCE, FuzzyIndexBase, Index
from fuzzydex.index.bucketed import BucketedFuzzyIndex
from fuzzydex.index.factory import INDEX_REGISTRY, create_index
from fuzzydex.index.keys import BucketKey, default_bucket_key, identity_bucket_key
from fuzzydex.index.levenshtein_index import LevenshteinFuzzyIndex

__all__ = [
    "DEFAULT_RANKING",
    "DEFAULT_TOLERANCE",
    "Index",
    "FuzzyIndexBase",
    "LevenshteinFuzzyIndex",
    "BucketedFuzzyIndex",
    "BucketKey",
    "default_bucket_key",
    "identity_bucket_key",
    "INDEX_REGISTRY",
    "create_index",
]
