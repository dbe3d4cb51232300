"""Bucketed fuzzy index.

Entries are grouped under a bucket key derived from their lookup key.
Every lookup only sees candidates that share the query's bucket. Results
are therefore the same as the scanning index restricted to one bucket:
callers trade cross-bucket fuzziness for lookups that no longer touch
every entry.
"""

from collections.abc import Iterable
from typing import TypeVar

from fuzzydex.collections import KeyValue
from fuzzydex.index.base import DEFAULT_TOLERANCE, FuzzyIndexBase, check_key
from fuzzydex.index.keys import BucketKey, default_bucket_key

__all__ = ["BucketedFuzzyIndex"]

V = TypeVar("V")


class BucketedFuzzyIndex(FuzzyIndexBase[V]):
    """Hash-bucketed key to value multimap.

    Parameters
    ----------
    weight : float, optional
        Dimension weight, by default 1.0.
    tolerance : int, optional
        Maximum edit distance for ranked matches, by default 6.
    bucket_key : BucketKey, optional
        Maps a key to its bucket, by default ``default_bucket_key``.
        Pass ``identity_bucket_key`` to group by the raw key only.
    """

    def __init__(
        self,
        weight: float = 1.0,
        tolerance: int = DEFAULT_TOLERANCE,
        bucket_key: BucketKey = default_bucket_key,
    ) -> None:
        super().__init__(weight=weight, tolerance=tolerance)
        self._bucket_key = bucket_key
        self._buckets: dict[str, list[KeyValue[V]]] = {}
        self._size = 0

    def add_entry(self, key: str, value: V) -> None:
        """Append an entry to its key's bucket."""
        entry = KeyValue(key, value)
        self._buckets.setdefault(self._bucket_key(key), []).append(entry)
        self._size += 1

    def bucket_for(self, key: str) -> list[KeyValue[V]]:
        """Return the entries sharing ``key``'s bucket, in insertion order."""
        check_key(key)
        return list(self._candidates(key))

    def _candidates(self, key: str) -> Iterable[KeyValue[V]]:
        return self._buckets.get(self._bucket_key(key), [])

    def __len__(self) -> int:
        return self._size
