"""Bucket key functions for the bucketed index."""

from collections.abc import Callable

__all__ = ["BucketKey", "default_bucket_key", "identity_bucket_key"]

BucketKey = Callable[[str], str]


def default_bucket_key(key: str) -> str:
    """Reduce a key to its case-folded letters.

    Keys without any letters fall back to their case-folded form so that
    purely numeric keys still spread over distinct buckets.

    Examples
    --------
        >>> default_bucket_key("Charlie-2")
        'charlie'
        >>> default_bucket_key("1024")
        '1024'
    """
    folded = key.casefold()
    letters = "".join(ch for ch in folded if ch.isalpha())
    return letters or folded


def identity_bucket_key(key: str) -> str:
    """Bucket by the raw key, making every bucket an exact-key group."""
    return key
