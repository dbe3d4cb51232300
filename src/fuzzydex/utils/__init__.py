"""Common utility functions for fuzzydex."""

from fuzzydex.utils.timestamps import get_iso_timestamp

__all__ = ["get_iso_timestamp"]
