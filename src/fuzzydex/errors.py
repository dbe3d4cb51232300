"""Exception taxonomy for fuzzydex.

Every error is raised synchronously at the call that violates a contract.
Each class also derives from the matching builtin family so callers can
catch either the precise class or the builtin one.
"""

from typing import Any

__all__ = [
    "FuzzydexError",
    "ValidationError",
    "DimensionNotFoundError",
    "StateViolationError",
    "FactStateError",
    "QueryShapeError",
]


class FuzzydexError(Exception):
    """Base class for all fuzzydex errors."""


class ValidationError(FuzzydexError, ValueError):
    """Raised when an argument breaks a precondition (negative score, None key, ...)."""


class DimensionNotFoundError(FuzzydexError, LookupError):
    """Raised when a query or attribute names a dimension that does not exist.

    Attributes
    ----------
    dimension : str
        The unknown dimension name.
    """

    def __init__(self, dimension: str) -> None:
        super().__init__(f"Dimension {dimension!r} does not exist")
        self.dimension = dimension


class StateViolationError(FuzzydexError, RuntimeError):
    """Raised when an operation is not allowed in the container's current state."""


class FactStateError(StateViolationError):
    """Raised on duplicate fact registration or indexing an unknown fact.

    Attributes
    ----------
    fact : Any
        The offending fact.
    """

    def __init__(self, message: str, fact: Any) -> None:
        super().__init__(message)
        self.fact = fact


class QueryShapeError(FuzzydexError, TypeError):
    """Raised when a query object of an unsupported shape is supplied."""
