"""Data models for audit logging."""

from dataclasses import dataclass, field
from typing import Any

__all__ = ["LogEvent"]


@dataclass
class LogEvent:
    """Structured log event.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp with "Z" suffix.
    run_id : str
        Identifier of the logger's session.
    level : str
        Log level ("DEBUG", "INFO", "WARN", "ERROR").
    event : str
        Event type (e.g., "fact_added", "query_resolved").
    stage : str | None
        Component that produced the event (e.g., "multidex").
    rid : str | None
        Fact identifier when the event concerns a single fact.
    data : dict[str, Any]
        Event-specific payload.
    """

    ts: str
    run_id: str
    level: str
    event: str
    stage: str | None = None
    rid: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
