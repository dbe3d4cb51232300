"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with
a persistent file handle. Index components accept an optional logger
and emit nothing when it is None.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from fuzzydex.audit.helpers import generate_run_id
from fuzzydex.audit.models import LogEvent
from fuzzydex.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write.

    Attributes
    ----------
    run_id : str
        Unique session identifier.
    log_path : Path
        Path to JSONL log file.
    current_stage : str | None
        Current component name for context.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        run_id : str
            Unique session identifier.
        log_path : Path
            Path to JSONL log file.
        """
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    @classmethod
    def start(cls, log_path: Path | str) -> "AuditLogger":
        """Open a logger with a freshly generated run ID."""
        return cls(run_id=generate_run_id(), log_path=Path(log_path))

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Set current component context."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "query_resolved").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        stage : str | None, optional
            Component identifier, uses current_stage if not provided.
        rid : str | None, optional
            Fact identifier if event is fact-specific.
        """
        if data is None:
            data = {}

        if stage is None:
            stage = self.current_stage

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data,
            stage=stage,
            rid=rid,
        )

        self._write_event(log_event)

    def _write_event(self, event: LogEvent) -> None:
        event_dict = asdict(event)
        json.dump(
            event_dict,
            self._file,
            ensure_ascii=False,
            separators=(",", ":"),
            default=str,
        )
        self._file.write("\n")
        self._file.flush()

    def dimension_added(self, name: str, index_type: str, weight: float) -> None:
        """Log dimension_added event.

        Parameters
        ----------
        name : str
            Dimension name.
        index_type : str
            Class name of the dimension's index.
        weight : float
            Dimension weight.
        """
        self.event(
            "dimension_added",
            data={"dimension": name, "index_type": index_type, "weight": weight},
        )

    def fact_added(self, fact: Any, dimensions: list[str], existing: bool = False) -> None:
        """Log fact_added (or fact_members_added for an existing fact).

        Parameters
        ----------
        fact : Any
            The fact, logged by its string form.
        dimensions : list[str]
            Dimensions the fact was indexed under.
        existing : bool, optional
            True when members were attached to an already known fact.
        """
        self.event(
            "fact_members_added" if existing else "fact_added",
            data={"dimensions": dimensions},
            rid=str(fact),
        )

    def query_resolved(
        self,
        mode: str,
        dimensions: list[str],
        result_count: int,
        threshold: float | None = None,
    ) -> None:
        """Log query_resolved event.

        Parameters
        ----------
        mode : str
            Resolution mode ("exact", "nearest", "ranked").
        dimensions : list[str]
            Dimensions named by the query, in resolution order.
        result_count : int
            Size of the returned RankedSet.
        threshold : float | None, optional
            Score threshold for ranked resolution.
        """
        data: dict[str, Any] = {
            "mode": mode,
            "dimensions": dimensions,
            "result_count": result_count,
        }
        if threshold is not None:
            data["threshold"] = threshold

        self.event("query_resolved", data=data)

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        stage : str | None, optional
            Component where error occurred.
        rid : str | None, optional
            Fact identifier if error is fact-specific.
        """
        self.event(
            "error",
            data={"exception_class": exception_class, "message": message},
            stage=stage,
            rid=rid,
            level="ERROR",
        )
