"""Audit logging subsystem for fuzzydex.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: event envelope
"""

from fuzzydex.audit.helpers import generate_run_id
from fuzzydex.audit.logger import AuditLogger
from fuzzydex.audit.models import LogEvent
from fuzzydex.utils import get_iso_timestamp

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
    "get_iso_timestamp",
]
