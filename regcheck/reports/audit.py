"""
Audit sinks for compliance events and query history.

Sinks are fire-and-forget from the pipeline's point of view: a failing
sink is logged by the caller and never fails an analysis.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class AuditLogType(Enum):
    """Kinds of audit records."""
    BIAS_DETECTED = "BIAS_DETECTED"
    HIGH_CONFLICT = "HIGH_CONFLICT"
    QUERY_PROCESSED = "QUERY_PROCESSED"


@dataclass(frozen=True)
class AuditRecord:
    """A structured audit event."""

    log_type: AuditLogType
    details: dict
    query_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'log_type': self.log_type.value,
            'query_id': self.query_id,
            'details': self.details,
            'created_at': self.created_at.isoformat()
        }


class AuditSink(ABC):
    """Abstract base class for audit sinks."""

    @abstractmethod
    def emit(self, record: AuditRecord) -> None:
        """Record one audit event."""
        pass


class LoggingAuditSink(AuditSink):
    """
    Writes each record as one JSON line through a logger.
    """

    def __init__(self, logger_name: str = "regcheck.audit", level: int = logging.INFO):
        self._log = logging.getLogger(logger_name)
        self.level = level

    def emit(self, record: AuditRecord) -> None:
        self._log.log(self.level, json.dumps(record.to_dict(), sort_keys=True, default=str))


class InMemoryAuditSink(AuditSink):
    """Keeps records in a list; useful for tests and short-lived sessions."""

    def __init__(self):
        self.records: list[AuditRecord] = []

    def emit(self, record: AuditRecord) -> None:
        self.records.append(record)

    def of_type(self, log_type: AuditLogType) -> list[AuditRecord]:
        return [r for r in self.records if r.log_type == log_type]
