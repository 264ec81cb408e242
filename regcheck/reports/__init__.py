"""Reports module for formatting results and emitting audit records."""

from .formatter import TraceabilityFormatter
from .audit import (
    AuditLogType,
    AuditRecord,
    AuditSink,
    LoggingAuditSink,
    InMemoryAuditSink,
)

__all__ = [
    "TraceabilityFormatter",
    "AuditLogType",
    "AuditRecord",
    "AuditSink",
    "LoggingAuditSink",
    "InMemoryAuditSink",
]
