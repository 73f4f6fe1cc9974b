"""Audit logging for gate decisions."""

from .audit import (
    AuditLog,
    AuditEntry,
    GateAction,
    get_audit_log,
)

__all__ = [
    "AuditLog",
    "AuditEntry",
    "GateAction",
    "get_audit_log",
]
