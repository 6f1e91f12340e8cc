"""Monitoring exports."""

from tradedash.monitoring.audit import AuditLog

__all__ = ["AuditLog"]
