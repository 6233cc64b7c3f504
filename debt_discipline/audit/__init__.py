"""Audit logging package."""

from debt_discipline.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
