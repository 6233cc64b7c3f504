"""
Data Models Package

This package contains all Pydantic models used in Debt Discipline.
All data flowing through the ledger must conform to these schemas.
"""

from debt_discipline.models.debt import (
    MAX_DUE_DAY,
    MIN_DUE_DAY,
    UNTITLED_DEBT_NAME,
    Debt,
    DebtFilter,
    DebtForm,
    LedgerSummary,
    PayoffProjection,
    SortDirection,
    SortKey,
)
from debt_discipline.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Debt models
    "MAX_DUE_DAY",
    "MIN_DUE_DAY",
    "UNTITLED_DEBT_NAME",
    "Debt",
    "DebtFilter",
    "DebtForm",
    "LedgerSummary",
    "PayoffProjection",
    "SortDirection",
    "SortKey",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
