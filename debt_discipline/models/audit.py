"""
Audit Models for Debt Discipline

Every mutation of the ledger, and every failure to load, save or import it,
is described by an AuditEvent. This provides:
1. Traceability of what happened to each debt
2. Debugging information when storage or an import goes wrong
3. A history the UI can show

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Mutations
    DEBT_ADDED = "debt_added"
    DEBT_TOGGLED = "debt_toggled"
    DEBT_EDITED = "debt_edited"
    DEBT_REMOVED = "debt_removed"
    COMPLETED_CLEARED = "completed_cleared"
    LEDGER_IMPORTED = "ledger_imported"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_PERSISTED = "ledger_persisted"
    LOAD_FAILED = "load_failed"
    SAVE_FAILED = "save_failed"

    # Rejected input
    IMPORT_REJECTED = "import_rejected"
    VALIDATION_REJECTED = "validation_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant ledger action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Which debt this is about, if any
    debt_id: Optional[str] = Field(
        default=None,
        description="ID of the debt this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "debt_id": self.debt_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.debt_added(debt_id, name)
        event = AuditEventBuilder.save_failed(key, error_message)
    """

    @staticmethod
    def debt_added(debt_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEBT_ADDED,
            debt_id=debt_id,
            description=f"Debt added: {name}",
            details={"name": name},
            is_user_action=True,
        )

    @staticmethod
    def debt_toggled(debt_id: str, completed: bool) -> AuditEvent:
        state = "completed" if completed else "not completed"
        return AuditEvent(
            event_type=AuditEventType.DEBT_TOGGLED,
            debt_id=debt_id,
            description=f"Debt marked {state}",
            details={"completed": completed},
            is_user_action=True,
        )

    @staticmethod
    def debt_edited(debt_id: str, changes: dict[str, Any]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEBT_EDITED,
            debt_id=debt_id,
            description=f"Debt edited ({len(changes)} fields changed)",
            details={"changes": changes},
            is_user_action=True,
        )

    @staticmethod
    def debt_removed(debt_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEBT_REMOVED,
            debt_id=debt_id,
            description="Debt removed",
            is_user_action=True,
        )

    @staticmethod
    def completed_cleared(removed_ids: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMPLETED_CLEARED,
            description=f"Cleared {len(removed_ids)} completed debts",
            details={"removed_ids": removed_ids},
            is_user_action=True,
        )

    @staticmethod
    def ledger_imported(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_IMPORTED,
            description=f"Ledger replaced by import of {count} debts",
            details={"count": count},
            is_user_action=True,
        )

    @staticmethod
    def ledger_loaded(key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            severity=AuditSeverity.DEBUG,
            description=f"Loaded {count} debts",
            details={"key": key, "count": count},
        )

    @staticmethod
    def ledger_persisted(key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_PERSISTED,
            severity=AuditSeverity.DEBUG,
            description=f"Persisted {count} debts",
            details={"key": key, "count": count},
        )

    @staticmethod
    def load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            description="Failed to load debts, starting with an empty ledger",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def save_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Failed to save debts",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def import_rejected(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_REJECTED,
            severity=AuditSeverity.WARNING,
            description="Import rejected, ledger unchanged",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def validation_rejected(
        operation: str,
        reason: str,
        debt_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_REJECTED,
            severity=AuditSeverity.WARNING,
            debt_id=debt_id,
            description=f"{operation.capitalize()} rejected: {reason}",
            details={"operation": operation, "reason": reason},
            is_user_action=True,
        )
