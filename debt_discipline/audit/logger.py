"""
Audit Logger

DESIGN DECISION: Every ledger mutation and every storage/import failure
is logged. This provides:
1. Traceability of what happened to each debt
2. Debugging capability when storage misbehaves
3. A recent-history view the UI can show

The audit logger:
- Is synchronous, like the rest of the ledger
- Never raises; a logging problem must not break a ledger operation
- Keeps a bounded, append-only in-memory trail
"""

import logging
import sys
from collections import deque
from typing import Optional

import structlog

from debt_discipline.models.audit import AuditEvent, AuditSeverity


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog (and the stdlib root logger it writes through).

    Call once at startup.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory trail (for the UI's history view)
    """

    def __init__(self, max_events: int = 500):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)
        self._logger = structlog.get_logger(__name__)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and append it to the trail."""
        self._events.append(event)

        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Local log sink is broken; keep the trail, don't raise
            print(f"Warning: audit log write failed: {e}", file=sys.stderr)

    def recent_events(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._events))
        return events if limit is None else events[:limit]

    def __len__(self) -> int:
        return len(self._events)
