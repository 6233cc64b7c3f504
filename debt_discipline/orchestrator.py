"""
Main Orchestrator for Debt Discipline

This module ties the components together behind the surface the UI calls:
add / toggle / edit / remove / clear completed, export / import, and the
derived reads (summary, per-debt projection, filtered and sorted lists).

DESIGN DECISION: The orchestrator owns the UI-facing edit state and the
clock; the ledger store owns the data.
- Only one debt is edited at a time; removing it (directly or via
  clear completed) cancels the edit
- "Today" comes from an injected clock so projections are reproducible
- Derived values are recomputed on every call from the current snapshot
"""

import json
from datetime import date
from typing import Any, Callable, Optional, Union

from debt_discipline.audit import AuditLogger, configure_logging
from debt_discipline.config import StorageBackend, get_settings
from debt_discipline.models.debt import (
    Debt,
    DebtFilter,
    DebtForm,
    LedgerSummary,
    PayoffProjection,
    SortDirection,
    SortKey,
)
from debt_discipline.ledger import LedgerStore
from debt_discipline.projections import percent_paid, project, summarize
from debt_discipline.queries import view_debts
from debt_discipline.services.storage import (
    ByteStoreInterface,
    FileByteStore,
    InMemoryByteStore,
)


Clock = Callable[[], date]


class DebtTracker:
    """
    UI collaborator surface over a LedgerStore.

    Flow for an edit:
    1. start_edit(id) -> DebtForm snapshot to pre-fill the form
    2. save_edit(id, form) or cancel_edit()
    """

    def __init__(
        self,
        ledger: LedgerStore,
        clock: Clock = date.today,
        export_filename: str = "debts.json",
    ):
        self._ledger = ledger
        self._clock = clock
        self._editing_id: Optional[str] = None
        self.export_filename = export_filename

    @property
    def ledger(self) -> LedgerStore:
        return self._ledger

    @property
    def editing_id(self) -> Optional[str]:
        return self._editing_id

    @property
    def debts(self) -> tuple[Debt, ...]:
        return self._ledger.debts

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_debt(self, form: DebtForm) -> Optional[Debt]:
        return self._ledger.add(
            name=form.name,
            due_day=form.due_day,
            monthly_amount=form.monthly_amount,
            remaining_balance=form.remaining_balance,
        )

    def toggle(self, debt_id: str) -> Optional[Debt]:
        return self._ledger.toggle_completed(debt_id)

    def start_edit(self, debt_id: str) -> Optional[DebtForm]:
        """Begin editing a debt. Returns the editable snapshot, or None."""
        debt = self._ledger.get(debt_id)
        if debt is None:
            return None
        self._editing_id = debt_id
        return DebtForm.from_debt(debt)

    def save_edit(self, debt_id: str, form: DebtForm) -> Optional[Debt]:
        """
        Apply an edit. A blank name leaves the edit open (nothing saved);
        otherwise the edit ends.
        """
        updated = self._ledger.edit(
            debt_id,
            name=form.name,
            due_day=form.due_day,
            monthly_amount=form.monthly_amount,
            remaining_balance=form.remaining_balance,
        )
        if form.name.strip():
            self.cancel_edit()
        return updated

    def cancel_edit(self) -> None:
        self._editing_id = None

    def remove(self, debt_id: str) -> bool:
        removed = self._ledger.remove(debt_id)
        if removed and self._editing_id == debt_id:
            self.cancel_edit()
        return removed

    def clear_completed(self) -> int:
        editing = self._ledger.get(self._editing_id) if self._editing_id else None
        removed = self._ledger.clear_completed()
        if editing is not None and editing.completed:
            self.cancel_edit()
        return removed

    # -------------------------------------------------------------------------
    # Export / import
    # -------------------------------------------------------------------------

    def export_json(self) -> str:
        """The current ledger as pretty-printed JSON, verbatim."""
        return json.dumps(
            [debt.to_record() for debt in self._ledger.debts],
            indent=2,
            ensure_ascii=False,
        )

    def import_json(self, contents: Union[str, bytes]) -> list[Debt]:
        """
        Replace the ledger with the debts in an exported file.

        Raises:
            ParseError: Content is not JSON or not an array; ledger unchanged
        """
        debts = self._ledger.import_json(contents)
        self.cancel_edit()
        return debts

    # -------------------------------------------------------------------------
    # Derived reads
    # -------------------------------------------------------------------------

    def today(self) -> date:
        return self._clock()

    def summary(self) -> LedgerSummary:
        return summarize(self._ledger.debts, self.today())

    def projection(self, debt: Debt) -> PayoffProjection:
        return project(
            debt.remaining_balance,
            debt.monthly_amount,
            debt.due_day,
            self.today(),
        )

    def percent_paid(self, debt: Debt) -> float:
        return percent_paid(debt.original_balance, debt.remaining_balance)

    def list_debts(
        self,
        debt_filter: Union[DebtFilter, str] = DebtFilter.ALL,
        sort_by: Union[SortKey, str] = SortKey.DUE_DAY,
        direction: Union[SortDirection, str] = SortDirection.ASC,
    ) -> list[Debt]:
        return view_debts(self._ledger.debts, debt_filter, sort_by, direction)


def create_byte_store(backend: StorageBackend, data_dir: Any) -> ByteStoreInterface:
    if backend == StorageBackend.MEMORY:
        return InMemoryByteStore()
    return FileByteStore(data_dir)


def create_app_components(
    store: Optional[ByteStoreInterface] = None,
    clock: Clock = date.today,
) -> tuple[DebtTracker, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        store: Byte store to use. If None, one is built from settings.
        clock: Source of "today" for projections.

    Returns:
        (tracker, audit_logger), with the ledger already loaded
    """
    settings = get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings.log_level, app_settings.log_json)
    audit_logger = AuditLogger(max_events=app_settings.audit_trail_size)

    if store is None:
        store = create_byte_store(storage_settings.backend, storage_settings.data_dir)

    ledger = LedgerStore(
        store,
        storage_key=storage_settings.storage_key,
        audit_logger=audit_logger,
    )
    ledger.load()

    tracker = DebtTracker(
        ledger,
        clock=clock,
        export_filename=app_settings.export_filename,
    )
    return tracker, audit_logger
