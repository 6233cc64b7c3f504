"""
Ledger Store

The single owner of the in-memory debt collection.

DESIGN DECISION: The store is an explicit object handed to whoever needs
it. There is no module-level ledger.

GUARANTEES:
- Every mutation persists the full collection immediately
- Rejected input (blank names, unknown ids, bad imports) changes nothing
- Storage failures are logged, never raised; the in-memory ledger stays
  in its last-good state
- Readers get an immutable snapshot (a tuple of frozen Debts)
"""

import json
from collections.abc import Iterator
from typing import Any, Callable, Optional, Union

from debt_discipline.audit import AuditLogger
from debt_discipline.config.settings import DEFAULT_STORAGE_KEY
from debt_discipline.models.audit import AuditEvent, AuditEventBuilder
from debt_discipline.models.debt import Debt
from debt_discipline.normalization import (
    ParseError,
    day_clamp,
    new_debt,
    new_debt_id,
    normalize_batch,
    parse_debts_json,
    safe_number,
)
from debt_discipline.services.storage import ByteStoreInterface, StorageError


class LedgerStore:
    """
    Ordered collection of debts with its mutation surface.

    New debts are prepended. The stored order only changes through
    mutations; list views sort copies.
    """

    def __init__(
        self,
        store: ByteStoreInterface,
        storage_key: str = DEFAULT_STORAGE_KEY,
        audit_logger: Optional[AuditLogger] = None,
        id_factory: Callable[[], str] = new_debt_id,
    ):
        self._store = store
        self._key = storage_key
        self._audit_logger = audit_logger or AuditLogger()
        self._id_factory = id_factory
        self._debts: list[Debt] = []

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def debts(self) -> tuple[Debt, ...]:
        return tuple(self._debts)

    @property
    def storage_key(self) -> str:
        return self._key

    def get(self, debt_id: str) -> Optional[Debt]:
        for debt in self._debts:
            if debt.id == debt_id:
                return debt
        return None

    def __len__(self) -> int:
        return len(self._debts)

    def __iter__(self) -> Iterator[Debt]:
        return iter(self.debts)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> list[Debt]:
        """
        Restore the ledger from the byte store.

        Missing or unreadable data gives an empty ledger. Each record is
        normalized, so older stored shapes are healed on the way in.
        """
        try:
            raw = self._store.get(self._key)
            if raw is None:
                self._debts = []
            else:
                self._debts = parse_debts_json(raw, self._id_factory)
        except (StorageError, ParseError) as e:
            self._debts = []
            self._audit(AuditEventBuilder.load_failed(self._key, str(e)))
            return []

        self._audit(AuditEventBuilder.ledger_loaded(self._key, len(self._debts)))
        return list(self._debts)

    def persist(self) -> bool:
        """Write the full collection to the byte store. Returns success."""
        payload = json.dumps([debt.to_record() for debt in self._debts])
        try:
            self._store.put(self._key, payload.encode("utf-8"))
        except StorageError as e:
            self._audit(AuditEventBuilder.save_failed(self._key, str(e)))
            return False

        self._audit(AuditEventBuilder.ledger_persisted(self._key, len(self._debts)))
        return True

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(
        self,
        name: str,
        due_day: Any,
        monthly_amount: Any,
        remaining_balance: Any,
    ) -> Optional[Debt]:
        """
        Prepend a new debt.

        Returns the new debt, or None if the name is blank.
        """
        if not _trimmed(name):
            self._audit(AuditEventBuilder.validation_rejected("add", "name is blank"))
            return None

        debt = new_debt(
            name=_trimmed(name),
            due_day=due_day,
            monthly_amount=monthly_amount,
            remaining_balance=remaining_balance,
            id_factory=self._id_factory,
        )
        self._debts.insert(0, debt)
        self.persist()
        self._audit(AuditEventBuilder.debt_added(debt.id, debt.name))
        return debt

    def toggle_completed(self, debt_id: str) -> Optional[Debt]:
        """Flip the completed flag. Returns the updated debt, or None."""
        index = self._index_of(debt_id)
        if index is None:
            return None

        debt = self._debts[index].model_copy(
            update={"completed": not self._debts[index].completed}
        )
        self._debts[index] = debt
        self.persist()
        self._audit(AuditEventBuilder.debt_toggled(debt.id, debt.completed))
        return debt

    def edit(
        self,
        debt_id: str,
        name: str,
        due_day: Any,
        monthly_amount: Any,
        remaining_balance: Any,
    ) -> Optional[Debt]:
        """
        Update the editable fields of a debt.

        Numbers that cannot be parsed keep their previous value. The
        original balance is raised to the new remaining balance if needed,
        so progress never goes negative.

        Returns the updated debt, or None if the name is blank or the id
        is unknown.
        """
        if not _trimmed(name):
            self._audit(AuditEventBuilder.validation_rejected(
                "edit", "name is blank", debt_id=debt_id,
            ))
            return None

        index = self._index_of(debt_id)
        if index is None:
            return None

        current = self._debts[index]
        remaining = max(0.0, safe_number(remaining_balance, current.remaining_balance))
        if current.original_balance > 0:
            original = max(current.original_balance, remaining)
        else:
            original = remaining

        updated = current.model_copy(update={
            "name": _trimmed(name),
            "due_day": day_clamp(due_day),
            "monthly_amount": max(0.0, safe_number(monthly_amount, current.monthly_amount)),
            "remaining_balance": remaining,
            "original_balance": original,
        })
        self._debts[index] = updated
        self.persist()
        self._audit(AuditEventBuilder.debt_edited(debt_id, _changes(current, updated)))
        return updated

    def remove(self, debt_id: str) -> bool:
        """Delete a debt. Returns False if the id is unknown."""
        index = self._index_of(debt_id)
        if index is None:
            return False

        del self._debts[index]
        self.persist()
        self._audit(AuditEventBuilder.debt_removed(debt_id))
        return True

    def clear_completed(self) -> int:
        """Remove every completed debt. Returns how many were removed."""
        removed = [debt.id for debt in self._debts if debt.completed]
        if not removed:
            return 0

        self._debts = [debt for debt in self._debts if not debt.completed]
        self.persist()
        self._audit(AuditEventBuilder.completed_cleared(removed))
        return len(removed)

    def replace_all(self, raw_batch: Any) -> list[Debt]:
        """
        Replace the whole ledger with a normalized batch (import).

        Raises:
            ParseError: If the batch is not a list; the ledger is unchanged
        """
        try:
            debts = normalize_batch(raw_batch, self._id_factory)
        except ParseError as e:
            self._audit(AuditEventBuilder.import_rejected(str(e)))
            raise
        return self._replace(debts)

    def import_json(self, contents: Union[str, bytes]) -> list[Debt]:
        """
        Replace the ledger with the debts in exported JSON text.

        Raises:
            ParseError: Content is not JSON or not an array; ledger unchanged
        """
        try:
            debts = parse_debts_json(contents, self._id_factory)
        except ParseError as e:
            self._audit(AuditEventBuilder.import_rejected(str(e)))
            raise
        return self._replace(debts)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _replace(self, debts: list[Debt]) -> list[Debt]:
        self._debts = list(debts)
        self.persist()
        self._audit(AuditEventBuilder.ledger_imported(len(debts)))
        return list(debts)

    def _index_of(self, debt_id: str) -> Optional[int]:
        for index, debt in enumerate(self._debts):
            if debt.id == debt_id:
                return index
        return None

    def _audit(self, event: AuditEvent) -> None:
        self._audit_logger.log(event)


def _trimmed(name: Any) -> str:
    return str(name).strip() if name is not None else ""


def _changes(before: Debt, after: Debt) -> dict[str, Any]:
    old, new = before.to_record(), after.to_record()
    return {field: new[field] for field in new if new[field] != old[field]}
