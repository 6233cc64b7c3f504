"""
Debt Normalizer

DESIGN DECISION: Every debt that enters the ledger goes through here:
- Startup load of persisted data
- Bulk import of an exported file
- Creation from the add form

The normalizer is forgiving at the FIELD level and strict at the BATCH level:
- A bad field degrades to a safe default (a number that is not a number
  becomes 0, a due day out of range is clamped). The form must always
  stay usable.
- A batch that is not a list is rejected whole. We never partially import.

Older stored shapes used different field names. Instead of sprinkling
fallbacks through the code, the accepted names live in one ordered table
(DEBT_SCHEMA). Add an alias there when the stored shape changes.
"""

import json
import math
from collections.abc import Mapping
from typing import Any, Callable, Optional
from uuid import uuid4

from debt_discipline.models.debt import (
    MAX_DUE_DAY,
    MIN_DUE_DAY,
    UNTITLED_DEBT_NAME,
    Debt,
)


INVALID_JSON_MESSAGE = "Import failed: invalid JSON file."
NOT_AN_ARRAY_MESSAGE = "Import failed: JSON must be an array."


class NormalizationError(Exception):
    """Base exception for normalization failures."""
    pass


class ParseError(NormalizationError):
    """Batch content is not valid JSON or is not a list of records."""
    pass


# (persisted field name, legacy aliases), consulted in order.
DEBT_SCHEMA: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("id", ()),
    ("name", ("text",)),
    ("dueDay", ()),
    ("monthlyAmount", ("amount",)),
    ("remainingBalance", ("balance",)),
    ("originalBalance", ("original",)),
    ("completed", ()),
)

_ALIASES = dict(DEBT_SCHEMA)


def new_debt_id() -> str:
    return uuid4().hex


def read_field(raw: Mapping, field: str) -> Any:
    """
    Read a field by its current name, falling back to legacy aliases.

    Returns the first value that is present and not None.
    """
    for key in (field, *_ALIASES.get(field, ())):
        value = raw.get(key)
        if value is not None:
            return value
    return None


def safe_number(value: Any, fallback: float = 0.0) -> float:
    """
    Coerce arbitrary input to a finite float.

    None, blank strings, unparsable values, NaN and infinities give
    `fallback`. Booleans count as 1/0.
    """
    if value is None:
        return fallback
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return fallback
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        # OverflowError: integers beyond the float range
        return fallback
    if not math.isfinite(number):
        return fallback
    return number


def day_clamp(value: Any) -> int:
    """Coerce a due day into [1, 31], rounding half up. Defaults to 1."""
    number = safe_number(value, fallback=float(MIN_DUE_DAY))
    rounded = math.floor(number + 0.5)
    return min(MAX_DUE_DAY, max(MIN_DUE_DAY, rounded))


def _amount(value: Any, fallback: float = 0.0) -> float:
    return max(0.0, safe_number(value, fallback))


def _name(value: Any) -> str:
    if value is None:
        return UNTITLED_DEBT_NAME
    name = str(value).strip()
    return name or UNTITLED_DEBT_NAME


def _id(value: Any, id_factory: Callable[[], str]) -> str:
    debt_id = str(value).strip() if value is not None else ""
    return debt_id or id_factory()


def normalize_debt(
    raw: Any,
    id_factory: Callable[[], str] = new_debt_id,
) -> Debt:
    """
    Turn an arbitrary (possibly partial or legacy) record into a Debt.

    A record that is not a mapping at all is treated as empty, so it
    comes out as an untitled debt with default values. Every field is
    coerced before the model sees it, so no record is ever rejected.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    remaining = _amount(read_field(raw, "remainingBalance"))
    original = _amount(read_field(raw, "originalBalance"), fallback=remaining)

    return Debt(
        id=_id(read_field(raw, "id"), id_factory),
        name=_name(read_field(raw, "name")),
        due_day=day_clamp(read_field(raw, "dueDay")),
        monthly_amount=_amount(read_field(raw, "monthlyAmount")),
        remaining_balance=remaining,
        original_balance=original if original > 0 else remaining,
        completed=bool(read_field(raw, "completed")),
    )


def new_debt(
    name: str,
    due_day: Any,
    monthly_amount: Any,
    remaining_balance: Any,
    id_factory: Callable[[], str] = new_debt_id,
) -> Debt:
    """
    Build a brand new debt from form values.

    Always gets a fresh id; the starting balance becomes the original.
    Callers must reject blank names before getting here.
    """
    remaining = _amount(remaining_balance)
    return Debt(
        id=id_factory(),
        name=name.strip(),
        due_day=day_clamp(due_day),
        monthly_amount=_amount(monthly_amount),
        remaining_balance=remaining,
        original_balance=remaining,
        completed=False,
    )


def normalize_batch(
    raw: Any,
    id_factory: Callable[[], str] = new_debt_id,
) -> list[Debt]:
    """
    Normalize a whole batch of records.

    Raises:
        ParseError: If the batch is not a list (nothing is normalized)
    """
    if not isinstance(raw, list):
        raise ParseError(NOT_AN_ARRAY_MESSAGE)
    return [normalize_debt(record, id_factory) for record in raw]


def parse_debts_json(
    contents: Any,
    id_factory: Optional[Callable[[], str]] = None,
) -> list[Debt]:
    """
    Parse JSON text (str or bytes) into normalized debts.

    Raises:
        ParseError: If the content is not JSON or not a JSON array
    """
    try:
        parsed = json.loads(contents)
    except (TypeError, ValueError, RecursionError) as e:
        # RecursionError: pathologically nested arrays
        raise ParseError(INVALID_JSON_MESSAGE) from e
    return normalize_batch(parsed, id_factory or new_debt_id)
