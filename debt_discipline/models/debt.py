"""
Core Data Models for Debt Discipline

These models define the schemas for everything flowing through the ledger.
They are designed to:
1. Keep a single well-formed shape for a debt once it is in the ledger
2. Serialize to the exact camelCase JSON the ledger has always been stored as
3. Be immutable, so every read works on a stable snapshot

DESIGN DECISION: Debt models are strict and frozen.
Messy input (legacy field names, strings from form fields, missing values)
is cleaned up by the normalizer BEFORE a Debt is built. A Debt that exists
is always valid.
"""

from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


MIN_DUE_DAY = 1
MAX_DUE_DAY = 31
UNTITLED_DEBT_NAME = "Untitled debt"


# =============================================================================
# ENUMS - Read-side view parameters
# =============================================================================

class DebtFilter(str, Enum):
    """Which debts a list view shows."""
    ALL = "all"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


class SortKey(str, Enum):
    """Field a list view is ordered by."""
    DUE_DAY = "due_day"
    REMAINING = "remaining"
    MONTHLY = "monthly"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# =============================================================================
# CORE DEBT MODEL
# =============================================================================

class Debt(BaseModel):
    """
    A single tracked debt.

    Field aliases are the persisted (camelCase) names; attributes are
    snake_case. Always dump with by_alias=True when writing JSON.

    INVARIANT: original_balance is the 100% mark for progress and is
    kept >= remaining_balance by every edit once it is positive.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier, immutable after creation"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name"
    )
    due_day: int = Field(
        default=MIN_DUE_DAY,
        alias="dueDay",
        ge=MIN_DUE_DAY,
        le=MAX_DUE_DAY,
        description="Day of the month payments are due"
    )
    monthly_amount: float = Field(
        default=0.0,
        alias="monthlyAmount",
        ge=0,
        description="Fixed payment applied each month"
    )
    remaining_balance: float = Field(
        default=0.0,
        alias="remainingBalance",
        ge=0,
        description="Amount left to pay"
    )
    original_balance: float = Field(
        default=0.0,
        alias="originalBalance",
        ge=0,
        description="Balance at creation, the 100% mark for progress"
    )
    completed: bool = Field(
        default=False,
        description="Manually toggled; not derived from the balance"
    )

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted/exported JSON record."""
        return self.model_dump(mode="json", by_alias=True)


class DebtForm(BaseModel):
    """
    Raw values of an add/edit form.

    CRITICAL: This is UNVALIDATED input. Numbers may still be strings
    (or blank) exactly as typed. The ledger store coerces them.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = ""
    due_day: Any = MIN_DUE_DAY
    monthly_amount: Any = ""
    remaining_balance: Any = ""

    @classmethod
    def from_debt(cls, debt: Debt) -> "DebtForm":
        """Editable snapshot of an existing debt."""
        return cls(
            name=debt.name,
            due_day=debt.due_day,
            monthly_amount=str(debt.monthly_amount),
            remaining_balance=str(debt.remaining_balance),
        )


# =============================================================================
# DERIVED MODELS - recomputed on every read, never stored
# =============================================================================

class PayoffProjection(BaseModel):
    """
    When a balance reaches zero under a fixed monthly payment.

    months == 0      -> already paid off (paid_by is None)
    months is None   -> never, the payment is not positive (paid_by is None)
    paid_by is None  -> with months > 0, the payoff falls after year 9999
    """
    model_config = ConfigDict(frozen=True)

    months: Optional[int] = Field(
        default=None,
        ge=0,
        description="Whole months until payoff"
    )
    paid_by: Optional[date] = Field(
        default=None,
        description="Calendar date of the final payment"
    )

    @model_validator(mode='after')
    def validate_paid_by(self) -> 'PayoffProjection':
        if self.paid_by is not None and not self.months:
            raise ValueError("paid_by requires a positive number of months")
        return self

    @property
    def is_paid_off(self) -> bool:
        return self.months == 0

    @property
    def is_unknown(self) -> bool:
        return self.months is None


class LedgerSummary(BaseModel):
    """Ledger-wide counts and totals."""
    model_config = ConfigDict(frozen=True)

    total: int = Field(default=0, ge=0)
    completed_count: int = Field(default=0, ge=0)
    incomplete_count: int = Field(default=0, ge=0)

    total_remaining: float = 0.0
    total_original: float = 0.0
    total_monthly: float = 0.0
    total_paid: float = Field(
        default=0.0,
        description="total_original - total_remaining"
    )

    overall_percent: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Share of the original balances already paid"
    )
    overall_projection: PayoffProjection = Field(
        default_factory=PayoffProjection,
        description="Rough payoff estimate for the whole ledger"
    )
