"""
Ledger Aggregator

Ledger-wide counts, totals and a rough overall payoff estimate.

DESIGN DECISION: The summary is a pure function of the current debts and
is recomputed on every read. Ledgers are small; there is nothing to cache
and nothing to invalidate.

NOTE: The overall estimate is anchored at today, not at any due day.
It is intentionally rougher than the per-debt projection.
"""

from collections.abc import Iterable
from datetime import date

from debt_discipline.models.debt import Debt, LedgerSummary, PayoffProjection
from debt_discipline.projections.calculator import (
    add_months,
    can_add_months,
    payoff_months,
    percent_paid,
)


def overall_projection(
    total_remaining: float,
    total_monthly: float,
    today: date,
) -> PayoffProjection:
    if total_remaining <= 0:
        return PayoffProjection(months=0)
    if total_monthly <= 0:
        return PayoffProjection()

    months = payoff_months(total_remaining, total_monthly)
    if months is None:
        return PayoffProjection()
    if not can_add_months(today, months):
        return PayoffProjection(months=months)
    return PayoffProjection(months=months, paid_by=add_months(today, months))


def summarize(debts: Iterable[Debt], today: date) -> LedgerSummary:
    """Compute the ledger summary for the given debts."""
    debts = list(debts)

    completed_count = sum(1 for debt in debts if debt.completed)
    total_remaining = sum(debt.remaining_balance for debt in debts)
    total_original = sum(debt.original_balance for debt in debts)
    total_monthly = sum(debt.monthly_amount for debt in debts)

    return LedgerSummary(
        total=len(debts),
        completed_count=completed_count,
        incomplete_count=len(debts) - completed_count,
        total_remaining=total_remaining,
        total_original=total_original,
        total_monthly=total_monthly,
        total_paid=total_original - total_remaining,
        overall_percent=percent_paid(total_original, total_remaining),
        overall_projection=overall_projection(total_remaining, total_monthly, today),
    )
