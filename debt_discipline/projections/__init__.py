"""Payoff projections and ledger aggregates."""

from debt_discipline.projections.aggregator import overall_projection, summarize
from debt_discipline.projections.calculator import (
    add_months,
    can_add_months,
    first_payment_date,
    last_day_of_month,
    payoff_months,
    percent_paid,
    project,
)

__all__ = [
    "add_months",
    "can_add_months",
    "first_payment_date",
    "last_day_of_month",
    "overall_projection",
    "payoff_months",
    "percent_paid",
    "project",
    "summarize",
]
