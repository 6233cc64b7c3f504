"""
Payoff Projection Calculator

Estimates when a single debt is paid off under its fixed monthly payment.
No interest, no amortization: months = ceil(balance / payment).

The first payment lands on the next occurrence of the debt's due day
(today counts), and the final payment is that date advanced by
months - 1 calendar months. Days that do not exist in a month are
clamped to the month's last day (a due day of 31 in February is the
28th/29th).

Outputs depend on "today", which is always passed in. Callers hold the
clock; nothing in here reads the system date.
"""

import calendar
import math
from datetime import date
from typing import Optional

from debt_discipline.models.debt import PayoffProjection


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, months: int, day: Optional[int] = None) -> date:
    """
    Advance a date by whole calendar months.

    `day` is the target day of month (defaults to d.day); it is clamped
    to the length of the resulting month.
    """
    index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    target_day = d.day if day is None else day
    return date(year, month, min(target_day, last_day_of_month(year, month)))


def can_add_months(d: date, months: int) -> bool:
    """Whether advancing d by `months` stays within the calendar (year 9999)."""
    index = d.year * 12 + (d.month - 1) + months
    return index < (date.max.year + 1) * 12


def payoff_months(remaining_balance: float, monthly_amount: float) -> Optional[int]:
    """
    Whole payments needed to clear the balance.

    None when the count is too large to represent (a tiny payment against
    a huge balance).
    """
    quotient = remaining_balance / monthly_amount
    if not math.isfinite(quotient):
        return None
    return math.ceil(quotient)


def first_payment_date(due_day: int, today: date) -> date:
    """Next occurrence of due_day on or after today."""
    this_month = add_months(today.replace(day=1), 0, day=due_day)
    if this_month >= today:
        return this_month
    return add_months(today.replace(day=1), 1, day=due_day)


def project(
    remaining_balance: float,
    monthly_amount: float,
    due_day: int,
    today: date,
) -> PayoffProjection:
    """
    Project the payoff of one debt.

    Returns:
        months=0, paid_by=None       if nothing is left to pay
        months=None, paid_by=None    if the payment is not positive
        months=N, paid_by=None       if the payoff is past year 9999
        months=N, paid_by=<date>     otherwise
    """
    if remaining_balance <= 0:
        return PayoffProjection(months=0)
    if monthly_amount <= 0:
        return PayoffProjection()

    months = payoff_months(remaining_balance, monthly_amount)
    if months is None:
        return PayoffProjection()

    first = first_payment_date(due_day, today)
    if not can_add_months(first, months - 1):
        return PayoffProjection(months=months)
    return PayoffProjection(
        months=months,
        paid_by=add_months(first, months - 1, day=due_day),
    )


def percent_paid(original_balance: float, remaining_balance: float) -> float:
    """Share of the original balance already paid, clamped to [0, 100]."""
    if original_balance <= 0:
        return 0.0
    percent = (original_balance - remaining_balance) / original_balance * 100
    return min(100.0, max(0.0, percent))
