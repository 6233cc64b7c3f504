"""
Display formatting helpers.

Display only: no currency conversion happens anywhere, the code just
picks a symbol.
"""

import math
from datetime import date
from typing import Any, Optional

from debt_discipline.models.debt import PayoffProjection


CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "$",
    "AUD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
}

UNKNOWN_PAYOFF = "—"
PAID_OFF = "Paid off"


def money(value: Any, currency: str = "USD") -> str:
    """Format a number like 1234.5 as '$1,234.50'. Empty string if invalid."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(v):
        return ""

    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if v < 0 else ""
    return f"{sign}{symbol}{abs(v):,.2f}"


def format_month_year(d: Optional[date]) -> str:
    """'Mar 2024', or an empty string when there is no date."""
    if d is None:
        return ""
    return d.strftime("%b %Y")


def format_percent(percent: float) -> str:
    return f"{percent:.0f}%"


def format_payoff(projection: PayoffProjection) -> str:
    """Short payoff label: '—' (never), 'Paid off' or '12 mo'."""
    if projection.is_unknown:
        return UNKNOWN_PAYOFF
    if projection.is_paid_off:
        return PAID_OFF
    return f"{projection.months} mo"
