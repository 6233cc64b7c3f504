"""
Read-side Ledger Views

Filtering and ordering for list rendering.

GUARANTEES:
- Never touches the stored order; always returns a new list
- Sorting is stable, so equal keys keep their ledger order
"""

from collections.abc import Iterable
from typing import Callable, Union

from debt_discipline.models.debt import Debt, DebtFilter, SortDirection, SortKey


_SORT_FIELDS: dict[SortKey, Callable[[Debt], float]] = {
    SortKey.DUE_DAY: lambda debt: debt.due_day,
    SortKey.REMAINING: lambda debt: debt.remaining_balance,
    SortKey.MONTHLY: lambda debt: debt.monthly_amount,
}


def filter_debts(
    debts: Iterable[Debt],
    debt_filter: Union[DebtFilter, str] = DebtFilter.ALL,
) -> list[Debt]:
    debt_filter = DebtFilter(debt_filter)
    if debt_filter == DebtFilter.COMPLETED:
        return [debt for debt in debts if debt.completed]
    if debt_filter == DebtFilter.INCOMPLETE:
        return [debt for debt in debts if not debt.completed]
    return list(debts)


def sort_debts(
    debts: Iterable[Debt],
    sort_by: Union[SortKey, str] = SortKey.DUE_DAY,
    direction: Union[SortDirection, str] = SortDirection.ASC,
) -> list[Debt]:
    # sorted(reverse=True) keeps equal items in their original order
    return sorted(
        debts,
        key=_SORT_FIELDS[SortKey(sort_by)],
        reverse=SortDirection(direction) == SortDirection.DESC,
    )


def view_debts(
    debts: Iterable[Debt],
    debt_filter: Union[DebtFilter, str] = DebtFilter.ALL,
    sort_by: Union[SortKey, str] = SortKey.DUE_DAY,
    direction: Union[SortDirection, str] = SortDirection.ASC,
) -> list[Debt]:
    """Filter, then sort, a snapshot of the ledger."""
    return sort_debts(filter_debts(debts, debt_filter), sort_by, direction)
