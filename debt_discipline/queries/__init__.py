"""Query package."""

from debt_discipline.queries.view import filter_debts, sort_debts, view_debts

__all__ = ["filter_debts", "sort_debts", "view_debts"]
