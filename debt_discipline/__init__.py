"""
Debt Discipline - Source Package

A personal debt tracker for a single user: record debts, keep them
on local storage, and see when each one (and the whole ledger) will
be paid off.

DESIGN PRINCIPLES:
1. Derived numbers are recomputed from the ledger, never stored
2. Bad input degrades a field, never the whole ledger
3. Every mutation is persisted immediately
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Debt Discipline Team"
