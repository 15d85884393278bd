"""
BudgetFlow - Ledger Core Package

A personal-finance ledger that records incomes, expenses, assets and
liabilities, classifies them with a user-extensible category taxonomy,
and derives summary totals.

DESIGN PRINCIPLES:
1. The ledger is an explicit object, never a process-wide global
2. Every mutation either fully applies or leaves state untouched
3. Categories in use can never be removed
4. Persistence is a swappable key-value slot
5. Old saved data is migrated, never rejected
"""

__version__ = "1.0.0"
__author__ = "BudgetFlow Team"
