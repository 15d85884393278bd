"""
Aggregation

Pure functions over entry sequences. Nothing is cached: totals are
recomputed from the entries every time they are asked for.
"""

from typing import Iterable

from budgetflow.models.entry import (
    AssetEntry,
    Entry,
    ExpenseEntry,
    IncomeEntry,
    LiabilityEntry,
)
from budgetflow.models.summary import LedgerSummary


def total(entries: Iterable[Entry]) -> float:
    """Sum of the amount (or value) field of each entry."""
    return sum((entry.quantity for entry in entries), 0.0)


def total_income(incomes: Iterable[IncomeEntry]) -> float:
    return total(incomes)


def total_expenses(expenses: Iterable[ExpenseEntry]) -> float:
    return total(expenses)


def total_assets(assets: Iterable[AssetEntry]) -> float:
    return total(assets)


def total_liabilities(liabilities: Iterable[LiabilityEntry]) -> float:
    return total(liabilities)


def balance(incomes: Iterable[IncomeEntry], expenses: Iterable[ExpenseEntry]) -> float:
    return total_income(incomes) - total_expenses(expenses)


def net_wealth(assets: Iterable[AssetEntry], liabilities: Iterable[LiabilityEntry]) -> float:
    return total_assets(assets) - total_liabilities(liabilities)


def summarize(
    incomes: Iterable[IncomeEntry],
    expenses: Iterable[ExpenseEntry],
    assets: Iterable[AssetEntry],
    liabilities: Iterable[LiabilityEntry],
) -> LedgerSummary:
    return LedgerSummary(
        total_income=total_income(incomes),
        total_expenses=total_expenses(expenses),
        total_assets=total_assets(assets),
        total_liabilities=total_liabilities(liabilities),
    )
