"""
Legacy Category Migration

Documents written before categories were split by entry kind stored a
single flat list shared by incomes and expenses, and no asset or
liability categories at all.

Migration keeps only the labels that were part of the original starter
list, sorting each into income or expense. Anything the user added to
the flat list cannot be attributed to a kind and is discarded; asset
and liability categories start from their defaults.

Entries are left alone. An entry whose category did not survive keeps
its label; it simply cannot be re-saved with it.
"""

from typing import Any, Iterable, Mapping

from pydantic import BaseModel, Field

from budgetflow.ledger.taxonomy import DEFAULT_CATEGORIES, CategoryTaxonomy
from budgetflow.models.entry import EntryKind


LEGACY_INCOME_CATEGORIES: frozenset[str] = frozenset({
    "Salary",
    "Freelance",
    "Investment",
    "Rental",
    "Business",
})

LEGACY_EXPENSE_CATEGORIES: frozenset[str] = frozenset({
    "Housing",
    "Food",
    "Transportation",
    "Utilities",
    "Entertainment",
    "Healthcare",
    "Education",
})


class MigrationReport(BaseModel):
    """What happened to each label of a legacy flat category list."""

    income: list[str] = Field(
        default_factory=list,
        description="Labels kept as income categories"
    )
    expense: list[str] = Field(
        default_factory=list,
        description="Labels kept as expense categories"
    )
    discarded: list[str] = Field(
        default_factory=list,
        description="Labels that matched no known legacy category"
    )


def is_legacy(document: Mapping[str, Any]) -> bool:
    """True if the document stores categories as one flat list."""
    return isinstance(document.get("categories"), list)


def migrate_categories(flat: Iterable[str]) -> tuple[CategoryTaxonomy, MigrationReport]:
    """
    Split a flat legacy category list by entry kind.

    Input order is kept within each kind and repeated labels are
    collapsed.

    Example:
        migrate_categories(["Salary", "Housing", "Bogus"])
        -> income ["Salary"], expense ["Housing"], discarded ["Bogus"],
           asset and liability defaults
    """
    report = MigrationReport()
    for label in flat:
        if label in LEGACY_INCOME_CATEGORIES:
            target = report.income
        elif label in LEGACY_EXPENSE_CATEGORIES:
            target = report.expense
        else:
            target = report.discarded
        if label not in target:
            target.append(label)

    taxonomy = CategoryTaxonomy({
        EntryKind.INCOME: report.income,
        EntryKind.EXPENSE: report.expense,
        EntryKind.ASSET: DEFAULT_CATEGORIES[EntryKind.ASSET],
        EntryKind.LIABILITY: DEFAULT_CATEGORIES[EntryKind.LIABILITY],
    })
    return taxonomy, report
