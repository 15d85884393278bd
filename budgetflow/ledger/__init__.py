"""Ledger store, category taxonomy and aggregation."""

from budgetflow.ledger.errors import (
    CategoryError,
    CategoryInUseError,
    CorruptDocumentError,
    DuplicateCategoryError,
    EntryNotFoundError,
    InvalidLabelError,
    LedgerError,
    UnknownCategoryError,
)
from budgetflow.ledger.ids import IdGenerator
from budgetflow.ledger.store import Ledger
from budgetflow.ledger.taxonomy import DEFAULT_CATEGORIES, CategoryTaxonomy

__all__ = [
    "DEFAULT_CATEGORIES",
    "CategoryError",
    "CategoryInUseError",
    "CategoryTaxonomy",
    "CorruptDocumentError",
    "DuplicateCategoryError",
    "EntryNotFoundError",
    "IdGenerator",
    "InvalidLabelError",
    "Ledger",
    "LedgerError",
    "UnknownCategoryError",
]
