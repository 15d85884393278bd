"""Ledger documents: serialization, deserialization and legacy migration."""

from budgetflow.serialization.document import (
    LedgerDocument,
    deserialize,
    load_document,
    serialize,
    to_json,
)
from budgetflow.serialization.migration import (
    LEGACY_EXPENSE_CATEGORIES,
    LEGACY_INCOME_CATEGORIES,
    MigrationReport,
    is_legacy,
    migrate_categories,
)

__all__ = [
    "LEGACY_EXPENSE_CATEGORIES",
    "LEGACY_INCOME_CATEGORIES",
    "LedgerDocument",
    "MigrationReport",
    "deserialize",
    "is_legacy",
    "load_document",
    "migrate_categories",
    "serialize",
    "to_json",
]
