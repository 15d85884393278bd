"""
Data Models Package

This package contains all Pydantic models used by the ledger.
Every record saved or logged conforms to one of these schemas.
"""

from budgetflow.models.entry import (
    COLLECTION_KEYS,
    ENTRY_MODELS,
    AnyEntry,
    AssetEntry,
    Entry,
    EntryKind,
    ExpenseEntry,
    IncomeEntry,
    LiabilityEntry,
    Theme,
    build_entry,
)
from budgetflow.models.events import (
    EventSeverity,
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventType,
)
from budgetflow.models.summary import LedgerSummary, format_currency

__all__ = [
    # Entry models
    "COLLECTION_KEYS",
    "ENTRY_MODELS",
    "AnyEntry",
    "AssetEntry",
    "Entry",
    "EntryKind",
    "ExpenseEntry",
    "IncomeEntry",
    "LiabilityEntry",
    "Theme",
    "build_entry",
    # Event models
    "EventSeverity",
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventType",
    # Summary
    "LedgerSummary",
    "format_currency",
]
