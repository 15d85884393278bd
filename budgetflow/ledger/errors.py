"""
Ledger Exceptions

Every failure the ledger reports is a LedgerError. None of them is fatal:
when one is raised the ledger is exactly as it was before the call.
"""

from typing import Optional

from budgetflow.models.entry import EntryKind


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class EntryNotFoundError(LedgerError):
    """No entry with this id exists in the collection."""

    def __init__(self, kind: EntryKind, entry_id: int):
        self.kind = kind
        self.entry_id = entry_id
        super().__init__(f"No {kind.value} entry with id {entry_id}")


class CategoryError(LedgerError):
    """Base for category validation failures."""

    def __init__(self, kind: EntryKind, label: str, message: str):
        self.kind = kind
        self.label = label
        super().__init__(message)


class InvalidLabelError(CategoryError):
    """Category label is empty or whitespace only."""

    def __init__(self, kind: EntryKind, label: str):
        super().__init__(kind, label, "Category name cannot be empty")


class DuplicateCategoryError(CategoryError):
    """Category already exists for this entry kind."""

    def __init__(self, kind: EntryKind, label: str):
        super().__init__(
            kind, label, f'Category "{label}" already exists for {kind.value}'
        )


class CategoryInUseError(CategoryError):
    """Category is referenced by at least one entry and cannot be removed."""

    def __init__(self, kind: EntryKind, label: str, usage_count: int):
        self.usage_count = usage_count
        super().__init__(
            kind,
            label,
            f'Category "{label}" is used by {usage_count} {kind.value} '
            f'{"entry" if usage_count == 1 else "entries"} and cannot be deleted',
        )


class UnknownCategoryError(CategoryError):
    """Entry refers to a category the taxonomy does not offer."""

    def __init__(self, kind: EntryKind, label: str):
        super().__init__(
            kind, label, f'"{label}" is not a {kind.value} category'
        )


class CorruptDocumentError(LedgerError):
    """A ledger document could not be read."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)
