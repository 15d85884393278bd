"""
Category Taxonomy

Each entry kind has its own set of category labels. Labels are compared
exactly (case-sensitive), are unique within a kind, are stored in the
order they were added and are listed in alphabetical order.

The taxonomy knows nothing about entries. Whether a label may be removed
is decided by the ledger, which can see which labels are in use.
"""

from typing import Iterable, Mapping, Optional

from budgetflow.ledger.errors import DuplicateCategoryError, InvalidLabelError
from budgetflow.models.entry import EntryKind


DEFAULT_CATEGORIES: dict[EntryKind, tuple[str, ...]] = {
    EntryKind.INCOME: (
        "Salary",
        "Freelance",
        "Investment",
        "Rental",
        "Business",
    ),
    EntryKind.EXPENSE: (
        "Housing",
        "Food",
        "Transportation",
        "Utilities",
        "Entertainment",
        "Healthcare",
        "Education",
    ),
    EntryKind.ASSET: (
        "Cash",
        "Savings",
        "Investments",
        "Property",
        "Vehicle",
        "Other",
    ),
    EntryKind.LIABILITY: (
        "Mortgage",
        "Loan",
        "Credit Card",
        "Student Loan",
        "Other",
    ),
}


def display_order(label: str) -> tuple[str, str]:
    """Sort key: alphabetical ignoring case, exact string as tie-break."""
    return (label.casefold(), label)


def _unique(labels: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for label in labels:
        if label not in seen:
            seen.add(label)
            result.append(label)
    return result


class CategoryTaxonomy:
    """
    Per-kind category labels.

    Kinds missing from ``labels`` start with their default categories.
    Duplicate labels in the input are collapsed, keeping the first.
    """

    def __init__(self, labels: Optional[Mapping[EntryKind, Iterable[str]]] = None):
        labels = labels or {}
        self._labels: dict[EntryKind, list[str]] = {
            kind: _unique(labels.get(kind, DEFAULT_CATEGORIES[kind]))
            for kind in EntryKind
        }

    @classmethod
    def default(cls) -> "CategoryTaxonomy":
        return cls()

    def labels(self, kind: EntryKind) -> list[str]:
        """Labels for ``kind`` in display order. Safe to call repeatedly."""
        return sorted(self._labels[kind], key=display_order)

    def stored(self, kind: EntryKind) -> tuple[str, ...]:
        """Labels for ``kind`` in the order they were added."""
        return tuple(self._labels[kind])

    def contains(self, kind: EntryKind, label: str) -> bool:
        return label in self._labels[kind]

    def add(self, kind: EntryKind, label: str) -> str:
        """
        Add a label to ``kind``.

        Surrounding whitespace is trimmed first. Returns the stored label.

        Raises:
            InvalidLabelError: If nothing is left after trimming
            DuplicateCategoryError: If the label already exists for ``kind``
        """
        cleaned = label.strip()
        if not cleaned:
            raise InvalidLabelError(kind, label)
        if cleaned in self._labels[kind]:
            raise DuplicateCategoryError(kind, cleaned)
        self._labels[kind].append(cleaned)
        return cleaned

    def discard(self, kind: EntryKind, label: str) -> bool:
        """Remove a label. Returns False if it was not there."""
        if label not in self._labels[kind]:
            return False
        self._labels[kind].remove(label)
        return True

    def to_dict(self) -> dict[str, list[str]]:
        """Kind value → labels in stored order."""
        return {kind.value: list(self._labels[kind]) for kind in EntryKind}

    def copy(self) -> "CategoryTaxonomy":
        return CategoryTaxonomy(self._labels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryTaxonomy):
            return NotImplemented
        return self._labels == other._labels

    def __repr__(self) -> str:
        return f"CategoryTaxonomy({self.to_dict()!r})"
