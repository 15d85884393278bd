"""
Core Data Models for BudgetFlow

These models define the schemas of every record the ledger holds.
They are designed to:
1. Enforce type safety at runtime
2. Serialize to exactly the field names found in saved documents
3. Make dispatch by entry kind exhaustive

DESIGN DECISION: Each entry kind is a separate model with its own field
names (source/description/name, category/type, amount/value), because
that is the shape saved documents have always had. The ledger itself
talks about entries through a uniform (label, category, amount) view
provided by the properties on ``Entry``.
"""

from enum import Enum
from typing import Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntryKind(str, Enum):
    """
    The four kinds of ledger entry.

    DESIGN DECISION: This is a closed set. Every mapping keyed by kind
    must cover all four members; adding a kind means updating each of them.
    """
    INCOME = "income"
    EXPENSE = "expense"
    ASSET = "asset"
    LIABILITY = "liability"

    @property
    def collection(self) -> str:
        """Name of the document collection holding this kind."""
        return COLLECTION_KEYS[self]


class Theme(str, Enum):
    """Display theme remembered between sessions."""
    DARK = "dark"
    LIGHT = "light"


COLLECTION_KEYS: dict[EntryKind, str] = {
    EntryKind.INCOME: "incomes",
    EntryKind.EXPENSE: "expenses",
    EntryKind.ASSET: "assets",
    EntryKind.LIABILITY: "liabilities",
}


# =============================================================================
# ENTRY MODELS
# =============================================================================

class Entry(BaseModel):
    """
    Base for all ledger entries.

    Subclasses declare which of their fields play the label, category and
    amount roles. Amounts are not sign-checked; that is the caller's call.

    Entries are frozen: the ledger replaces them, it never edits them.
    """
    model_config = ConfigDict(frozen=True)

    kind: ClassVar[EntryKind]
    label_field: ClassVar[str]
    category_field: ClassVar[str]
    amount_field: ClassVar[str]

    id: int = Field(
        ...,
        description="Identifier, unique within the entry's collection"
    )

    @model_validator(mode="before")
    @classmethod
    def _null_amount_is_zero(cls, data: Any) -> Any:
        # Browsers saved an unparseable amount as null.
        amount_field = getattr(cls, "amount_field", None)
        if isinstance(data, dict) and amount_field in data and data[amount_field] is None:
            data = {**data, amount_field: 0.0}
        return data

    @property
    def label(self) -> str:
        return getattr(self, self.label_field)

    @property
    def category_label(self) -> str:
        return getattr(self, self.category_field)

    @property
    def quantity(self) -> float:
        return getattr(self, self.amount_field)


class IncomeEntry(Entry):
    """A recorded source of income."""
    kind: ClassVar[EntryKind] = EntryKind.INCOME
    label_field: ClassVar[str] = "source"
    category_field: ClassVar[str] = "category"
    amount_field: ClassVar[str] = "amount"

    source: str = Field(..., description="Where the income comes from")
    category: str = Field(..., description="Income category label")
    amount: float = Field(..., description="Amount received")


class ExpenseEntry(Entry):
    """A recorded expense."""
    kind: ClassVar[EntryKind] = EntryKind.EXPENSE
    label_field: ClassVar[str] = "description"
    category_field: ClassVar[str] = "category"
    amount_field: ClassVar[str] = "amount"

    description: str = Field(..., description="What the money was spent on")
    category: str = Field(..., description="Expense category label")
    amount: float = Field(..., description="Amount spent")


class AssetEntry(Entry):
    """Something owned, with its current value."""
    kind: ClassVar[EntryKind] = EntryKind.ASSET
    label_field: ClassVar[str] = "name"
    category_field: ClassVar[str] = "type"
    amount_field: ClassVar[str] = "value"

    name: str = Field(..., description="Asset name")
    type: str = Field(..., description="Asset type label")
    value: float = Field(..., description="Current value")


class LiabilityEntry(Entry):
    """Something owed, with the outstanding amount."""
    kind: ClassVar[EntryKind] = EntryKind.LIABILITY
    label_field: ClassVar[str] = "name"
    category_field: ClassVar[str] = "type"
    amount_field: ClassVar[str] = "amount"

    name: str = Field(..., description="Liability name")
    type: str = Field(..., description="Liability type label")
    amount: float = Field(..., description="Outstanding amount")


AnyEntry = Union[IncomeEntry, ExpenseEntry, AssetEntry, LiabilityEntry]

ENTRY_MODELS: dict[EntryKind, type[Entry]] = {
    EntryKind.INCOME: IncomeEntry,
    EntryKind.EXPENSE: ExpenseEntry,
    EntryKind.ASSET: AssetEntry,
    EntryKind.LIABILITY: LiabilityEntry,
}


def build_entry(
    kind: EntryKind,
    entry_id: int,
    label: str,
    category: str,
    amount: float,
) -> Entry:
    """
    Build an entry of the given kind from the uniform field view.

    Example:
        build_entry(EntryKind.ASSET, 1, "Flat", "Property", 250000.0)
        -> AssetEntry(id=1, name="Flat", type="Property", value=250000.0)
    """
    model = ENTRY_MODELS[kind]
    return model(**{
        "id": entry_id,
        model.label_field: label,
        model.category_field: category,
        model.amount_field: amount,
    })
