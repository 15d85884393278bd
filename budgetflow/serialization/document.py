"""
Ledger Documents

Converts a Ledger to and from the plain document shape used for local
saves and exported files:

    {
      "incomes":     [{"id", "source", "category", "amount"}, ...],
      "expenses":    [{"id", "description", "category", "amount"}, ...],
      "assets":      [{"id", "name", "type", "value"}, ...],
      "liabilities": [{"id", "name", "type", "amount"}, ...],
      "categories":  {"income": [...], "expense": [...],
                      "asset": [...], "liability": [...]}
    }

Older documents carry ``categories`` as a flat list; those are migrated
on the way in (see ``migration``).

DESIGN DECISION: Reading never touches an existing ledger. A document is
parsed and validated into a brand new Ledger, so a bad document can only
ever fail before anything has been replaced.
"""

import json
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from budgetflow.ledger.errors import CorruptDocumentError
from budgetflow.ledger.store import Ledger
from budgetflow.ledger.taxonomy import CategoryTaxonomy
from budgetflow.models.entry import (
    AssetEntry,
    EntryKind,
    ExpenseEntry,
    IncomeEntry,
    LiabilityEntry,
)
from budgetflow.serialization.migration import (
    MigrationReport,
    is_legacy,
    migrate_categories,
)


DocumentSource = Union[dict, str, bytes]


class LedgerDocument(BaseModel):
    """
    Schema of a saved ledger.

    Unknown top-level keys are ignored. Missing collections are empty and
    missing categories fall back to the defaults.
    """
    model_config = ConfigDict(extra="ignore")

    incomes: list[IncomeEntry] = Field(default_factory=list)
    expenses: list[ExpenseEntry] = Field(default_factory=list)
    assets: list[AssetEntry] = Field(default_factory=list)
    liabilities: list[LiabilityEntry] = Field(default_factory=list)
    categories: Optional[Union[dict[str, list[str]], list[str]]] = None


def serialize(ledger: Ledger) -> dict:
    """The ledger as a JSON-ready dict, collections and labels in stored order."""
    document: dict = {
        kind.collection: [entry.model_dump() for entry in ledger.entries(kind)]
        for kind in EntryKind
    }
    document["categories"] = ledger.taxonomy.to_dict()
    return document


def to_json(ledger: Ledger, indent: Optional[int] = None) -> str:
    """Serialize straight to JSON text."""
    return json.dumps(serialize(ledger), indent=indent, ensure_ascii=False)


def _parse(source: DocumentSource) -> dict:
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise CorruptDocumentError("Document is not UTF-8 text", e) from e
    if isinstance(source, str):
        try:
            source = json.loads(source)
        except json.JSONDecodeError as e:
            raise CorruptDocumentError(f"Document is not valid JSON: {e.msg}", e) from e
        except (ValueError, RecursionError) as e:
            # Nesting too deep for the parser, or numbers it refuses.
            raise CorruptDocumentError(f"Document is not valid JSON: {e}", e) from e
    if not isinstance(source, dict):
        raise CorruptDocumentError(
            f"Document must be a JSON object, got {type(source).__name__}"
        )
    return source


def load_document(source: DocumentSource) -> tuple[Ledger, Optional[MigrationReport]]:
    """
    Build a new Ledger from a document.

    Returns:
        (ledger, migration_report); the report is None unless the document
        used the legacy flat category list

    Raises:
        CorruptDocumentError: If the document cannot be read
    """
    raw = _parse(source)
    try:
        document = LedgerDocument.model_validate(raw)
    except ValidationError as e:
        raise CorruptDocumentError(
            f"Document does not describe a ledger ({e.error_count()} problems)", e
        ) from e

    report = None
    if document.categories is None:
        taxonomy = CategoryTaxonomy.default()
    elif is_legacy(raw):
        taxonomy, report = migrate_categories(document.categories)
    else:
        taxonomy = CategoryTaxonomy({
            kind: document.categories[kind.value]
            for kind in EntryKind
            if kind.value in document.categories
        })

    try:
        ledger = Ledger(
            entries={
                EntryKind.INCOME: document.incomes,
                EntryKind.EXPENSE: document.expenses,
                EntryKind.ASSET: document.assets,
                EntryKind.LIABILITY: document.liabilities,
            },
            taxonomy=taxonomy,
        )
    except ValueError as e:
        raise CorruptDocumentError(str(e), e) from e
    return ledger, report


def deserialize(source: DocumentSource) -> Ledger:
    """Build a new Ledger from a document, migrating legacy categories."""
    ledger, _ = load_document(source)
    return ledger
