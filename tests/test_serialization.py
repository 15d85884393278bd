"""Tests for ledger documents and legacy migration."""

import json

import pytest

from budgetflow.ledger import DEFAULT_CATEGORIES, CorruptDocumentError, Ledger
from budgetflow.models import EntryKind
from budgetflow.serialization import (
    LEGACY_EXPENSE_CATEGORIES,
    LEGACY_INCOME_CATEGORIES,
    deserialize,
    is_legacy,
    load_document,
    migrate_categories,
    serialize,
    to_json,
)


LEGACY_DOCUMENT = {
    "incomes": [
        {"id": 1700000000001, "source": "Day job", "category": "Salary", "amount": 2500},
    ],
    "expenses": [
        {"id": 1700000000002, "description": "Rent", "category": "Housing", "amount": 900.5},
        {"id": 1700000000003, "description": "Club", "category": "Hobbies", "amount": 20},
    ],
    "assets": [
        {"id": 1700000000004, "name": "Car", "type": "Vehicle", "value": 8000},
    ],
    "liabilities": [],
    "categories": [
        "Salary", "Freelance", "Investment", "Rental", "Business",
        "Housing", "Food", "Transportation", "Utilities", "Entertainment",
        "Healthcare", "Education", "Hobbies",
    ],
}


@pytest.fixture
def busy_ledger(ledger: Ledger) -> Ledger:
    """A ledger that has been through every kind of change."""
    salary = ledger.create("income", "Day job", "Salary", 2500.0)
    ledger.create("income", "Side gig", "Freelance", 320.75)
    rent = ledger.create("expense", "Rent", "Housing", 900.0)
    ledger.create("expense", "Groceries", "Food", 84.13)
    ledger.add_category("asset", "Pension")
    ledger.create("asset", "Workplace pension", "Pension", 15000.0)
    ledger.create("liability", "Card", "Credit Card", 410.0)
    ledger.update("income", salary.id, "Day job", "Salary", 2600.0)
    ledger.delete("expense", rent.id)
    ledger.remove_category("expense", "Education")
    return ledger


class TestSerialize:
    """Tests for Ledger → document."""

    def test_document_shape(self, busy_ledger):
        """Test top-level keys and category mapping."""
        document = serialize(busy_ledger)
        assert list(document) == ["incomes", "expenses", "assets", "liabilities", "categories"]
        assert set(document["categories"]) == {"income", "expense", "asset", "liability"}
        assert "Education" not in document["categories"]["expense"]
        assert document["categories"]["asset"][-1] == "Pension"

    def test_records_verbatim(self, busy_ledger):
        """Test records carry their kind's field names in order."""
        document = serialize(busy_ledger)
        assert [income["amount"] for income in document["incomes"]] == [2600.0, 320.75]
        assert document["assets"][0] == {
            "id": busy_ledger.entries("asset")[0].id,
            "name": "Workplace pension",
            "type": "Pension",
            "value": 15000.0,
        }

    def test_to_json_is_valid_json(self, busy_ledger):
        """Test JSON text matches the dict document."""
        assert json.loads(to_json(busy_ledger, indent=2)) == serialize(busy_ledger)


class TestRoundTrip:
    """Tests for Deserialize(Serialize(L)) == L."""

    def test_default_ledger(self, ledger):
        """Test a fresh ledger survives a round trip."""
        assert deserialize(serialize(ledger)) == ledger

    def test_busy_ledger(self, busy_ledger):
        """Test a ledger after creates, updates and deletes."""
        assert deserialize(serialize(busy_ledger)) == busy_ledger

    def test_through_json_text(self, busy_ledger):
        """Test a round trip through JSON text."""
        assert deserialize(to_json(busy_ledger)) == busy_ledger

    def test_category_order_preserved(self, ledger):
        """Test stored label order survives, not just the label set."""
        ledger.add_category("income", "Aardvark breeding")
        restored = deserialize(serialize(ledger))
        assert restored.taxonomy.stored(EntryKind.INCOME) == ledger.taxonomy.stored(EntryKind.INCOME)

    def test_emptied_taxonomy(self, ledger):
        """Test a kind with every category removed stays empty."""
        for label in ledger.categories("liability"):
            ledger.remove_category("liability", label)
        assert deserialize(serialize(ledger)).categories("liability") == []

    def test_migrated_ledger(self):
        """Test a migrated ledger round-trips in the new format."""
        migrated = deserialize(LEGACY_DOCUMENT)
        assert deserialize(serialize(migrated)) == migrated

    def test_new_ids_after_load(self, busy_ledger):
        """Test a loaded ledger issues ids above the saved ones."""
        restored = deserialize(serialize(busy_ledger))
        highest = max(
            entry.id for kind in EntryKind for entry in restored.entries(kind)
        )
        assert restored.create("income", "Tips", "Salary", 5.0).id > highest

    def test_document_method_aliases(self, busy_ledger):
        """Test Ledger.to_document / from_document."""
        assert Ledger.from_document(busy_ledger.to_document()) == busy_ledger


class TestMigration:
    """Tests for the legacy flat category list."""

    def test_split_and_discard(self):
        """Test the documented legacy example."""
        ledger, report = load_document({"categories": ["Salary", "Housing", "Bogus"]})
        taxonomy = ledger.taxonomy
        assert taxonomy.stored(EntryKind.INCOME) == ("Salary",)
        assert taxonomy.stored(EntryKind.EXPENSE) == ("Housing",)
        assert taxonomy.stored(EntryKind.ASSET) == DEFAULT_CATEGORIES[EntryKind.ASSET]
        assert taxonomy.stored(EntryKind.LIABILITY) == DEFAULT_CATEGORIES[EntryKind.LIABILITY]
        assert report.discarded == ["Bogus"]

    def test_is_legacy(self):
        """Test legacy detection."""
        assert is_legacy({"categories": []}) is True
        assert is_legacy({"categories": {"income": []}}) is False
        assert is_legacy({}) is False

    def test_empty_legacy_list(self):
        """Test an empty flat list still counts as a legacy document."""
        ledger, report = load_document({"categories": []})
        assert report is not None
        assert ledger.taxonomy.stored(EntryKind.INCOME) == ()
        assert ledger.taxonomy.stored(EntryKind.ASSET) == DEFAULT_CATEGORIES[EntryKind.ASSET]

    def test_full_legacy_document(self):
        """Test entries survive migration untouched."""
        ledger, report = load_document(LEGACY_DOCUMENT)
        assert report is not None
        assert report.discarded == ["Hobbies"]
        assert ledger.entry_counts() == {
            "incomes": 1, "expenses": 2, "assets": 1, "liabilities": 0,
        }
        assert ledger.get("expense", 1700000000003).category == "Hobbies"
        assert "Hobbies" not in ledger.categories("expense")
        assert ledger.get("income", 1700000000001).amount == 2500.0

    def test_order_kept_and_duplicates_dropped(self):
        """Test input order is kept within each kind."""
        taxonomy, report = migrate_categories(["Rental", "Food", "Salary", "Rental"])
        assert taxonomy.stored(EntryKind.INCOME) == ("Rental", "Salary")
        assert taxonomy.stored(EntryKind.EXPENSE) == ("Food",)
        assert report.income == ["Rental", "Salary"]

    def test_legacy_names_are_disjoint(self):
        """Test no label could go to both kinds."""
        assert not LEGACY_INCOME_CATEGORIES & LEGACY_EXPENSE_CATEGORIES

    def test_partitioned_document_is_not_migrated(self):
        """Test current documents report no migration."""
        _, report = load_document({"categories": {"income": ["Salary"]}})
        assert report is None

    def test_missing_kinds_get_defaults(self):
        """Test a partitioned mapping missing a kind gets its defaults."""
        ledger, _ = load_document({"categories": {"income": ["Salary"], "mystery": ["x"]}})
        assert ledger.categories("income") == ["Salary"]
        assert ledger.taxonomy.stored(EntryKind.ASSET) == DEFAULT_CATEGORIES[EntryKind.ASSET]

    def test_missing_categories_field(self):
        """Test a document without categories gets the defaults."""
        ledger = deserialize({"incomes": []})
        assert ledger == Ledger.default()


class TestCorruptDocuments:
    """Tests for malformed input."""

    @pytest.mark.parametrize("source", [
        "{not json",
        "",
        "[1, 2, 3]",
        '"just a string"',
        b"\xff\xfe\x00garbage",
    ])
    def test_unparseable(self, source):
        """Test text that is not a JSON object."""
        with pytest.raises(CorruptDocumentError):
            deserialize(source)

    def test_nesting_too_deep(self):
        """Test nesting deeper than the JSON parser can follow."""
        with pytest.raises(CorruptDocumentError):
            deserialize("[" * 100000 + "]" * 100000)

    def test_wrong_record_types(self):
        """Test records with wrong field types."""
        with pytest.raises(CorruptDocumentError):
            deserialize({"incomes": [{"id": "abc", "source": "x", "category": "Salary", "amount": 1}]})

    def test_missing_record_fields(self):
        """Test records missing required fields."""
        with pytest.raises(CorruptDocumentError):
            deserialize({"assets": [{"id": 1, "name": "Car"}]})

    def test_categories_wrong_shape(self):
        """Test a categories value that is neither list nor mapping."""
        with pytest.raises(CorruptDocumentError):
            deserialize({"categories": 42})

    def test_duplicate_ids(self):
        """Test two records sharing an id."""
        record = {"id": 1, "source": "x", "category": "Salary", "amount": 1}
        with pytest.raises(CorruptDocumentError):
            deserialize({"incomes": [record, record]})

    def test_bom_is_tolerated(self, busy_ledger):
        """Test UTF-8 files saved with a byte order mark."""
        raw = ("﻿" + to_json(busy_ledger)).encode("utf-8")
        assert deserialize(raw) == busy_ledger

    def test_error_keeps_cause(self):
        """Test the underlying parse error is attached."""
        with pytest.raises(CorruptDocumentError) as excinfo:
            deserialize("{not json")
        assert isinstance(excinfo.value.cause, json.JSONDecodeError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
