"""
Ledger Store

The root aggregate: four entry collections plus the category taxonomy.

GUARANTEES:
- Entries are only ever created or updated with a category the taxonomy
  offers for their kind
- A category cannot be removed while an entry of its kind uses it
- Every operation applies completely or not at all
- Update, delete and find on a missing id never raise; they return
  None or False and leave everything unchanged

DESIGN DECISION: The ledger does not cache totals. The working set is a
household's worth of entries, so summing on every request is cheap and
can never drift from the entries themselves.
"""

from typing import Iterable, Mapping, Optional, Union

from budgetflow.ledger import aggregation
from budgetflow.ledger.errors import (
    CategoryInUseError,
    EntryNotFoundError,
    UnknownCategoryError,
)
from budgetflow.ledger.ids import IdGenerator
from budgetflow.ledger.taxonomy import CategoryTaxonomy
from budgetflow.models.entry import ENTRY_MODELS, Entry, EntryKind, build_entry
from budgetflow.models.summary import LedgerSummary


KindLike = Union[EntryKind, str]


class Ledger:
    """
    All of a user's entries and categories.

    Construct with ``Ledger.default()`` for a fresh ledger or
    ``Ledger.from_document(...)`` to rebuild a saved one.
    """

    def __init__(
        self,
        entries: Optional[Mapping[EntryKind, Iterable[Entry]]] = None,
        taxonomy: Optional[CategoryTaxonomy] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        entries = entries or {}
        self._entries: dict[EntryKind, list[Entry]] = {}
        for kind in EntryKind:
            collection = list(entries.get(kind, ()))
            self._check_collection(kind, collection)
            self._entries[kind] = collection
        self._taxonomy = taxonomy if taxonomy is not None else CategoryTaxonomy.default()
        self._ids = id_generator or IdGenerator()
        self._ids.observe(
            entry.id for collection in self._entries.values() for entry in collection
        )

    @staticmethod
    def _check_collection(kind: EntryKind, collection: list[Entry]) -> None:
        model = ENTRY_MODELS[kind]
        seen: set[int] = set()
        for entry in collection:
            if not isinstance(entry, model):
                raise TypeError(
                    f"{kind.collection} can only hold {model.__name__}, "
                    f"got {type(entry).__name__}"
                )
            if entry.id in seen:
                raise ValueError(f"Duplicate id {entry.id} in {kind.collection}")
            seen.add(entry.id)

    @classmethod
    def default(cls) -> "Ledger":
        """An empty ledger with the starter categories."""
        return cls()

    @classmethod
    def from_document(cls, document: Union[dict, str, bytes]) -> "Ledger":
        """Rebuild a ledger from a saved document, migrating if needed."""
        from budgetflow.serialization import deserialize

        return deserialize(document)

    def to_document(self) -> dict:
        """The ledger as a plain, JSON-ready document."""
        from budgetflow.serialization import serialize

        return serialize(self)

    # =========================================================================
    # ENTRIES
    # =========================================================================

    def entries(self, kind: KindLike) -> tuple[Entry, ...]:
        """Entries of ``kind`` in insertion order."""
        return tuple(self._entries[EntryKind(kind)])

    def _index_of(self, kind: EntryKind, entry_id: int) -> Optional[int]:
        for index, entry in enumerate(self._entries[kind]):
            if entry.id == entry_id:
                return index
        return None

    def find(self, kind: KindLike, entry_id: int) -> Optional[Entry]:
        """The entry with this id, or None."""
        kind = EntryKind(kind)
        index = self._index_of(kind, entry_id)
        return None if index is None else self._entries[kind][index]

    def get(self, kind: KindLike, entry_id: int) -> Entry:
        """
        The entry with this id.

        Raises:
            EntryNotFoundError: If there is no such entry
        """
        entry = self.find(kind, entry_id)
        if entry is None:
            raise EntryNotFoundError(EntryKind(kind), entry_id)
        return entry

    def _require_category(self, kind: EntryKind, category: str) -> None:
        if not self._taxonomy.contains(kind, category):
            raise UnknownCategoryError(kind, category)

    def create(
        self,
        kind: KindLike,
        label: str,
        category: str,
        amount: float,
    ) -> Entry:
        """
        Record a new entry and return it.

        Every call appends a new entry with a fresh id, even when the
        fields match an existing one.

        Raises:
            UnknownCategoryError: If ``category`` is not offered for ``kind``
            pydantic.ValidationError: If a field has the wrong type
        """
        kind = EntryKind(kind)
        self._require_category(kind, category)
        entry = build_entry(kind, self._ids.next_id(), label, category, amount)
        self._entries[kind].append(entry)
        return entry

    def update(
        self,
        kind: KindLike,
        entry_id: int,
        label: str,
        category: str,
        amount: float,
    ) -> Optional[Entry]:
        """
        Replace every field of an entry except its id.

        Returns the updated entry, or None if there is no such entry.

        Raises:
            UnknownCategoryError: If ``category`` is not offered for ``kind``
        """
        kind = EntryKind(kind)
        index = self._index_of(kind, entry_id)
        if index is None:
            return None
        self._require_category(kind, category)
        entry = build_entry(kind, entry_id, label, category, amount)
        self._entries[kind][index] = entry
        return entry

    def delete(self, kind: KindLike, entry_id: int) -> bool:
        """Remove an entry. Returns False if there is no such entry."""
        kind = EntryKind(kind)
        index = self._index_of(kind, entry_id)
        if index is None:
            return False
        del self._entries[kind][index]
        return True

    # =========================================================================
    # CATEGORIES
    # =========================================================================

    @property
    def taxonomy(self) -> CategoryTaxonomy:
        """A copy of the taxonomy; change categories through the ledger."""
        return self._taxonomy.copy()

    def categories(self, kind: KindLike) -> list[str]:
        """Category labels for ``kind`` in display order."""
        return self._taxonomy.labels(EntryKind(kind))

    def usage_count(self, kind: KindLike, category: str) -> int:
        kind = EntryKind(kind)
        return sum(1 for entry in self._entries[kind] if entry.category_label == category)

    def is_in_use(self, kind: KindLike, category: str) -> bool:
        """True if some entry of ``kind`` has this category."""
        kind = EntryKind(kind)
        return any(entry.category_label == category for entry in self._entries[kind])

    def add_category(self, kind: KindLike, label: str) -> str:
        """
        Offer a new category for ``kind``. Returns the stored label.

        Raises:
            InvalidLabelError: If the label is blank
            DuplicateCategoryError: If the label already exists
        """
        return self._taxonomy.add(EntryKind(kind), label)

    def remove_category(self, kind: KindLike, label: str) -> bool:
        """
        Stop offering a category. Returns False if it did not exist.

        Raises:
            CategoryInUseError: If any entry of ``kind`` still uses it
        """
        kind = EntryKind(kind)
        count = self.usage_count(kind, label)
        if count:
            raise CategoryInUseError(kind, label, count)
        return self._taxonomy.discard(kind, label)

    # =========================================================================
    # AGGREGATES
    # =========================================================================

    def summary(self) -> LedgerSummary:
        return aggregation.summarize(
            self._entries[EntryKind.INCOME],
            self._entries[EntryKind.EXPENSE],
            self._entries[EntryKind.ASSET],
            self._entries[EntryKind.LIABILITY],
        )

    @property
    def total_income(self) -> float:
        return aggregation.total_income(self._entries[EntryKind.INCOME])

    @property
    def total_expenses(self) -> float:
        return aggregation.total_expenses(self._entries[EntryKind.EXPENSE])

    @property
    def balance(self) -> float:
        return aggregation.balance(
            self._entries[EntryKind.INCOME], self._entries[EntryKind.EXPENSE]
        )

    @property
    def total_assets(self) -> float:
        return aggregation.total_assets(self._entries[EntryKind.ASSET])

    @property
    def total_liabilities(self) -> float:
        return aggregation.total_liabilities(self._entries[EntryKind.LIABILITY])

    @property
    def net_wealth(self) -> float:
        return aggregation.net_wealth(
            self._entries[EntryKind.ASSET], self._entries[EntryKind.LIABILITY]
        )

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def entry_count(self) -> int:
        return sum(len(collection) for collection in self._entries.values())

    def entry_counts(self) -> dict[str, int]:
        """Number of entries per collection name."""
        return {kind.collection: len(self._entries[kind]) for kind in EntryKind}

    def copy(self) -> "Ledger":
        """
        An independent ledger with the same entries and categories.

        Entries are immutable and shared; the taxonomy and the id
        sequence are copied.
        """
        return Ledger(
            entries=self._entries,
            taxonomy=self._taxonomy.copy(),
            id_generator=self._ids.copy(),
        )

    def reset(self) -> None:
        """
        Drop every entry and restore the starter categories.

        Irreversible. Callers confirm with the user first.
        """
        self._entries = {kind: [] for kind in EntryKind}
        self._taxonomy = CategoryTaxonomy.default()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ledger):
            return NotImplemented
        return self._entries == other._entries and self._taxonomy == other._taxonomy

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{kind.collection}={len(self._entries[kind])}" for kind in EntryKind
        )
        return f"Ledger({counts})"
