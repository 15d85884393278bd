"""
Ledger Session

This module ties the ledger to its durable storage and is the only
surface a front end needs:

1. Load the saved ledger at start-up (migrating old saves)
2. Record, edit and delete entries; manage categories
3. Export, import and clear
4. Remember the display theme

DESIGN DECISION: Every change is made to a copy of the ledger, the copy
is saved, and only then does it replace the live ledger. If validation
or the save fails, both the live ledger and the saved snapshot are
exactly as they were.
"""

from pathlib import Path
from typing import Callable, Optional, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel, Field

from budgetflow.activity import ActivityLogger, configure_logging, create_correlation_id
from budgetflow.config import AppSettings, StorageSettings, get_settings
from budgetflow.ledger import CategoryError, CorruptDocumentError, Ledger
from budgetflow.ledger.store import KindLike
from budgetflow.models.entry import Entry, EntryKind, Theme
from budgetflow.models.events import LedgerEventBuilder
from budgetflow.models.summary import LedgerSummary
from budgetflow.serialization import MigrationReport, load_document, to_json
from budgetflow.services.storage import (
    FileSlotStorage,
    SlotStorageInterface,
    StorageError,
)


T = TypeVar("T")


class ExportFile(BaseModel):
    """An exported ledger, ready to be offered as a download."""

    filename: str = Field(..., description="Suggested file name")
    content: str = Field(..., description="Pretty-printed ledger JSON")

    @property
    def size_bytes(self) -> int:
        return len(self.content.encode("utf-8"))


class ImportReport(BaseModel):
    """Outcome of a successful import."""

    entry_counts: dict[str, int] = Field(
        ...,
        description="Entries per collection in the imported ledger"
    )
    migrated: bool = Field(
        default=False,
        description="Whether legacy categories were migrated"
    )
    discarded_categories: list[str] = Field(
        default_factory=list,
        description="Legacy labels that could not be kept"
    )

    @property
    def total_entries(self) -> int:
        return sum(self.entry_counts.values())


class LedgerSession:
    """
    One interactive session over a saved ledger.

    Always read the ledger through ``session.ledger``: successful changes
    swap in a new Ledger object.
    """

    def __init__(
        self,
        storage: SlotStorageInterface,
        ledger: Optional[Ledger] = None,
        activity_logger: Optional[ActivityLogger] = None,
        storage_settings: Optional[StorageSettings] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        settings = get_settings()
        self._storage = storage
        self._ledger = ledger if ledger is not None else Ledger.default()
        self._activity = activity_logger or ActivityLogger()
        self._storage_settings = storage_settings or settings.storage
        self._app_settings = app_settings or settings.app

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def _persist(self, ledger: Ledger) -> None:
        slot = self._storage_settings.data_slot
        try:
            self._storage.write(slot, to_json(ledger))
        except StorageError as e:
            self._activity.log(LedgerEventBuilder.storage_error("write", slot, str(e)))
            raise
        self._activity.log(LedgerEventBuilder.ledger_saved(slot))

    def _commit(self, change: Callable[[Ledger], T]) -> T:
        candidate = self._ledger.copy()
        result = change(candidate)
        self._persist(candidate)
        self._ledger = candidate
        return result

    def load(self) -> Optional[MigrationReport]:
        """
        Replace the live ledger with the saved one.

        An empty slot gives a fresh default ledger. A legacy save is
        migrated and written back in the current format.

        Returns:
            The migration report if a legacy save was migrated

        Raises:
            CorruptDocumentError: If the saved ledger cannot be read;
                the slot is left untouched
            StorageError: If the slot cannot be read
        """
        slot = self._storage_settings.data_slot
        try:
            saved = self._storage.read(slot)
        except StorageError as e:
            self._activity.log(LedgerEventBuilder.storage_error("read", slot, str(e)))
            raise

        if saved is None:
            self._ledger = Ledger.default()
            self._activity.log(LedgerEventBuilder.ledger_loaded(0, migrated=False))
            return None

        try:
            ledger, report = load_document(saved)
        except CorruptDocumentError as e:
            self._activity.log(LedgerEventBuilder.load_failed(slot, str(e)))
            raise

        if report is not None:
            self._activity.log(LedgerEventBuilder.ledger_migrated(report.discarded))
            self._persist(ledger)
        self._ledger = ledger
        self._activity.log(
            LedgerEventBuilder.ledger_loaded(ledger.entry_count(), migrated=report is not None)
        )
        return report

    def save(self) -> None:
        """Write the live ledger to its slot."""
        self._persist(self._ledger)

    # =========================================================================
    # ENTRIES
    # =========================================================================

    def entries(self, kind: KindLike) -> tuple[Entry, ...]:
        return self._ledger.entries(kind)

    def find(self, kind: KindLike, entry_id: int) -> Optional[Entry]:
        return self._ledger.find(kind, entry_id)

    def create(
        self,
        kind: KindLike,
        label: str,
        category: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> Entry:
        """Record a new entry and save. See ``Ledger.create``."""
        entry = self._commit(lambda ledger: ledger.create(kind, label, category, amount))
        self._activity.log(LedgerEventBuilder.entry_created(entry, correlation_id))
        return entry

    def update(
        self,
        kind: KindLike,
        entry_id: int,
        label: str,
        category: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> Optional[Entry]:
        """Replace an entry and save. Returns None if there is no such entry."""
        kind = EntryKind(kind)
        if self._ledger.find(kind, entry_id) is None:
            self._activity.log(
                LedgerEventBuilder.entry_not_found(kind, entry_id, "update", correlation_id)
            )
            return None
        entry = self._commit(
            lambda ledger: ledger.update(kind, entry_id, label, category, amount)
        )
        self._activity.log(LedgerEventBuilder.entry_updated(entry, correlation_id))
        return entry

    def delete(
        self,
        kind: KindLike,
        entry_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Delete an entry and save. Returns False if there is no such entry."""
        kind = EntryKind(kind)
        if self._ledger.find(kind, entry_id) is None:
            self._activity.log(
                LedgerEventBuilder.entry_not_found(kind, entry_id, "delete", correlation_id)
            )
            return False
        self._commit(lambda ledger: ledger.delete(kind, entry_id))
        self._activity.log(LedgerEventBuilder.entry_deleted(kind, entry_id, correlation_id))
        return True

    # =========================================================================
    # CATEGORIES
    # =========================================================================

    def categories(self, kind: KindLike) -> list[str]:
        return self._ledger.categories(kind)

    def is_in_use(self, kind: KindLike, category: str) -> bool:
        return self._ledger.is_in_use(kind, category)

    def add_category(self, kind: KindLike, label: str) -> str:
        """
        Add a category and save.

        Raises:
            InvalidLabelError, DuplicateCategoryError: Nothing is changed
        """
        kind = EntryKind(kind)
        try:
            stored = self._commit(lambda ledger: ledger.add_category(kind, label))
        except CategoryError as e:
            self._activity.log(LedgerEventBuilder.category_rejected(kind, label, str(e)))
            raise
        self._activity.log(LedgerEventBuilder.category_added(kind, stored))
        return stored

    def remove_category(self, kind: KindLike, label: str) -> bool:
        """
        Remove a category and save. Returns False if it did not exist.

        Raises:
            CategoryInUseError: Nothing is changed
        """
        kind = EntryKind(kind)
        if label not in self._ledger.categories(kind):
            return False
        try:
            self._commit(lambda ledger: ledger.remove_category(kind, label))
        except CategoryError as e:
            self._activity.log(LedgerEventBuilder.category_rejected(kind, label, str(e)))
            raise
        self._activity.log(LedgerEventBuilder.category_removed(kind, label))
        return True

    # =========================================================================
    # SUMMARY
    # =========================================================================

    def summary(self) -> LedgerSummary:
        return self._ledger.summary()

    def formatted_summary(self) -> dict[str, str]:
        """Summary figures formatted with the configured currency symbol."""
        return self._ledger.summary().formatted(self._app_settings.currency_symbol)

    # =========================================================================
    # EXPORT / IMPORT / CLEAR
    # =========================================================================

    def export_document(self) -> ExportFile:
        """The live ledger as a pretty-printed file."""
        export = ExportFile(
            filename=self._storage_settings.export_filename,
            content=to_json(self._ledger, indent=self._app_settings.export_indent),
        )
        self._activity.log(LedgerEventBuilder.ledger_exported(export.filename, export.size_bytes))
        return export

    def export_to(self, directory: Union[str, Path]) -> Path:
        """
        Write the export file into ``directory`` and return its path.

        Raises:
            StorageError: If the file cannot be written
        """
        export = self.export_document()
        target = Path(directory) / export.filename
        try:
            target.write_text(export.content, encoding="utf-8")
        except OSError as e:
            self._activity.log(LedgerEventBuilder.storage_error("export", str(target), str(e)))
            raise StorageError(f"Failed to export ledger: {e}") from e
        return target

    def import_document(
        self,
        source: Union[str, bytes, dict],
        correlation_id: Optional[UUID] = None,
    ) -> ImportReport:
        """
        Replace the whole ledger with an imported document.

        Raises:
            CorruptDocumentError: The document cannot be read; the live
                ledger and the saved snapshot are unchanged
            StorageError: The new ledger could not be saved; nothing changed
        """
        correlation_id = correlation_id or create_correlation_id()
        try:
            ledger, migration = load_document(source)
        except CorruptDocumentError as e:
            self._activity.log(LedgerEventBuilder.import_failed(str(e), correlation_id))
            raise

        self._persist(ledger)
        self._ledger = ledger

        report = ImportReport(
            entry_counts=ledger.entry_counts(),
            migrated=migration is not None,
            discarded_categories=migration.discarded if migration else [],
        )
        self._activity.log(
            LedgerEventBuilder.ledger_imported(
                report.total_entries, report.migrated, correlation_id
            )
        )
        return report

    def import_file(self, path: Union[str, Path]) -> ImportReport:
        """
        Import a ledger file chosen by the user.

        Raises:
            StorageError: If the file cannot be opened
            CorruptDocumentError: If its content is not a ledger
        """
        try:
            content = Path(path).read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to open {path}: {e}") from e
        return self.import_document(content)

    def clear(self) -> None:
        """
        Delete every entry and restore the starter categories.

        Irreversible; confirm with the user before calling.
        """
        self._commit(lambda ledger: ledger.reset())
        self._activity.log(LedgerEventBuilder.ledger_cleared())

    # =========================================================================
    # THEME
    # =========================================================================

    def load_theme(self) -> Theme:
        """The saved theme, or the configured default."""
        saved = self._storage.read(self._storage_settings.theme_slot)
        try:
            return Theme(saved) if saved is not None else self._app_settings.default_theme
        except ValueError:
            return self._app_settings.default_theme

    def save_theme(self, theme: Union[Theme, str]) -> Theme:
        theme = Theme(theme)
        self._storage.write(self._storage_settings.theme_slot, theme.value)
        self._activity.log(LedgerEventBuilder.theme_changed(theme.value))
        return theme


def open_session(
    storage: Optional[SlotStorageInterface] = None,
    data_dir: Optional[Path] = None,
) -> LedgerSession:
    """
    Factory function to create a ready-to-use session.

    Args:
        storage: Slot storage to use. Defaults to files under ``data_dir``
                 (or the configured data directory).
        data_dir: Directory for the default file storage.

    A saved ledger that cannot be read is left in place and the session
    starts from an empty default ledger, which is only written once the
    user changes something.
    """
    configure_logging()
    session = LedgerSession(storage or FileSlotStorage(data_dir=data_dir))
    try:
        session.load()
    except CorruptDocumentError:
        # Already logged by load(); keep the unreadable save on disk.
        pass
    return session
