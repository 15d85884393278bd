"""
Activity Event Models for BudgetFlow

Every significant ledger action produces a structured event that is
written to the local log. This provides:
1. Debugging information when things go wrong
2. A readable trace of what a session did
3. Correlation of the steps of one user action

DESIGN DECISION: Events are log lines, not records. They are never
persisted alongside the ledger and cannot be replayed.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from budgetflow.models.entry import Entry, EntryKind


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerEventType(str, Enum):
    """Types of events the activity log records."""
    # Entries
    ENTRY_CREATED = "entry_created"
    ENTRY_UPDATED = "entry_updated"
    ENTRY_DELETED = "entry_deleted"
    ENTRY_NOT_FOUND = "entry_not_found"

    # Categories
    CATEGORY_ADDED = "category_added"
    CATEGORY_REMOVED = "category_removed"
    CATEGORY_REJECTED = "category_rejected"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_MIGRATED = "ledger_migrated"
    LEDGER_SAVED = "ledger_saved"
    LEDGER_EXPORTED = "ledger_exported"
    LEDGER_IMPORTED = "ledger_imported"
    LEDGER_CLEARED = "ledger_cleared"
    IMPORT_FAILED = "import_failed"
    LOAD_FAILED = "load_failed"
    THEME_CHANGED = "theme_changed"

    # System events
    STORAGE_ERROR = "storage_error"


class EventSeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerEvent(BaseModel):
    """A single activity event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: LedgerEventType = Field(
        ...,
        description="Type of event"
    )
    severity: EventSeverity = Field(
        default=EventSeverity.INFO,
        description="Event severity"
    )

    # Context - what is this about?
    kind: Optional[EntryKind] = Field(
        default=None,
        description="Entry kind the event relates to, if any"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Entry id the event relates to, if any"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID tying together the events of one user action"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "kind": self.kind.value if self.kind else None,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class LedgerEventBuilder:
    """
    Helper class to build events with common patterns.

    Usage:
        event = LedgerEventBuilder.entry_created(entry)
        event = LedgerEventBuilder.import_failed("not JSON", correlation_id)
    """

    @staticmethod
    def entry_created(entry: Entry, correlation_id: Optional[UUID] = None) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ENTRY_CREATED,
            kind=entry.kind,
            entity_id=entry.id,
            correlation_id=correlation_id,
            description=f"{entry.kind.value.capitalize()} recorded: {entry.label}",
            details={
                "category": entry.category_label,
                "amount": entry.quantity,
            },
        )

    @staticmethod
    def entry_updated(entry: Entry, correlation_id: Optional[UUID] = None) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ENTRY_UPDATED,
            kind=entry.kind,
            entity_id=entry.id,
            correlation_id=correlation_id,
            description=f"{entry.kind.value.capitalize()} updated: {entry.label}",
            details={
                "category": entry.category_label,
                "amount": entry.quantity,
            },
        )

    @staticmethod
    def entry_deleted(
        kind: EntryKind,
        entry_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ENTRY_DELETED,
            kind=kind,
            entity_id=entry_id,
            correlation_id=correlation_id,
            description=f"{kind.value.capitalize()} {entry_id} deleted",
        )

    @staticmethod
    def entry_not_found(
        kind: EntryKind,
        entry_id: int,
        operation: str,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.ENTRY_NOT_FOUND,
            severity=EventSeverity.WARNING,
            kind=kind,
            entity_id=entry_id,
            correlation_id=correlation_id,
            description=f"Cannot {operation} {kind.value} {entry_id}: no such entry",
            details={"operation": operation},
        )

    @staticmethod
    def category_added(kind: EntryKind, label: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_ADDED,
            kind=kind,
            description=f"Category added to {kind.value}: {label}",
            details={"label": label},
        )

    @staticmethod
    def category_removed(kind: EntryKind, label: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_REMOVED,
            kind=kind,
            description=f"Category removed from {kind.value}: {label}",
            details={"label": label},
        )

    @staticmethod
    def category_rejected(kind: EntryKind, label: str, reason: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_REJECTED,
            severity=EventSeverity.WARNING,
            kind=kind,
            description=f"Category change rejected for {kind.value}",
            details={"label": label},
            error_message=reason,
        )

    @staticmethod
    def ledger_loaded(entry_count: int, migrated: bool) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_LOADED,
            description=f"Ledger loaded with {entry_count} entries",
            details={"entry_count": entry_count, "migrated": migrated},
        )

    @staticmethod
    def ledger_migrated(discarded: list[str]) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_MIGRATED,
            severity=EventSeverity.WARNING if discarded else EventSeverity.INFO,
            description="Legacy flat category list split by entry kind",
            details={"discarded_categories": discarded},
        )

    @staticmethod
    def ledger_saved(slot: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_SAVED,
            severity=EventSeverity.DEBUG,
            description=f"Ledger written to slot {slot}",
            details={"slot": slot},
        )

    @staticmethod
    def ledger_exported(filename: str, size: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_EXPORTED,
            description=f"Ledger exported as {filename}",
            details={"filename": filename, "size_bytes": size},
        )

    @staticmethod
    def ledger_imported(
        entry_count: int,
        migrated: bool,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_IMPORTED,
            correlation_id=correlation_id,
            description=f"Ledger imported with {entry_count} entries",
            details={"entry_count": entry_count, "migrated": migrated},
        )

    @staticmethod
    def ledger_cleared() -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_CLEARED,
            severity=EventSeverity.WARNING,
            description="All ledger data cleared",
        )

    @staticmethod
    def import_failed(
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.IMPORT_FAILED,
            severity=EventSeverity.ERROR,
            correlation_id=correlation_id,
            description="Import rejected, previous ledger kept",
            error_message=error_message,
        )

    @staticmethod
    def load_failed(slot: str, error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LOAD_FAILED,
            severity=EventSeverity.ERROR,
            description=f"Saved ledger in slot {slot} could not be read",
            details={"slot": slot},
            error_message=error_message,
        )

    @staticmethod
    def theme_changed(theme: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.THEME_CHANGED,
            severity=EventSeverity.DEBUG,
            description=f"Theme set to {theme}",
            details={"theme": theme},
        )

    @staticmethod
    def storage_error(operation: str, slot: str, error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STORAGE_ERROR,
            severity=EventSeverity.ERROR,
            description=f"Storage {operation} failed for slot {slot}",
            details={"operation": operation, "slot": slot},
            error_message=error_message,
        )
