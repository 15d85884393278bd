"""Shared fixtures for the ledger tests."""

from typing import Any

import pytest

from budgetflow.activity import ActivityLogger
from budgetflow.ledger import Ledger
from budgetflow.services.storage import InMemorySlotStorage, StorageError
from budgetflow.session import LedgerSession


class RecordingLogger:
    """Stands in for a structlog logger and keeps every call."""

    def __init__(self):
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str, message: str, **kwargs: Any) -> None:
        self.calls.append((level, message, kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._record("debug", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._record("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._record("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._record("error", message, **kwargs)

    def event_types(self) -> list[str]:
        return [kwargs["event_type"] for _, _, kwargs in self.calls]


class FailingSlotStorage(InMemorySlotStorage):
    """In-memory storage whose writes can be switched off."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.fail_writes = False

    def write(self, slot: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("disk full", slot=slot)
        super().write(slot, value)


@pytest.fixture
def ledger() -> Ledger:
    return Ledger.default()


@pytest.fixture
def storage() -> FailingSlotStorage:
    return FailingSlotStorage()


@pytest.fixture
def recorder() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def session(storage: FailingSlotStorage, recorder: RecordingLogger) -> LedgerSession:
    return LedgerSession(storage, activity_logger=ActivityLogger(logger=recorder))
