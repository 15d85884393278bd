"""Services package."""

from budgetflow.services.storage import (
    FileSlotStorage,
    InMemorySlotStorage,
    SlotStorageInterface,
    StorageError,
)

__all__ = [
    "FileSlotStorage",
    "InMemorySlotStorage",
    "SlotStorageInterface",
    "StorageError",
]
