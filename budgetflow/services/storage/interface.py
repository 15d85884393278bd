"""
Abstract Slot Storage Interface

DESIGN DECISION: Persistence is a handful of named string slots, the
same model a browser's local storage offers. This allows us to:
1. Keep the ledger itself free of any file or database code
2. Use in-memory storage for testing
3. Swap the file backend for something else without touching the ledger

The interface is intentionally tiny: read, write, delete.
"""

from abc import ABC, abstractmethod
from typing import Optional


class SlotStorageInterface(ABC):
    """
    Durable named slots holding text.

    Each call is a single synchronous read or write. A write either
    replaces the slot's content completely or leaves it as it was.
    """

    @abstractmethod
    def read(self, slot: str) -> Optional[str]:
        """
        Read a slot.

        Returns:
            The stored text, or None if the slot has never been written

        Raises:
            StorageError: If the slot exists but cannot be read
        """
        pass

    @abstractmethod
    def write(self, slot: str, value: str) -> None:
        """
        Replace a slot's content.

        Raises:
            StorageError: If the write fails; the old content is kept
        """
        pass

    @abstractmethod
    def delete(self, slot: str) -> bool:
        """
        Remove a slot.

        Returns:
            True if the slot existed
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""

    def __init__(self, message: str, slot: Optional[str] = None):
        self.slot = slot
        super().__init__(message)
