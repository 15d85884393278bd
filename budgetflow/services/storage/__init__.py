"""
Storage Services Package

Provides the abstract slot interface and its implementations.
Currently implements plain files as the durable backend, but designed
to be swappable.
"""

from budgetflow.services.storage.interface import SlotStorageInterface, StorageError
from budgetflow.services.storage.file_slots import FileSlotStorage
from budgetflow.services.storage.memory import InMemorySlotStorage

__all__ = [
    # Interface
    "SlotStorageInterface",
    # Exceptions
    "StorageError",
    # Implementations
    "FileSlotStorage",
    "InMemorySlotStorage",
]
