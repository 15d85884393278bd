"""In-memory slot storage, for tests and throwaway sessions."""

from typing import Optional

from budgetflow.services.storage.interface import SlotStorageInterface


class InMemorySlotStorage(SlotStorageInterface):
    """Slots held in a dict; gone when the process exits."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._slots: dict[str, str] = dict(initial or {})

    def read(self, slot: str) -> Optional[str]:
        return self._slots.get(slot)

    def write(self, slot: str, value: str) -> None:
        self._slots[slot] = value

    def delete(self, slot: str) -> bool:
        return self._slots.pop(slot, None) is not None

    def snapshot(self) -> dict[str, str]:
        """Copy of every slot, handy for before/after comparisons."""
        return dict(self._slots)
