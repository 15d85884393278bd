"""
Entry identifier generation.

Ids are millisecond timestamps, which keeps them compatible with
documents written by earlier versions, but a generator never hands out
the same value twice: when the clock has not moved on it issues the
next integer instead.
"""

import time
from typing import Callable, Iterable, Optional


def _clock_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Strictly increasing entry ids, scoped to one ledger."""

    def __init__(self, clock: Optional[Callable[[], int]] = None, floor: int = 0):
        self._clock = clock or _clock_ms
        self._last = floor

    @property
    def last_issued(self) -> int:
        return self._last

    def observe(self, ids: Iterable[int]) -> None:
        """Make sure future ids are above every id already in use."""
        self._last = max([self._last, *ids])

    def copy(self) -> "IdGenerator":
        return IdGenerator(self._clock, floor=self._last)

    def next_id(self) -> int:
        self._last = max(self._clock(), self._last + 1)
        return self._last
