"""
File Slot Storage Implementation

DESIGN DECISION: Each slot is one UTF-8 text file in a data directory.
Writes go to a temporary file beside the target which is then renamed
over it, so a crash or a full disk mid-write leaves the previous
content readable.

Transient OS errors (locked files, network home directories) are
retried with exponential backoff before giving up. Text that cannot be
encoded as UTF-8 fails at once.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from budgetflow.config import get_settings
from budgetflow.services.storage.interface import SlotStorageInterface, StorageError


SLOT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class FileSlotStorage(SlotStorageInterface):
    """
    Slots stored as files under ``data_dir``.

    The directory is created on first write.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        write_attempts: Optional[int] = None,
    ):
        settings = get_settings().storage
        self._data_dir = Path(data_dir) if data_dir is not None else settings.data_dir
        self._write_attempts = write_attempts or settings.write_attempts

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, slot: str) -> Path:
        """File backing a slot. Slot names cannot escape the data directory."""
        if not SLOT_NAME_PATTERN.match(slot):
            raise StorageError(f"Invalid slot name: {slot!r}", slot=slot)
        return self._data_dir / slot

    def read(self, slot: str) -> Optional[str]:
        path = self.path_for(slot)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read slot {slot}: {e}", slot=slot) from e

    def write(self, slot: str, value: str) -> None:
        path = self.path_for(slot)
        retrying = Retrying(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._replace(path, value)
        except (OSError, UnicodeError) as e:
            raise StorageError(f"Failed to write slot {slot}: {e}", slot=slot) from e

    def _replace(self, path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def delete(self, slot: str) -> bool:
        path = self.path_for(slot)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete slot {slot}: {e}", slot=slot) from e
