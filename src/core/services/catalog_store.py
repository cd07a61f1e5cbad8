"""In-memory catalog store.

The store owns the canonical list of entries and is the only thing that
mutates them. Every mutation except `replace_all` is followed by a synchronous
autosave through a `CatalogSink`; a failed save is logged and the in-memory
change stays applied.
"""

from __future__ import annotations

import logging
import secrets
import string
import time
from datetime import datetime
from typing import Callable, Iterable

from core.domain.errors import DuplicateNameError, InvalidFileNameError
from core.domain.models import CatalogEntry, FileStatus, utc_now
from core.interfaces.storage import CatalogSink


logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_entry_id() -> str:
    """`<epoch ms>-<9 base36 chars>`.

    Collisions are unlikely but not impossible; the store does not retry.
    """

    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}-{suffix}"


class CatalogStore:
    def __init__(
        self,
        sink: CatalogSink | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_entry_id,
    ) -> None:
        self._entries: list[CatalogEntry] = []
        self._sink = sink
        self._clock = clock
        self._id_factory = id_factory

    def __len__(self) -> int:
        return len(self._entries)

    def _find(self, entry_id: str) -> CatalogEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def _autosave(self) -> None:
        if self._sink is None:
            return
        if not self._sink.save(self._entries):
            logger.warning("Autosave failed; %d entries kept in memory only", len(self._entries))

    def add(self, file_name: str) -> CatalogEntry:
        """Insert a new `untested` entry.

        The name is used as given (callers trim it). Raises
        `InvalidFileNameError` for an empty or blank name and
        `DuplicateNameError` when an entry with exactly the same name exists;
        neither changes anything.
        """

        if not file_name or not file_name.strip():
            raise InvalidFileNameError(file_name)
        if any(entry.file_name == file_name for entry in self._entries):
            raise DuplicateNameError(file_name)

        now = self._clock()
        entry = CatalogEntry(
            id=self._id_factory(),
            file_name=file_name,
            status=FileStatus.UNTESTED,
            date_added=now,
            last_modified=now,
        )
        self._entries.append(entry)
        self._autosave()
        return entry.model_copy()

    def list(self) -> list[CatalogEntry]:
        return [entry.model_copy() for entry in self._entries]

    def get_by_id(self, entry_id: str) -> CatalogEntry | None:
        entry = self._find(entry_id)
        return entry.model_copy() if entry is not None else None

    def update_status(self, entry_id: str, status: FileStatus | str) -> bool:
        entry = self._find(entry_id)
        if entry is None:
            return False

        entry.status = FileStatus(status)
        entry.last_modified = max(self._clock(), entry.date_added)
        self._autosave()
        return True

    def delete(self, entry_id: str) -> bool:
        entry = self._find(entry_id)
        if entry is None:
            return False

        self._entries.remove(entry)
        self._autosave()
        return True

    def clear(self) -> None:
        self._entries = []
        self._autosave()

    def replace_all(self, entries: Iterable[CatalogEntry]) -> None:
        """Load-time initialization: no duplicate checks, no autosave."""

        self._entries = [entry.model_copy() for entry in entries]
