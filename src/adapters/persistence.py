"""Persistencia del catálogo en un slot clave -> texto.

Por qué JSON plano:
- Es el mismo formato que guardaba la versión web (`localStorage`), así un
  volcado antiguo se puede cargar tal cual.
- Un array de `{id, fileName, status, dateAdded, lastModified}` con fechas
  ISO-8601 es legible y ordenable.

Contrato:
- `save` y `load` nunca lanzan: devuelven éxito/fallo o una lista vacía.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from pydantic import TypeAdapter, ValidationError

from core.domain.errors import (
    CorruptPersistedDataError,
    PersistenceError,
    PersistenceQuotaExceededError,
)
from core.domain.models import CatalogEntry, NotificationLevel
from core.interfaces.notifier import Notifier, silent_notifier
from core.interfaces.storage import KeyValueStorage


logger = logging.getLogger(__name__)

STORAGE_KEY = "rocksmith-file-manager-data"
QUOTA_EXCEEDED_MESSAGE = "Storage quota exceeded. Please remove some files."

_RECORDS = TypeAdapter(list[dict[str, Any]])


def serialize_entries(entries: Sequence[CatalogEntry]) -> str:
    return json.dumps([entry.to_record() for entry in entries], ensure_ascii=False)


def _parse_records(text: str) -> tuple[list[CatalogEntry], int]:
    try:
        records = _RECORDS.validate_json(text)
    except ValidationError as exc:
        raise CorruptPersistedDataError("stored data is not a JSON array of records") from exc

    entries: list[CatalogEntry] = []
    for index, record in enumerate(records):
        try:
            entries.append(CatalogEntry.model_validate(record))
        except ValidationError as exc:
            logger.warning(
                "Skipping stored record #%d (id=%r): %d invalid field(s)",
                index,
                record.get("id"),
                exc.error_count(),
            )
    return entries, len(records)


def deserialize_entries(text: str) -> list[CatalogEntry]:
    """Texto persistido -> entradas.

    Lanza `CorruptPersistedDataError` si el texto no es un array JSON de
    objetos. Un registro inválido dentro de un array correcto se descarta
    (con warning) y el resto se conserva.
    """

    entries, _ = _parse_records(text)
    return entries


class CatalogPersistence:
    """Refleja el estado del store en un único slot de almacenamiento."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = STORAGE_KEY,
        notify: Notifier = silent_notifier,
    ) -> None:
        self._storage = storage
        self._key = key
        self._notify = notify

    @property
    def key(self) -> str:
        return self._key

    def save(self, entries: Sequence[CatalogEntry]) -> bool:
        try:
            self._storage.set_item(self._key, serialize_entries(entries))
        except PersistenceQuotaExceededError as exc:
            logger.warning("Failed to save data: %s", exc)
            self._notify(QUOTA_EXCEEDED_MESSAGE, NotificationLevel.ERROR)
            return False
        except PersistenceError as exc:
            logger.error("Failed to save data: %s", exc)
            return False
        logger.debug("Saved %d entries under %r", len(entries), self._key)
        return True

    @property
    def backup_key(self) -> str:
        return f"{self._key}.bak"

    def _backup(self, text: str) -> None:
        # El próximo autosave sobrescribe el slot: se guarda el texto íntegro antes.
        try:
            self._storage.set_item(self.backup_key, text)
        except PersistenceError as exc:
            logger.error("Failed to back up stored data: %s", exc)
            return
        logger.warning("Original stored data copied to %r", self.backup_key)

    def load(self) -> list[CatalogEntry]:
        try:
            text = self._storage.get_item(self._key)
        except PersistenceError as exc:
            logger.warning("Failed to load data: %s", exc)
            return []
        if not text:
            return []

        try:
            entries, record_count = _parse_records(text)
        except CorruptPersistedDataError as exc:
            logger.warning("Failed to load data: %s", exc)
            self._backup(text)
            return []

        if len(entries) < record_count:
            self._backup(text)
        logger.debug("Loaded %d of %d entries from %r", len(entries), record_count, self._key)
        return entries

    def clear(self) -> None:
        try:
            self._storage.remove_item(self._key)
        except PersistenceError as exc:
            logger.error("Failed to clear data: %s", exc)
