"""Backends clave -> texto para el slot persistido.

Por qué está en adapters:
- Disco/memoria son detalles de infraestructura.
- El Core solo conoce el contrato `core.interfaces.storage.KeyValueStorage`.
"""

from __future__ import annotations

import errno
import os
import re
import tempfile
from pathlib import Path

from core.domain.errors import PersistenceError, PersistenceQuotaExceededError


_QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}
_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def _check_quota(value: str, quota_bytes: int | None) -> None:
    if quota_bytes is None:
        return
    size = len(value.encode("utf-8"))
    if size > quota_bytes:
        raise PersistenceQuotaExceededError(
            f"payload of {size} bytes exceeds the {quota_bytes} byte quota"
        )


class MemoryStorage:
    """Slot volátil en un dict (tests, sesiones efímeras)."""

    def __init__(self, quota_bytes: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        _check_quota(value, self._quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """Un fichero UTF-8 por clave dentro de `directory`.

    Diseño:
    - Escritura atómica (fichero temporal + `os.replace`): un corte a mitad
      de escritura deja el contenido anterior intacto.
    - `quota_bytes` emula el límite de `localStorage`; ENOSPC/EDQUOT también
      se reportan como cuota excedida.
    """

    def __init__(self, directory: Path, quota_bytes: int | None = None) -> None:
        self._directory = Path(directory)
        self._quota_bytes = quota_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        safe = _UNSAFE_KEY_CHARS.sub("_", key) or "_"
        return self._directory / f"{safe}.json"

    def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"cannot read {path}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        _check_quota(value, self._quota_bytes)
        path = self.path_for(key)
        tmp_name: str | None = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=".tmp-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            if exc.errno in _QUOTA_ERRNOS:
                raise PersistenceQuotaExceededError(f"no space left for {path}") from exc
            raise PersistenceError(f"cannot write {path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

    def remove_item(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"cannot remove {path}: {exc}") from exc
