"""Contratos de almacenamiento.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El store y la persistencia no saben si el slot vive en disco o en memoria;
  los tests usan `MemoryStorage` sin tocar el sistema de ficheros.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import CatalogEntry


@runtime_checkable
class KeyValueStorage(Protocol):
    """Slot duradero clave -> texto (equivalente a `localStorage`).

    Reglas de diseño:
    - Sincrónico: un único actor, sin I/O de red.
    - `set_item` lanza `PersistenceQuotaExceededError` si no hay espacio y
      `PersistenceError` ante cualquier otro fallo.
    """

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


@runtime_checkable
class CatalogSink(Protocol):
    """Destino del autosave del store. Nunca lanza: devuelve éxito/fallo."""

    def save(self, entries: Sequence[CatalogEntry]) -> bool:
        ...
