"""Errores del dominio.

Por qué una jerarquía propia:
- La CLI y los servicios capturan `CatalogError` sin conocer los detalles.
- Ninguno es fatal: todos representan fallos recuperables que se notifican.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base de todos los errores del catálogo."""


class DuplicateNameError(CatalogError):
    def __init__(self, file_name: str) -> None:
        super().__init__(f"File '{file_name}' already exists")
        self.file_name = file_name


class EntryNotFoundError(CatalogError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(f"No file with id '{entry_id}'")
        self.entry_id = entry_id


class PersistenceError(CatalogError):
    """Fallo genérico al leer/escribir el slot de almacenamiento."""


class PersistenceQuotaExceededError(PersistenceError):
    """El backend no tiene espacio para el payload."""


class CorruptPersistedDataError(PersistenceError):
    """El texto guardado no se puede interpretar como lista de registros."""


class InvalidFileNameError(CatalogError):
    def __init__(self, file_name: str) -> None:
        super().__init__(f"Invalid file name: {file_name!r}")
        self.file_name = file_name
