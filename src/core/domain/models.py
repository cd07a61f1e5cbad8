"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El formato persistido (`fileName`, `dateAdded`, ...) se resuelve con alias,
  así el resto del código trabaja con nombres Python.

Nota:
- Estos modelos describen *qué* es un registro del catálogo, no *cómo* se
  guarda ni cómo se pinta.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator
from pydantic.config import ConfigDict


STATUS_FILTER_ALL = "all"


class FileStatus(str, Enum):
    """Etiquetas de validación que el usuario asigna a cada paquete."""

    UNTESTED = "untested"
    GOOD = "good"
    BAD = "bad"
    WRONG_FORMAT = "wrongFormat"

    def label(self) -> str:
        """Human readable label for tables and reports."""

        return _STATUS_LABELS[self]


_STATUS_LABELS: dict[FileStatus, str] = {
    FileStatus.GOOD: "Good",
    FileStatus.BAD: "Bad",
    FileStatus.WRONG_FORMAT: "Wrong Format",
    FileStatus.UNTESTED: "Untested",
}


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


def format_timestamp(value: datetime) -> str:
    """Texto ISO-8601 en UTC con milisegundos y sufijo `Z` (forma ordenable)."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def utc_now() -> datetime:
    """Momento actual en UTC truncado a milisegundos.

    El formato persistido solo guarda milisegundos; truncar aquí hace que el
    round-trip save/load devuelva exactamente el mismo valor.
    """

    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class CatalogEntry(BaseModel):
    """Un registro del catálogo: nombre de paquete + estado + timestamps.

    Por qué existe:
    - Es la única entidad del dominio; store, persistencia, filtros y
      paginación trabajan sobre listas de `CatalogEntry`.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(
        ...,
        min_length=1,
        description="Identificador opaco asignado al crear el registro.",
    )
    file_name: str = Field(
        ...,
        alias="fileName",
        min_length=1,
        description="Nombre del paquete (p.ej. 'song-artist.psarc'). Único en el store.",
    )
    status: FileStatus = Field(
        default=FileStatus.UNTESTED,
        description="Estado de validación declarado por el usuario.",
    )
    date_added: datetime = Field(
        ...,
        alias="dateAdded",
        description="Momento de alta (nunca cambia).",
    )
    last_modified: datetime = Field(
        ...,
        alias="lastModified",
        description="Último cambio de estado (igual a `date_added` al crear).",
    )

    @model_validator(mode="before")
    @classmethod
    def _backfill_last_modified(cls, data: Any) -> Any:
        # Registros antiguos no guardaban `lastModified`.
        if isinstance(data, dict):
            last = data.get("lastModified", data.get("last_modified"))
            if last is None:
                added = data.get("dateAdded", data.get("date_added"))
                data = {**data, "lastModified": added}
                data.pop("last_modified", None)
        return data

    @field_validator("date_added", "last_modified")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _check_timestamps(self) -> "CatalogEntry":
        if self.last_modified < self.date_added:
            raise ValueError("lastModified must not be earlier than dateAdded")
        return self

    @field_serializer("date_added", "last_modified")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)

    def to_record(self) -> dict[str, Any]:
        """Forma persistida: `{id, fileName, status, dateAdded, lastModified}`."""

        return self.model_dump(mode="json", by_alias=True)


class Notification(BaseModel):
    """Mensaje para la capa de notificaciones (fire-and-forget)."""

    message: str = Field(..., min_length=1)
    level: NotificationLevel = Field(default=NotificationLevel.INFO)


class ImportValidation(BaseModel):
    """Resultado de validar texto pegado en bloque."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    file_count: int = Field(default=0, ge=0)


class PaginationState(BaseModel):
    """Estado derivado del paginador.

    `total_pages == 0` cuando no hay elementos; `current_page` sigue
    reportando 1 en ese caso.
    """

    current_page: int = Field(default=1, ge=1)
    items_per_page: int = Field(..., ge=1)
    total_items: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)
