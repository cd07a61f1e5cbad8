"""Exportación HTML del catálogo.

Por qué está en adapters:
- HTML es un detalle de presentación (Jinja2).
- El Core solo conoce `CatalogEntry` y los conteos por estado.

Los nombres de fichero vienen del usuario: el entorno Jinja2 escapa todo lo
que se renderiza.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.models import CatalogEntry, FileStatus, format_timestamp
from core.services.filtering import status_counts


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.filters["timestamp"] = format_timestamp
    return env


def render_catalog_html(*, entries: Sequence[CatalogEntry], title: str = "Rocksmith File Manager") -> str:
    """Renderiza un HTML autocontenido con la lista y el resumen por estado."""

    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    counts = status_counts(entries)
    template = _get_env().get_template("catalog.html")
    return template.render(
        title=title,
        entries=entries,
        generated_at=generated_at,
        statuses=list(FileStatus),
        counts=counts,
        total=len(entries),
    )


def export_catalog_html(*, entries: Sequence[CatalogEntry], output_path: Path, title: str = "Rocksmith File Manager") -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_catalog_html(entries=entries, title=title), encoding="utf-8")
    return output_path
