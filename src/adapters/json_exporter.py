"""Exportación JSON del catálogo.

Por qué JSON:
- Interoperabilidad con otras herramientas (hojas de cálculo, scripts).
- Usa el mismo esquema que el slot persistido, así el fichero exportado se
  puede volver a cargar.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from core.domain.models import CatalogEntry


def export_catalog_json(*, entries: Sequence[CatalogEntry], output_path: Path) -> Path:
    """Exporta las entradas a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [entry.to_record() for entry in entries]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
