"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import CatalogEntry, FileStatus, NotificationLevel, format_timestamp
from core.services.catalog_service import CatalogPage


STATUS_STYLES: dict[FileStatus, str] = {
    FileStatus.GOOD: "green",
    FileStatus.BAD: "red",
    FileStatus.WRONG_FORMAT: "yellow",
    FileStatus.UNTESTED: "dim",
}

_LEVEL_STYLES: dict[NotificationLevel, str] = {
    NotificationLevel.SUCCESS: "green",
    NotificationLevel.ERROR: "red",
    NotificationLevel.INFO: "cyan",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Permite desactivar banner en modos no interactivos (pipelines).
    """

    title = Text("Rocksmith File Manager", style="bold cyan")
    subtitle = Text("Catálogo de CDLC • Estados • Búsqueda", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


class RichNotifier:
    """Notifier que pinta cada mensaje con el color de su severidad."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def __call__(self, message: str, level: NotificationLevel) -> None:
        style = _LEVEL_STYLES.get(level, "white")
        self._console.print(Text(message, style=style))


def status_text(status: FileStatus) -> Text:
    return Text(f"● {status.label()}", style=STATUS_STYLES[status])


def build_entries_table(entries: list[CatalogEntry], *, title: str = "Files") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("File", style="white")
    table.add_column("Status", no_wrap=True)
    table.add_column("Added", style="dim", no_wrap=True)
    table.add_column("Modified", style="dim", no_wrap=True)
    for entry in entries:
        table.add_row(
            entry.id,
            # Text evita que Rich interprete `[...]` en nombres de fichero como markup.
            Text(entry.file_name),
            status_text(entry.status),
            format_timestamp(entry.date_added),
            format_timestamp(entry.last_modified),
        )
    return table


def build_pagination_footer(page: CatalogPage) -> Text:
    """Controles de paginación: `« 1 2 [3] 4 5 »  Page 3 of 9 (180 matches)`."""

    state = page.state
    text = Text()
    if state.total_pages == 0:
        text.append("No matching files", style="dim")
        return text

    text.append("« " if state.current_page > 1 else "  ", style="cyan")
    for number in page.window:
        if number == state.current_page:
            text.append(f"[{number}]", style="bold cyan")
        else:
            text.append(str(number))
        text.append(" ")
    text.append("»" if state.current_page < state.total_pages else " ", style="cyan")
    text.append(
        f"  Page {state.current_page} of {state.total_pages} ({page.matched} matches)",
        style="dim",
    )
    return text


def build_counts_line(page: CatalogPage) -> Text:
    text = Text(f"Total: {page.total}", style="bold")
    for status, count in page.counts.items():
        text.append("  ")
        text.append(f"{status.label()}: {count}", style=STATUS_STYLES[status])
    return text
