"""CLI principal (Typer).

Por qué Typer + Rich:
- Typer da parsing tipado (Enum/Path) sin boilerplate.
- Rich pinta tablas y mensajes con color sin ensuciar el Core.

Cada invocación es una sesión: se carga el catálogo, se aplica el comando y
el store autoguarda tras cada mutación.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from adapters.html_exporter import export_catalog_html
from adapters.json_exporter import export_catalog_json
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import (
    RichNotifier,
    build_counts_line,
    build_entries_table,
    build_pagination_footer,
    print_banner,
)
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import CatalogError
from core.domain.models import STATUS_FILTER_ALL, FileStatus
from core.services.catalog_service import CatalogService, open_catalog
from core.services.filtering import parse_status_filter


app = typer.Typer(no_args_is_help=True, help="Catalog of Rocksmith CDLC files and their test status.")
config_app = typer.Typer(no_args_is_help=True, help="Persistent user configuration.")
app.add_typer(config_app, name="config")
app.add_typer(doctor.app, name="doctor")


@dataclass
class CliState:
    settings: AppSettings
    console: Console

    def open(self) -> CatalogService:
        return open_catalog(self.settings, notify=RichNotifier(self.console))


def _state(ctx: typer.Context) -> CliState:
    return ctx.ensure_object(CliState)


def _fail(console: Console, message: str) -> None:
    console.print(Text(message, style="red"))
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    console = Console()
    try:
        settings = AppSettings() if log_level is None else AppSettings(log_level=log_level)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    configure_logging(settings.log_level)
    ctx.obj = CliState(settings=settings, console=console)

    if not no_banner and ctx.invoked_subcommand == "list":
        print_banner(console)


@app.command()
def add(ctx: typer.Context, name: str = typer.Argument(..., help="File name, e.g. song-artist.psarc")) -> None:
    """Add one file (status: untested)."""

    service = _state(ctx).open()
    if service.add_file(name) is None:
        raise typer.Exit(code=1)


@app.command(name="import")
def import_files(
    ctx: typer.Context,
    file: Path | None = typer.Option(
        None,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Text file with one name per line (or one comma-separated line). Defaults to stdin.",
    ),
) -> None:
    """Bulk import names (newline- or comma-delimited)."""

    text = file.read_text(encoding="utf-8") if file is not None else sys.stdin.read()
    summary = _state(ctx).open().import_text(text)
    if not summary.added and not summary.skipped:
        raise typer.Exit(code=1)


@app.command(name="list")
def list_files(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Case-insensitive substring."),
    status: str = typer.Option(STATUS_FILTER_ALL, "--status", help="all, untested, good, bad or wrongFormat."),
    page: int = typer.Option(1, "--page", "-p", min=1),
) -> None:
    """Show the (filtered) catalog one page at a time."""

    state = _state(ctx)
    try:
        status_filter = parse_status_filter(status)
    except ValueError as exc:
        raise typer.BadParameter(f"unknown status: {status}", param_hint="--status") from exc

    service = state.open()
    view = service.view(search, status_filter, page)
    if page != view.state.current_page and view.state.total_pages:
        state.console.print(f"[yellow]Page {page} does not exist; showing page {view.state.current_page}.[/yellow]")

    if view.items:
        state.console.print(build_entries_table(view.items))
    state.console.print(build_pagination_footer(view))
    state.console.print(build_counts_line(view))


@app.command()
def status(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="Entry id (see `list`)."),
    new_status: FileStatus = typer.Argument(..., metavar="STATUS", help="untested, good, bad or wrongFormat."),
) -> None:
    """Change the status of one entry."""

    state = _state(ctx)
    try:
        state.open().set_status(entry_id, new_status)
    except CatalogError as exc:
        _fail(state.console, str(exc))


@app.command()
def remove(ctx: typer.Context, entry_id: str = typer.Argument(..., help="Entry id (see `list`).")) -> None:
    """Delete one entry."""

    state = _state(ctx)
    try:
        state.open().remove(entry_id)
    except CatalogError as exc:
        _fail(state.console, str(exc))


@app.command()
def clear(ctx: typer.Context, yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation.")) -> None:
    """Delete every entry."""

    if not yes and not typer.confirm("Remove all files from the catalog?"):
        raise typer.Abort()
    _state(ctx).open().clear()


@app.command(name="export-json")
def export_json(ctx: typer.Context, output: Path = typer.Argument(..., dir_okay=False)) -> None:
    """Write the catalog as JSON (same schema as the stored data)."""

    state = _state(ctx)
    path = export_catalog_json(entries=state.open().store.list(), output_path=output)
    state.console.print(f"[green]Saved JSON to:[/green] {path}")


@app.command(name="export-html")
def export_html(ctx: typer.Context, output: Path = typer.Argument(..., dir_okay=False)) -> None:
    """Write a standalone HTML page with the catalog."""

    state = _state(ctx)
    path = export_catalog_html(entries=state.open().store.list(), output_path=output)
    state.console.print(f"[green]Saved HTML to:[/green] {path}")


@config_app.command(name="set")
def config_set(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Setting name, e.g. items_per_page."),
    value: str = typer.Argument(...),
) -> None:
    """Store a setting in the user config .env."""

    state = _state(ctx)
    name = key.strip().lower().replace("-", "_")
    if name not in AppSettings.model_fields:
        known = ", ".join(sorted(AppSettings.model_fields))
        raise typer.BadParameter(f"unknown setting '{key}' (known: {known})", param_hint="KEY")

    try:
        AppSettings(**{name: value})
    except ValidationError as exc:
        _fail(state.console, f"Invalid value for {name}: {exc.errors()[0]['msg']}")

    env_path = write_user_env_vars({f"ROCKSMITH_CATALOG_{name.upper()}": value})
    state.console.print(f"[green]Saved {name} to:[/green] {env_path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
