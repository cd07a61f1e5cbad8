"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.persistence import deserialize_entries
from adapters.storage_backends import FileStorage
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import PersistenceError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")


def _console(ctx: typer.Context) -> Console:
    state = ctx.find_root().obj
    return getattr(state, "console", None) or Console()


def _settings(ctx: typer.Context) -> AppSettings:
    """Settings resolved by the root callback (keeps global overrides)."""

    state = ctx.find_root().obj
    settings = getattr(state, "settings", None)
    return settings if isinstance(settings, AppSettings) else AppSettings()


def _check_writable(directory: Path) -> tuple[bool, str]:
    probe_key = "_doctor_probe"
    storage = FileStorage(directory)
    try:
        storage.set_item(probe_key, "{}")
        storage.remove_item(probe_key)
        return True, str(directory)
    except PersistenceError as exc:
        return False, str(exc)


def _check_stored_data(settings: AppSettings) -> tuple[str, str]:
    """Parse the stored payload the same way a session load would."""

    storage = FileStorage(settings.resolved_data_dir())
    try:
        text = storage.get_item(settings.storage_key)
    except PersistenceError as exc:
        return "FAIL", str(exc)
    if not text:
        return "EMPTY", "No saved catalog yet"
    size = len(text.encode("utf-8"))
    try:
        entries = deserialize_entries(text)
    except PersistenceError as exc:
        return "FAIL", f"{exc} -> sessions will start with an empty list"
    usage = 100 * size / settings.storage_quota_bytes
    return "OK", f"{len(entries)} entries, {size} bytes ({usage:.1f}% of quota)"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    console = _console(ctx)
    settings = _settings(ctx)

    table = Table(title="Rocksmith Catalog Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Items per page", "OK", str(settings.items_per_page))
    table.add_row("Storage key", "OK", settings.storage_key)
    table.add_row("Log level", "OK", settings.log_level)

    # Storage
    ok_dir, detail_dir = _check_writable(settings.resolved_data_dir())
    table.add_row("Data directory", "OK" if ok_dir else "FAIL", detail_dir)

    data_status, data_detail = _check_stored_data(settings)
    table.add_row("Stored catalog", data_status, data_detail)

    console.print(table)

    if not ok_dir:
        console.print(
            "\n[yellow]Note:[/yellow] Set ROCKSMITH_CATALOG_DATA_DIR (or run `doctor setup`) to a writable folder."
        )


@app.command()
def setup(ctx: typer.Context) -> None:
    """Interactive setup (stores config in the user config .env).

    No manual .env editing needed.
    """

    console = _console(ctx)
    current = _settings(ctx)

    data_dir = typer.prompt(
        "Data directory",
        default=str(current.resolved_data_dir()),
        show_default=True,
    ).strip()
    items_per_page = typer.prompt("Items per page", default=current.items_per_page, type=int)

    if not data_dir:
        raise typer.BadParameter("data directory is required")
    if items_per_page < 1:
        raise typer.BadParameter("items per page must be >= 1")

    env_path = write_user_env_vars(
        {
            "ROCKSMITH_CATALOG_DATA_DIR": data_dir,
            "ROCKSMITH_CATALOG_ITEMS_PER_PAGE": str(items_per_page),
        }
    )

    console.print(f"[green]Saved config to:[/green] {env_path}")
