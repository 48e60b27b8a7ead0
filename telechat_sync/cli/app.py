"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from telechat_sync import __version__
from telechat_sync.agenda.source import AgendaSource
from telechat_sync.core.sync_coordinator import SyncCoordinator
from telechat_sync.documents.downloader import DocumentDownloader
from telechat_sync.exceptions import ConfigurationError, TelechatSyncError
from telechat_sync.models.agenda import Agenda
from telechat_sync.models.config import SyncConfig
from telechat_sync.models.stats import SyncStats
from telechat_sync.storage.config_manager import ConfigManager

from .formatters import (
    format_error_with_suggestions,
    print_agenda_table,
    print_outcomes,
    print_summary_panel,
    print_validation_table,
)

console = Console()
err_console = Console(stderr=True)

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=err_console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("telechat_sync")
log.setLevel("WARNING")

app = typer.Typer(
    name="telechat-sync",
    help=(
        "Syncs the documents on upcoming IESG telechats into date-named local"
        " directories. Use 'telechat-sync <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "telechat-sync"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_config(cli_options: dict) -> SyncConfig:
    """Loads the config, turning configuration problems into a usage-style exit."""
    try:
        return ConfigManager(CONFIG_FILE).load_config(
            {key: value for key, value in cli_options.items() if value is not None}
        )
    except ConfigurationError as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Show progress messages (-vv adds debug output).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """IESG Telechat Sync CLI"""
    if version:
        console.print(f"[bold]telechat-sync[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("telechat_sync").setLevel(log_level)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command(name="sync")
def sync_command(
    base_dir: str | None = typer.Option(
        None,
        "-d",
        "--base-dir",
        help="Base directory to put files in. Date based directories are made here.",
    ),
    agenda_url: str | None = typer.Option(
        None, "-a", "--agenda", help="Where the agenda lives."
    ),
    document_base_url: str | None = typer.Option(
        None, "--doc-url", help="Base URL the '<draft>.pdf' names are appended to."
    ),
    agenda_format: str | None = typer.Option(
        None, "-f", "--format", help="Agenda format: auto, html or json."
    ),
    workers: int | None = typer.Option(
        None, "-w", "--workers", help="Number of simultaneous downloads (default 8)."
    ),
    timeout: float | None = typer.Option(
        None, "-t", "--timeout", help="Seconds allowed per document (default 10)."
    ),
):
    """Download every document on the upcoming telechat agendas."""
    config = _load_config(
        {
            "base_dir": base_dir,
            "agenda_url": agenda_url,
            "document_base_url": document_base_url,
            "agenda_format": agenda_format,
            "max_workers": workers,
            "item_timeout": timeout,
        }
    )
    if not config.base_dir:
        err_console.print(
            format_error_with_suggestions(
                ConfigurationError("A base directory is required.")
            )
        )
        raise typer.Exit(code=1)

    async def _sync_async() -> tuple[list[str], SyncStats]:
        agenda = await AgendaSource(config.agenda_format).fetch(config.agenda_url)
        coordinator = SyncCoordinator(
            DocumentDownloader(config.document_base_url, config.max_workers),
            max_workers=config.max_workers,
            item_timeout=config.item_timeout,
        )
        outcomes = await coordinator.sync_all(config.base_path, agenda)
        return outcomes, coordinator.stats

    try:
        outcomes, stats = asyncio.run(_sync_async())
    except TelechatSyncError as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    print_outcomes(outcomes, console)
    print_summary_panel(stats)


@app.command(name="agenda")
def agenda_command(
    agenda_url: str | None = typer.Option(
        None, "-a", "--agenda", help="Where the agenda lives."
    ),
    agenda_format: str | None = typer.Option(
        None, "-f", "--format", help="Agenda format: auto, html or json."
    ),
):
    """Show the documents on the agenda without downloading them."""
    config = _load_config({"agenda_url": agenda_url, "agenda_format": agenda_format})

    async def _fetch_agenda() -> Agenda:
        return await AgendaSource(config.agenda_format).fetch(config.agenda_url)

    try:
        agenda = asyncio.run(_fetch_agenda())
    except TelechatSyncError as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    print_agenda_table(agenda)


@app.command()
def init(
    base_dir: str = typer.Option(
        ..., "-d", "--base-dir", help="Directory the telechat folders are created in."
    ),
    force: bool = typer.Option(
        False, "--force", help="Overwrite an existing config file without asking."
    ),
):
    """Write a config file with the given base directory and default settings."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    # The existing file is never read here, so a broken one can be replaced.
    try:
        config = SyncConfig(base_dir=base_dir)
    except ValidationError as e:
        error = ConfigurationError(f"Configuration validation failed:\n{e}")
        err_console.print(format_error_with_suggestions(error))
        raise typer.Exit(code=1) from e

    config_manager = ConfigManager(CONFIG_FILE)
    try:
        config_manager.save_new_config(config.model_dump(exclude={"config_path"}))
    except ConfigurationError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"\n[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")
    console.print("Ready to sync! Try: [cyan]telechat-sync sync[/cyan]")


@app.command()
def validate():
    """Validate the current configuration."""
    config = _load_config({})
    print_validation_table(config)
