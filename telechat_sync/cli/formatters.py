"""
Functions for formatting and displaying data in the console using Rich.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from telechat_sync.models.agenda import Agenda
from telechat_sync.models.config import SyncConfig
from telechat_sync.models.stats import SyncStats
from telechat_sync.utils.formatting import format_duration, format_size, pluralize


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Pass an existing directory with --base-dir, or set base_dir in the config.",
            "• Run `telechat-sync init --base-dir <DIR>` to write a config file.",
        ],
        "AgendaFetchError": [
            "• Check your internet connection.",
            "• The datatracker might be temporarily unavailable.",
            "• Verify the --agenda URL.",
        ],
        "AgendaDecodeError": [
            "• The agenda format may have changed.",
            "• Try forcing the parser with --format html or --format json.",
        ],
        "DirectoryCreationError": [
            "• Check that the base directory is writable.",
            "• Remove any file that has the same name as a telechat date.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_outcomes(outcomes: list[str], console: Console | None = None) -> None:
    """Prints each non-empty outcome line verbatim."""
    console = console or Console()
    for outcome in outcomes:
        if outcome:
            console.print(outcome, markup=False, highlight=False, soft_wrap=True)


def print_agenda_table(agenda: Agenda) -> None:
    """Displays the agenda grouped by telechat date."""
    console = Console()
    if not agenda:
        console.print("[yellow]The agenda lists no documents.[/yellow]")
        return

    table = Table(title="IESG Telechat Agenda", box=box.SIMPLE_HEAVY)
    table.add_column("Date", style="bold cyan")
    table.add_column("Document", style="white")
    for date_key in agenda.dates:
        for index, identifier in enumerate(agenda.documents(date_key)):
            table.add_row(date_key if index == 0 else "", identifier)
    console.print(table)
    console.print(
        f"[dim]{pluralize(agenda.document_count, 'document')} on "
        f"{pluralize(len(agenda), 'date')}.[/dim]"
    )


def print_validation_table(config: SyncConfig) -> None:
    """Displays a summary of the current settings."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Base Directory:", config.base_dir or "[yellow]not set[/yellow]")
    table.add_row("Agenda URL:", f"[dim]{config.agenda_url}[/dim]")
    table.add_row("Agenda Format:", config.agenda_format)
    table.add_row("Document URL:", f"[dim]{config.document_base_url}[/dim]")
    table.add_row("Max Workers:", str(config.max_workers))
    table.add_row("Per-Document Timeout:", f"{config.item_timeout:g}s")

    console.print(
        Panel(
            table,
            title="[bold green]✓ Validated Settings[/bold green]",
            border_style="green",
        )
    )


def print_summary_panel(stats: SyncStats) -> None:
    """Displays the final summary of the sync session."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row(
        "✓ Downloaded:", f"[bold green]{stats.documents_downloaded}[/bold green]"
    )
    if stats.documents_existed > 0:
        stats_table.add_row(
            "○ Already Present:", f"[yellow]{stats.documents_existed}[/yellow]"
        )
    if stats.documents_failed > 0:
        stats_table.add_row(
            "✗ Failed:", f"[bold red]{stats.documents_failed}[/bold red]"
        )
    if stats.documents_timed_out > 0:
        stats_table.add_row(
            "⏱ Timed Out:", f"[bold red]{stats.documents_timed_out}[/bold red]"
        )

    stats_table.add_row("", "")
    stats_table.add_row("Telechat Dates:", str(len(stats.dates_processed)))
    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
    )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(stats.elapsed)}[/blue]")

    problems = stats.documents_failed + stats.documents_timed_out
    if problems:
        title = "⚠ [bold]Sync Finished With Errors[/bold]"
        border_color = "yellow"
    else:
        title = "📄 [bold]Sync Complete![/bold]"
        border_color = "green"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
