"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from iconpack_cli.core.menu import MenuItem
from iconpack_cli.models.stats import ApplyOutcome, ApplyStatus, RestoreResult

RESTART_HINT = "Please restart the application to see the new icons."


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Run `iconpack-cli init <ICONS_DIR>` to create a configuration.",
            "• Check the values with `iconpack-cli --show-config`.",
        ],
        "MappingFileUnreadableError": [
            "• Run `iconpack-cli list` to see the available packs.",
            "• Pack paths are relative to the packs root directory.",
        ],
        "MappingInvalidError": [
            "• The pack file must be a JSON object: {\"home\": \"mdi-home\", ...}.",
            "• Validate the file with a JSON linter.",
        ],
        "BackupFailedError": [
            "• Check free disk space and permissions of the backup directory.",
            "• No icons were changed.",
        ],
        "OperationInProgressError": [
            "• Wait for the running operation to finish.",
        ],
        "SettingsWriteError": [
            "• Check permissions of the configuration directory.",
            "• Run `iconpack-cli diagnose` to see the configured paths.",
        ],
        "ClientResponseError": [
            "• A network connection issue occurred.",
            "• The Iconify API might be temporarily unavailable.",
            "• Please try again in a few minutes.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration file contents."""
    console = Console()
    content = "\n".join(f"{key} = {value}" for key, value in sorted(config_data.items()))
    console.print(
        Panel(
            content,
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_menu(items: list[MenuItem], console: Console | None = None) -> list[MenuItem]:
    """
    Prints the pack menu with numbers for the selectable rows.

    Returns:
        The selectable items, in the order they were numbered.
    """
    console = console or Console()
    table = Table(title="Icon Pack Changer", box=box.ROUNDED, show_header=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Pack")
    table.add_column("Path", style="dim")

    selectable = []
    for item in items:
        if not item.enabled:
            table.add_row("", Text(item.label, style="dim italic"), "")
            continue
        selectable.append(item)
        label = Text(item.text, style="bold green" if item.active else "")
        table.add_row(str(len(selectable)), label, item.identifier or "")

    console.print(table)
    return selectable


def print_apply_summary(
    outcome: ApplyOutcome, pack_name: str, console: Console | None = None
):
    """Displays the final state of an apply."""
    console = console or Console()
    status = outcome.status

    if status is ApplyStatus.NOTHING_TO_DO:
        console.print("[yellow]No icons to process.[/yellow]")
        return
    if status is ApplyStatus.CANCELLED:
        console.print(
            f"[yellow]⚠️  Download cancelled. {outcome.success_count} icons were "
            "already replaced; the active pack was not changed.[/yellow]"
        )
        return

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right")
    stats_table.add_column(style="white", justify="left")
    stats_table.add_row("Pack:", escape(pack_name))
    stats_table.add_row("✓ Downloaded:", f"[bold green]{outcome.success_count}[/bold green]")
    if outcome.failed_count:
        stats_table.add_row("✗ Failed:", f"[bold red]{outcome.failed_count}[/bold red]")
        shown = ", ".join(outcome.failed_icons[:10])
        if len(outcome.failed_icons) > 10:
            shown += ", …"
        stats_table.add_row("", f"[dim]{escape(shown)}[/dim]")

    if status is ApplyStatus.SUCCESS:
        headline = f"✓ Successfully downloaded {outcome.success_count} icons!"
        border_color = "green"
    elif status is ApplyStatus.PARTIAL:
        headline = (
            f"⚠ Downloaded {outcome.success_count} icons, "
            f"{outcome.failed_count} failed."
        )
        border_color = "yellow"
    else:
        headline = "✗ No icons could be downloaded."
        border_color = "red"

    console.print()
    console.print(
        Panel(
            stats_table,
            title="[bold]Icon Pack[/bold]",
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print(f"[bold {border_color}]{headline}[/bold {border_color}]")
    if outcome.settings_error:
        console.print(
            f"[red]✗ The active pack could not be saved: "
            f"{escape(outcome.settings_error)}[/red]"
        )
    if outcome.success_count:
        console.print(f"[dim]{RESTART_HINT}[/dim]")


def print_restore_result(result: RestoreResult, console: Console | None = None):
    console = console or Console()
    if result is RestoreResult.NO_BACKUP_FOUND:
        console.print("[yellow]No backup found.[/yellow]")
    else:
        console.print("[green]✓ Original icons restored![/green]")
        console.print(f"[dim]{RESTART_HINT}[/dim]")


def print_status_table(status: dict[str, Any], console: Console | None = None):
    """Displays the active pack and the state of the managed directories."""
    console = console or Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Active Pack:", f"[green]{status['active']}[/green]")
    table.add_row(
        "Backup:",
        f"✓ {status['backup_count']} icons" if status["has_backup"] else "✗ Not created yet",
    )
    table.add_row("Packs Available:", str(status["pack_count"]))
    table.add_row("Icons Dir:", f"[dim]{status['icons_dir']}[/dim]")
    table.add_row("Packs Root:", f"[dim]{status['packs_root']}[/dim]")
    table.add_row("Backup Dir:", f"[dim]{status['backup_dir']}[/dim]")

    console.print(Panel(table, title="[bold]Icon Pack Status[/bold]", border_style="cyan"))
