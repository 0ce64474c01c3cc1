"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from iconpack_cli import __version__
from iconpack_cli.api.client import IconifyClient
from iconpack_cli.core.icon_changer import IconChanger
from iconpack_cli.exceptions import (
    ConfigInvalidError,
    ConfigMissingError,
    IconPackError,
)
from iconpack_cli.models.config import AppConfig
from iconpack_cli.models.stats import ApplyStatus, RestoreResult
from iconpack_cli.storage.active_pack import ORIGINAL
from iconpack_cli.storage.config_manager import ConfigManager
from iconpack_cli.utils.path import list_icon_files

from .formatters import (
    print_apply_summary,
    print_config,
    print_menu,
    print_restore_result,
    print_status_table,
)
from .progress_manager import ProgressManager

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("iconpack_cli")

app = typer.Typer(
    name="iconpack-cli",
    help=(
        "Swap an application's icon set for icons from the Iconify API, and restore"
        " the original set at any time. Use 'ipc <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if override := os.getenv("ICONPACK_CLI_CONFIG_DIR"):
        return Path(override).expanduser()
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "iconpack-cli"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_config(cli_options: dict[str, Any] | None = None) -> AppConfig:
    try:
        return ConfigManager(CONFIG_FILE).load_config(cli_options)
    except IconPackError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e


def _overrides(icons_dir: Path | None, packs_root: Path | None) -> dict[str, Any]:
    return {
        key: str(value)
        for key, value in {"icons_dir": icons_dir, "packs_root": packs_root}.items()
        if value is not None
    }


def _run_apply(config: AppConfig, pack: str) -> None:
    """Applies a pack with a live progress display and prints the outcome."""

    async def _apply_async():
        async with ProgressManager(console) as progress:
            changer = IconChanger(config, progress=progress)
            pack_path = changer.find_pack(pack)
            return pack_path, await changer.apply_pack(pack_path)

    try:
        pack_path, outcome = asyncio.run(_apply_async())
    except IconPackError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e

    print_apply_summary(outcome, pack_path, console)
    if outcome.status is ApplyStatus.FAILED:
        raise typer.Exit(code=1)


def _run_restore(config: AppConfig) -> None:
    async def _restore_async():
        return await IconChanger(config).restore_original()

    try:
        result = asyncio.run(_restore_async())
    except IconPackError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e

    print_restore_result(result, console)
    if result is RestoreResult.NO_BACKUP_FOUND:
        raise typer.Exit(code=1)


IconsDirOption = typer.Option(
    None, "--icons-dir", help="Override the icons directory from the config file."
)
PacksRootOption = typer.Option(
    None, "--packs-root", help="Override the directory holding config.json and packs."
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """Icon Pack Changer CLI"""
    if version:
        console.print(f"[bold]iconpack-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("iconpack_cli").setLevel(log_level)

    if show_config:
        config = _load_config()
        print_config(CONFIG_FILE, config.model_dump(exclude={"config_path"}))
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    icons_dir: Path = typer.Argument(  # noqa: B008
        ..., help="Directory holding the application's SVG icons."
    ),
    packs_root: Path | None = typer.Option(  # noqa: B008
        None,
        "--packs-root",
        help="Directory holding config.json and the pack files.",
    ),
    backup_dir: Path | None = typer.Option(  # noqa: B008
        None, "--backup-dir", help="Where to keep the backup of the original icons."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration without asking."
    ),
):
    """Create the configuration file."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {"icons_dir": str(icons_dir.expanduser().resolve())}
    if packs_root:
        settings["packs_root"] = str(packs_root.expanduser().resolve())
    if backup_dir:
        settings["backup_dir"] = str(backup_dir.expanduser().resolve())

    try:
        config_manager = ConfigManager(CONFIG_FILE)
        config_manager.save_new_config(settings)
        config = config_manager.load_config()
    except IconPackError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if not config.icons_path.is_dir():
        console.print(
            f"[yellow]⚠️  Icons directory '{config.icons_path}' does not exist yet."
            "[/yellow]"
        )
    console.print(f"\n[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")
    console.print(
        f"Put your [cyan]{config.manifest_name}[/cyan] and pack files in "
        f"[cyan]{config.packs_path}[/cyan], then try: [cyan]iconpack-cli list[/cyan]"
    )


@app.command(name="list")
def list_command(
    icons_dir: Path | None = IconsDirOption,
    packs_root: Path | None = PacksRootOption,
):
    """Show the icon pack menu. The active entry is marked with ✓."""
    config = _load_config(_overrides(icons_dir, packs_root))
    print_menu(IconChanger(config).menu_items(), console)


@app.command()
def apply(
    pack: str = typer.Argument(..., help="Pack path from config.json, or its display name."),
    icons_dir: Path | None = IconsDirOption,
    packs_root: Path | None = PacksRootOption,
):
    """Download a pack's icons and install them. Ctrl-C stops after the current icon."""
    config = _load_config(_overrides(icons_dir, packs_root))
    _run_apply(config, pack)


@app.command()
def restore(
    icons_dir: Path | None = IconsDirOption,
    packs_root: Path | None = PacksRootOption,
):
    """Restore the original icons from the backup."""
    config = _load_config(_overrides(icons_dir, packs_root))
    _run_restore(config)


@app.command()
def choose(
    icons_dir: Path | None = IconsDirOption,
    packs_root: Path | None = PacksRootOption,
):
    """Pick an entry from the menu interactively."""
    config = _load_config(_overrides(icons_dir, packs_root))
    selectable = print_menu(IconChanger(config).menu_items(), console)

    choice = typer.prompt("Select an entry", type=int)
    if not 1 <= choice <= len(selectable):
        console.print(f"[red]✗ Please choose a number between 1 and {len(selectable)}.[/red]")
        raise typer.Exit(code=1)

    selected = selectable[choice - 1]
    if selected.identifier == ORIGINAL:
        _run_restore(config)
    else:
        _run_apply(config, selected.identifier)


@app.command()
def status(
    icons_dir: Path | None = IconsDirOption,
    packs_root: Path | None = PacksRootOption,
):
    """Show the active pack and the backup state."""
    config = _load_config(_overrides(icons_dir, packs_root))
    changer = IconChanger(config)
    print_status_table(
        {
            "active": changer.tracker.get(),
            "has_backup": changer.backup.has_backup,
            "backup_count": len(changer.backup.backed_up_icons()),
            "pack_count": len(changer.list_packs()),
            "icons_dir": config.icons_path,
            "packs_root": config.packs_path,
            "backup_dir": config.backup_path,
        },
        console,
    )


@app.command()
def diagnose():
    """Diagnose common configuration and connectivity issues."""
    console.print("\n[bold cyan]Running diagnostics...[/bold cyan]\n")
    issues_found = False
    if CONFIG_FILE.is_file():
        console.print(f"[green]✓[/] Config file exists at: [dim]{CONFIG_FILE}[/dim]")
    else:
        console.print(
            "[red]✗ Config file not found.[/] Run [cyan]iconpack-cli init[/cyan]."
        )
        raise typer.Exit(code=1)

    config = _load_config()
    console.print("[green]✓[/] Configuration file is valid and can be loaded.")

    icon_count = len(list_icon_files(config.icons_path))
    if config.icons_path.is_dir():
        console.print(f"[green]✓[/] Icons directory holds {icon_count} SVG icons.")
    else:
        console.print(f"[red]✗ Icons directory '{config.icons_path}' not found.[/red]")
        issues_found = True

    changer = IconChanger(config)
    try:
        entries = changer.catalog.load_manifest()
        packs = changer.list_packs()
        console.print(
            f"[green]✓[/] {config.manifest_name}: {len(packs)} of {len(entries)} "
            "packs are usable."
        )
        if len(packs) < len(entries):
            issues_found = True
    except (ConfigMissingError, ConfigInvalidError) as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        issues_found = True

    if changer.backup.has_backup:
        console.print("[green]✓[/] A backup of the original icons exists.")
    else:
        console.print("[dim]○ No backup yet; one is made before the first apply.[/dim]")

    console.print("\n[dim]Testing connectivity to the Iconify API...[/dim]")

    async def test_connection():
        async with IconifyClient(timeout=10, connect_timeout=10) as client:
            return await client.check_connectivity(config.api_base)

    if asyncio.run(test_connection()):
        console.print("[green]✓[/] Successfully connected to the Iconify API.")
    else:
        console.print("[red]✗ Could not download a test icon from the Iconify API.[/red]")
        issues_found = True

    console.print()
    if not issues_found:
        console.print(
            "[bold green]✓ All checks passed! Your setup looks good.[/bold green]\n"
        )
    else:
        console.print(
            "[bold red]✗ Some issues were found. "
            "Please review the messages above.[/bold red]\n"
        )
        raise typer.Exit(code=1)
