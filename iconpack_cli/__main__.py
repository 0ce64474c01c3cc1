"""
Console entry point for iconpack-cli.

Typer handles its own exits; anything that escapes the commands is reported
here as a short panel instead of a traceback.
"""

import logging
import os
import sys

from rich.console import Console

from iconpack_cli.cli.app import app
from iconpack_cli.cli.formatters import format_error_with_suggestions
from iconpack_cli.exceptions import IconPackError

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _use_utf8_streams() -> None:
    """Menu check marks and status symbols need UTF-8 on Windows consoles."""
    if os.name != "nt":
        return
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass


def main() -> None:
    _use_utf8_streams()
    console = Console(stderr=True)

    try:
        app()
    except KeyboardInterrupt:
        console.print(
            "\n[yellow]⚠️  Interrupted. Icons already replaced stay in place; "
            "run [cyan]iconpack-cli restore[/cyan] to go back.[/yellow]"
        )
        sys.exit(EXIT_INTERRUPTED)
    except IconPackError as e:
        console.print(f"\n{format_error_with_suggestions(e)}")
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        console.print(f"\n{format_error_with_suggestions(e, {'type': 'Unexpected'})}")
        logging.getLogger("iconpack_cli").debug("Full traceback:", exc_info=True)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
