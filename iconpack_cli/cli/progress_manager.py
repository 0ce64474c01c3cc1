"""
Rich progress display for icon downloads with cooperative cancellation.

Ctrl-C while the display is active does not kill the run: it asks the
download pipeline to stop at the next icon, after the current one finishes.
"""

import asyncio
import logging
import signal

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

log = logging.getLogger("iconpack_cli")


class ProgressManager:
    """Shows one progress bar for the running pack and tracks cancel requests."""

    def __init__(self, console: Console, transient: bool = True):
        self.console = console
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}", justify="left"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            "•",
            TimeElapsedColumn(),
            console=console,
            transient=transient,
        )
        self._task_id: TaskID | None = None
        self._cancel_requested = False
        self._signal_installed = False

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested

    def request_cancel(self) -> None:
        if not self._cancel_requested:
            self.console.print(
                "[yellow]⚠️  Cancelling after the current icon...[/yellow]"
            )
        self._cancel_requested = True

    def info(self, text: str, index: int, total: int) -> bool:
        """Shows `text` for icon `index` of `total`. Returns False once cancelled."""
        if self._cancel_requested:
            return False
        if self._task_id is None:
            self._task_id = self.progress.add_task(
                text, total=total, completed=index - 1
            )
        self.progress.update(self._task_id, description=text, total=total)
        return True

    def advance(self) -> None:
        """Marks one more icon as done, whether it succeeded or failed."""
        if self._task_id is not None:
            self.progress.advance(self._task_id)

    def clear(self) -> None:
        if self._task_id is None:
            return
        self.progress.remove_task(self._task_id)
        self._task_id = None

    def _install_signal_handler(self) -> None:
        try:
            asyncio.get_running_loop().add_signal_handler(
                signal.SIGINT, self.request_cancel
            )
            self._signal_installed = True
        except (NotImplementedError, RuntimeError):
            # Windows: Ctrl-C stays a KeyboardInterrupt
            log.debug("Cooperative Ctrl-C cancellation is not available here.")

    def _remove_signal_handler(self) -> None:
        if self._signal_installed:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGINT)
            self._signal_installed = False

    async def __aenter__(self):
        self._install_signal_handler()
        self.progress.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self._remove_signal_handler()
        self.progress.stop()
