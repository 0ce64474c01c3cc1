"""
Sequential fetch-and-install of every icon in a pack mapping.
"""

import logging
from pathlib import Path
from typing import Protocol

import aiofiles

from iconpack_cli.api.client import IconFetcher, build_icon_url
from iconpack_cli.exceptions import (
    FetchFailedError,
    MalformedIconSpecError,
    SettingsWriteError,
    WriteFailedError,
)
from iconpack_cli.models.config import DEFAULT_API_BASE, DEFAULT_FILL_COLOR
from iconpack_cli.models.pack import DownloadTask, IconMapping, materialize_tasks
from iconpack_cli.models.stats import ApplyOutcome, PipelineState
from iconpack_cli.storage.active_pack import ActivePackTracker
from iconpack_cli.utils.path import icon_path

log = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    """Shows per-icon progress and reports whether the user wants to go on."""

    def info(self, text: str, index: int, total: int) -> bool: ...

    def advance(self) -> None: ...

    def clear(self) -> None: ...


class NullProgress:
    """Progress reporter that shows nothing and never cancels."""

    def info(self, text: str, index: int, total: int) -> bool:
        return True

    def advance(self) -> None:
        pass

    def clear(self) -> None:
        pass


class DownloadPipeline:
    """
    Downloads the icons of a mapping one after another and writes them into
    the icons directory.

    Runs as a small state machine: RUNNING until the last task is done
    (COMPLETED) or the progress reporter reports a cancellation at the
    checkpoint before a fetch (CANCELLED). Single icon failures are counted
    and never stop the batch. Files written before a cancellation stay on
    disk.
    """

    def __init__(
        self,
        fetcher: IconFetcher,
        icons_dir: Path,
        tracker: ActivePackTracker,
        progress: ProgressReporter | None = None,
        api_base: str = DEFAULT_API_BASE,
        color: str = DEFAULT_FILL_COLOR,
    ):
        self.fetcher = fetcher
        self.icons_dir = icons_dir
        self.tracker = tracker
        self.progress = progress or NullProgress()
        self.api_base = api_base
        self.color = color

    async def apply(self, mapping: IconMapping, pack_path: str) -> ApplyOutcome:
        """
        Installs every icon of `mapping` and records `pack_path` as the active
        pack if at least one icon was installed.
        """
        tasks = materialize_tasks(mapping)
        outcome = ApplyOutcome(total=len(tasks))

        if not tasks:
            log.info("No icons to process.")
            outcome.state = PipelineState.COMPLETED
            return outcome

        try:
            for task in tasks:
                await self._run_task(task, outcome)
                if outcome.cancelled:
                    log.info(
                        f"[yellow]Download cancelled after {outcome.success_count} "
                        f"of {outcome.total} icons.[/yellow]"
                    )
                    return outcome
                self.progress.advance()
        finally:
            self.progress.clear()

        outcome.state = PipelineState.COMPLETED
        if outcome.success_count > 0:
            try:
                self.tracker.set(pack_path)
            except SettingsWriteError as e:
                log.debug(f"Active pack not recorded: {e}")
                outcome.settings_error = str(e)
        else:
            log.warning("[yellow]No icon could be installed, active pack unchanged.[/yellow]")
        return outcome

    async def _run_task(self, task: DownloadTask, outcome: ApplyOutcome) -> None:
        name = task.local_icon_name
        try:
            url = build_icon_url(task.remote_icon_spec, self.api_base, self.color)
        except MalformedIconSpecError as e:
            log.warning(f"[yellow]Skipping '{name}': {e}[/yellow]")
            outcome.record_failure(name)
            return

        text = f"Downloading icon {task.index} of {outcome.total}: {name}"
        if not self.progress.info(text, task.index, outcome.total):
            outcome.state = PipelineState.CANCELLED
            return

        log.debug(f"Downloading {name} from {url}")
        try:
            body = await self.fetcher.fetch(url)
        except (FetchFailedError, OSError) as e:
            log.warning(
                f"[yellow]Failed to download {name} -> {task.remote_icon_spec}: {e}"
                "[/yellow]"
            )
            outcome.record_failure(name)
            return

        try:
            await self._write_icon(name, body)
        except WriteFailedError as e:
            log.warning(f"[yellow]{e}[/yellow]")
            outcome.record_failure(name)
            return

        outcome.record_success()
        log.info(f"[green]✓[/green] {name}")

    async def _write_icon(self, name: str, body: bytes) -> None:
        """Writes the SVG verbatim, replacing any existing icon of that name."""
        try:
            destination = icon_path(self.icons_dir, name)
            async with aiofiles.open(destination, "wb") as f:
                await f.write(body)
        except (ValueError, OSError) as e:
            raise WriteFailedError(f"Failed to write file for {name}: {e}") from e
