"""
The main orchestrator for listing, applying and restoring icon packs.
"""

import asyncio
import logging

from iconpack_cli.api.client import IconFetcher, IconifyClient
from iconpack_cli.exceptions import MappingEmptyError, OperationInProgressError
from iconpack_cli.models.config import AppConfig
from iconpack_cli.models.pack import PackDescriptor
from iconpack_cli.models.stats import ApplyOutcome, PipelineState, RestoreResult
from iconpack_cli.storage.active_pack import ActivePackTracker
from iconpack_cli.storage.backup import BackupManager
from iconpack_cli.storage.settings import SettingsStore
from iconpack_cli.utils.path import create_dir

from .catalog import ConfigCatalog
from .mapping import load_mapping
from .menu import MenuItem, build_menu_items
from .pipeline import DownloadPipeline, ProgressReporter

log = logging.getLogger(__name__)


class IconChanger:
    """Orchestrates the whole apply/restore workflow."""

    def __init__(
        self,
        config: AppConfig,
        fetcher: IconFetcher | None = None,
        progress: ProgressReporter | None = None,
        store: SettingsStore | None = None,
    ):
        self.config = config
        self.fetcher = fetcher
        self.progress = progress
        self.catalog = ConfigCatalog(config.packs_path, config.manifest_name)
        self.backup = BackupManager(config.icons_path, config.backup_path)
        self.tracker = ActivePackTracker(store or SettingsStore(config.settings_path))
        self._lock = asyncio.Lock()
        self._bootstrap()

    def _bootstrap(self) -> None:
        """Creates the backup and pack directories if they are missing."""
        for directory in (self.config.backup_path, self.config.packs_path):
            try:
                create_dir(directory)
            except OSError as e:
                log.warning(f"[yellow]Could not create {directory}:[/yellow] {e}")

    def list_packs(self) -> list[PackDescriptor]:
        return self.catalog.list_packs()

    def menu_items(self) -> list[MenuItem]:
        return build_menu_items(self.list_packs(), self.tracker.get())

    def find_pack(self, name_or_path: str) -> str:
        """
        Resolves a pack by manifest path or display name (case-insensitive).
        Unknown values are returned unchanged and treated as a path.
        """
        packs = self.list_packs()
        for pack in packs:
            if pack.path == name_or_path:
                return pack.path
        wanted = name_or_path.casefold()
        for pack in packs:
            if pack.display_name.casefold() == wanted:
                return pack.path
        return name_or_path

    def _check_idle(self) -> None:
        if self._lock.locked():
            raise OperationInProgressError(
                "Another icon pack operation is still running."
            )

    async def apply_pack(self, pack_path: str) -> ApplyOutcome:
        """
        Loads a pack's mapping, snapshots the original icons once, and
        downloads every mapped icon.

        Raises:
            MappingFileUnreadableError, MappingInvalidError: Before anything is
            modified.
            BackupFailedError: If the original icons could not be saved.
            OperationInProgressError: If another apply or restore is running.
        """
        self._check_idle()
        async with self._lock:
            try:
                mapping = load_mapping(self.catalog.resolve(pack_path))
            except MappingEmptyError as e:
                log.info(f"{e} Nothing to do.")
                return ApplyOutcome(state=PipelineState.COMPLETED)

            log.info(f"Downloading and applying icon pack [cyan]{pack_path}[/cyan]...")
            self.backup.ensure_backup()

            client = None
            fetcher = self.fetcher
            if fetcher is None:
                client = IconifyClient(
                    timeout=self.config.timeout,
                    connect_timeout=self.config.connect_timeout,
                    max_attempts=self.config.max_attempts,
                    failure_threshold=self.config.failure_threshold,
                )
                fetcher = client

            pipeline = DownloadPipeline(
                fetcher,
                self.config.icons_path,
                self.tracker,
                progress=self.progress,
                api_base=self.config.api_base,
                color=self.config.fill_color,
            )
            try:
                return await pipeline.apply(mapping, pack_path)
            finally:
                if client:
                    await client.close()

    async def restore_original(self) -> RestoreResult:
        """Copies the backed-up original icons back into place."""
        self._check_idle()
        async with self._lock:
            return self.backup.restore(self.tracker)
