"""
One-time snapshot of the original icon set, and restoring from it.
"""

import logging
import shutil
from pathlib import Path

from iconpack_cli.exceptions import BackupFailedError, WriteFailedError
from iconpack_cli.models.stats import RestoreResult
from iconpack_cli.utils.path import create_dir, list_icon_files

from .active_pack import ORIGINAL, ActivePackTracker

log = logging.getLogger(__name__)


class BackupManager:
    """
    Keeps a permanent copy of the first icon set ever seen in the icons directory.

    The backup is complete once the marker file exists. The marker is written
    after the last icon has been copied, so an interrupted backup is redone on
    the next attempt. Once written, the backup is never overwritten.
    """

    MARKER_NAME = ".backup_done"

    def __init__(self, icons_dir: Path, backup_dir: Path):
        self.icons_dir = icons_dir
        self.backup_dir = backup_dir

    @property
    def marker_path(self) -> Path:
        return self.backup_dir / self.MARKER_NAME

    @property
    def has_backup(self) -> bool:
        return self.marker_path.is_file()

    def backed_up_icons(self) -> list[Path]:
        if not self.has_backup:
            return []
        return list_icon_files(self.backup_dir)

    def ensure_backup(self) -> bool:
        """
        Snapshots the icons directory unless a snapshot already exists.

        Returns:
            True if icons were copied by this call, False if the backup already
            existed or there was nothing to back up.

        Raises:
            BackupFailedError: If an icon could not be copied. No marker is written.
        """
        if self.has_backup:
            log.debug("Backup already exists, leaving it untouched.")
            return False

        if not self.icons_dir.is_dir():
            log.warning(
                f"[yellow]Icons directory '{self.icons_dir}' does not exist, "
                "nothing to back up.[/yellow]"
            )
            return False

        copied = 0
        try:
            create_dir(self.backup_dir)
            for icon_file in list_icon_files(self.icons_dir):
                shutil.copyfile(icon_file, self.backup_dir / icon_file.name)
                copied += 1
            self.marker_path.write_text("backup completed", encoding="utf-8")
        except OSError as e:
            raise BackupFailedError(
                f"Could not back up original icons to '{self.backup_dir}': {e}"
            ) from e

        log.info(f"Backed up {copied} original icons to [dim]{self.backup_dir}[/dim]")
        return True

    def restore(self, tracker: ActivePackTracker) -> RestoreResult:
        """
        Copies the backed-up icons over the icons directory and marks the
        original set as active. The backup itself is left in place.

        Raises:
            WriteFailedError: If an icon could not be copied back.
            SettingsWriteError: If the active pack could not be reset.
        """
        if not self.has_backup:
            log.warning("[yellow]No backup found, nothing to restore.[/yellow]")
            return RestoreResult.NO_BACKUP_FOUND

        restored = 0
        try:
            create_dir(self.icons_dir)
            for icon_file in list_icon_files(self.backup_dir):
                shutil.copyfile(icon_file, self.icons_dir / icon_file.name)
                restored += 1
        except OSError as e:
            raise WriteFailedError(
                f"Could not restore original icons to '{self.icons_dir}': {e}"
            ) from e

        tracker.set(ORIGINAL)
        log.info(f"Restored {restored} original icons.")
        return RestoreResult.OK
