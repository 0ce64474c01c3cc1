"""
A small file-backed key/value store for persisted plugin state.
"""

import configparser
import logging
from pathlib import Path

from iconpack_cli.exceptions import SettingsWriteError

log = logging.getLogger(__name__)


class SettingsStore:
    """
    Key/value settings persisted to an INI file.

    The file is read lazily on first access and written back on `flush()`.
    `set()` flushes immediately unless `autoflush` is disabled.
    """

    SECTION = "iconschanger"

    def __init__(self, settings_file_path: Path, autoflush: bool = True):
        self.settings_file_path = settings_file_path
        self.autoflush = autoflush
        self._parser = configparser.ConfigParser(interpolation=None)
        self._loaded = False
        self._dirty = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        if not self.settings_file_path.is_file():
            return
        try:
            self._parser.read(self.settings_file_path, encoding="utf-8")
        except (configparser.Error, OSError) as e:
            log.warning(
                f"[yellow]Could not read settings file '{self.settings_file_path}', "
                f"starting fresh:[/yellow] {e}"
            )
            self._parser = configparser.ConfigParser(interpolation=None)

    def get(self, key: str, default: str | None = None) -> str | None:
        self._ensure_loaded()
        return self._parser.get(self.SECTION, key, fallback=default)

    def set(self, key: str, value: str) -> None:
        self._ensure_loaded()
        if not self._parser.has_section(self.SECTION):
            self._parser.add_section(self.SECTION)
        self._parser.set(self.SECTION, key, value)
        self._dirty = True
        if self.autoflush:
            self.flush()

    def flush(self) -> None:
        """
        Writes pending changes to disk. A no-op when nothing changed.

        Raises:
            SettingsWriteError: If the file could not be written. Changes stay
            pending.
        """
        if not self._dirty:
            return
        try:
            self.settings_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file_path, "w", encoding="utf-8") as f:
                self._parser.write(f)
        except OSError as e:
            raise SettingsWriteError(
                f"Could not save settings to '{self.settings_file_path}': {e}"
            ) from e
        self._dirty = False
        log.debug(f"Settings saved to '{self.settings_file_path}'.")
