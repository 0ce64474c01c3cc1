"""
Discovers the icon packs listed in the pack manifest (config.json).
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from iconpack_cli.exceptions import (
    ConfigInvalidError,
    ConfigMissingError,
    PackEntryInvalidError,
)
from iconpack_cli.models.config import DEFAULT_MANIFEST_NAME
from iconpack_cli.models.pack import PackDescriptor

log = logging.getLogger(__name__)


class ConfigCatalog:
    """
    Reads the manifest, a JSON array of {"display_name", "path"} objects, and
    keeps the entries whose mapping file exists under the packs root.

    Listing never raises: a missing or unparseable manifest yields no packs,
    and each bad entry is skipped on its own.
    """

    def __init__(self, packs_root: Path, manifest_name: str = DEFAULT_MANIFEST_NAME):
        self.packs_root = packs_root
        self.manifest_path = packs_root / manifest_name

    def resolve(self, pack_path: str) -> Path:
        """Returns the on-disk location of a pack's mapping file."""
        return self.packs_root / pack_path

    def load_manifest(self) -> list[Any]:
        """
        Raises:
            ConfigMissingError: If the manifest file does not exist.
            ConfigInvalidError: If it cannot be read, parsed, or is not an array.
        """
        if not self.manifest_path.is_file():
            raise ConfigMissingError(f"{self.manifest_path.name} not found")
        try:
            data = json.loads(self.manifest_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigInvalidError(
                f"Invalid {self.manifest_path.name} file: {e}"
            ) from e
        if not isinstance(data, list):
            raise ConfigInvalidError(
                f"Invalid {self.manifest_path.name} file: expected a JSON array, "
                f"got {type(data).__name__}"
            )
        return data

    def validate_entry(self, entry: Any) -> PackDescriptor:
        """
        Raises:
            PackEntryInvalidError: If a required field is missing or the mapping
            file does not exist.
        """
        if not isinstance(entry, dict):
            raise PackEntryInvalidError(f"Invalid pack configuration: {entry!r}")
        try:
            descriptor = PackDescriptor(
                display_name=entry.get("display_name"), path=entry.get("path")
            )
        except ValidationError as e:
            raise PackEntryInvalidError(
                f"Invalid pack configuration: {entry!r} "
                f"({e.error_count()} validation error(s))"
            ) from e

        pack_file = self.resolve(descriptor.path)
        if not pack_file.is_file():
            raise PackEntryInvalidError(f"Pack file not found: {pack_file}")
        return descriptor

    def list_packs(self) -> list[PackDescriptor]:
        """Returns the valid packs in manifest order. Duplicates are kept."""
        try:
            entries = self.load_manifest()
        except (ConfigMissingError, ConfigInvalidError) as e:
            log.warning(f"[yellow]{e}[/yellow]")
            return []

        packs = []
        for entry in entries:
            try:
                packs.append(self.validate_entry(entry))
            except PackEntryInvalidError as e:
                log.warning(f"[yellow]Skipping pack: {e}[/yellow]")
        log.debug(f"Found {len(packs)} of {len(entries)} packs in {self.manifest_path}")
        return packs
