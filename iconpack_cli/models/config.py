"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_API_BASE = "https://api.iconify.design"
DEFAULT_FILL_COLOR = "#000000"
DEFAULT_MANIFEST_NAME = "config.json"

# Locations derived from the config directory when left empty in the INI file
DEFAULT_LOCATIONS = {
    "packs_root": "iconpacks",
    "backup_dir": "iconschanger_backup",
    "settings_file": "iconschanger.ini",
}

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class AppConfig(BaseModel):
    """A validated configuration model for the application."""

    # Locations
    icons_dir: str
    packs_root: str = ""
    manifest_name: str = DEFAULT_MANIFEST_NAME
    backup_dir: str = ""
    settings_file: str = ""

    # Remote API
    api_base: str = DEFAULT_API_BASE
    fill_color: str = DEFAULT_FILL_COLOR
    timeout: int = 300
    connect_timeout: int = 30
    max_attempts: int = 1
    failure_threshold: int = 5

    # Internal fields not loaded from INI file
    config_path: str = Field(..., repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @model_validator(mode="before")
    @classmethod
    def fill_default_locations(cls, data: Any) -> Any:
        """Places unset state directories next to the configuration file."""
        if isinstance(data, dict):
            base = Path(data.get("config_path") or ".")
            for key, name in DEFAULT_LOCATIONS.items():
                if not data.get(key):
                    data[key] = str(base / name)
        return data

    @field_validator("icons_dir")
    @classmethod
    def validate_icons_dir(cls, v: str) -> str:
        if not v:
            raise ValueError("Icons directory cannot be empty.")
        return v

    @field_validator("manifest_name")
    @classmethod
    def validate_manifest_name(cls, v: str) -> str:
        """The manifest must be a plain file name inside the packs root."""
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError("Manifest name must be a plain file name, e.g. config.json.")
        return v

    @field_validator("api_base")
    @classmethod
    def validate_api_base(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base must be an http(s) URL.")
        return v.rstrip("/")

    @field_validator("fill_color")
    @classmethod
    def validate_fill_color(cls, v: str) -> str:
        if not _HEX_COLOR.match(v):
            raise ValueError(f"Fill color must look like #RRGGBB, but got: {v}")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Icons are small but many; keep the timeout generous but bounded."""
        if v < 10 or v > 3600:
            raise ValueError("Timeout must be between 10 and 3600 seconds.")
        return v

    @field_validator("connect_timeout")
    @classmethod
    def validate_connect_timeout(cls, v: int) -> int:
        if v < 1 or v > 300:
            raise ValueError("Connect timeout must be between 1 and 300 seconds.")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1 or v > 5:
            raise ValueError("Max attempts must be between 1 and 5.")
        return v

    @field_validator("failure_threshold")
    @classmethod
    def validate_failure_threshold(cls, v: int) -> int:
        if v < 0 or v > 100:
            raise ValueError("Failure threshold must be between 0 (off) and 100.")
        return v

    @model_validator(mode="after")
    def validate_directory_conflicts(self) -> "AppConfig":
        """The backup must never live inside the directory it snapshots."""
        icons = Path(self.icons_dir).expanduser().resolve()
        backup = Path(self.backup_dir).expanduser().resolve()
        if icons == backup or icons in backup.parents:
            raise ValueError("Backup directory cannot be the icons directory or inside it.")
        return self

    @property
    def icons_path(self) -> Path:
        return Path(self.icons_dir).expanduser()

    @property
    def packs_path(self) -> Path:
        return Path(self.packs_root).expanduser()

    @property
    def manifest_path(self) -> Path:
        return self.packs_path / self.manifest_name

    @property
    def backup_path(self) -> Path:
        return Path(self.backup_dir).expanduser()

    @property
    def settings_path(self) -> Path:
        return Path(self.settings_file).expanduser()

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
