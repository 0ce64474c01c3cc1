"""
Storage Layer.

This package handles all data persistence, including the configuration file,
the persisted plugin settings, and the backup of the original icon set.
"""

from .active_pack import ORIGINAL, ActivePackTracker
from .backup import BackupManager
from .config_manager import ConfigManager
from .settings import SettingsStore

__all__ = [
    "ORIGINAL",
    "ActivePackTracker",
    "BackupManager",
    "ConfigManager",
    "SettingsStore",
]
