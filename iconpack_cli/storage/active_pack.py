"""
Tracks which icon pack is currently installed.
"""

from .settings import SettingsStore

ORIGINAL = "original"


class ActivePackTracker:
    """
    Persists the identifier of the active pack: either "original" or the pack's
    manifest path. The identifier is not checked against the manifest.
    """

    KEY = "active_icon_pack"

    def __init__(self, store: SettingsStore):
        self.store = store

    def get(self) -> str:
        return self.store.get(self.KEY, ORIGINAL) or ORIGINAL

    def set(self, identifier: str) -> None:
        self.store.set(self.KEY, identifier)

    def is_active(self, identifier: str) -> bool:
        return self.get() == identifier
