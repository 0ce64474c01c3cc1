"""Shared fixtures: a small on-disk icon setup and fake collaborators."""

import json
from pathlib import Path

import pytest

from iconpack_cli.exceptions import FetchFailedError
from iconpack_cli.models.config import AppConfig
from iconpack_cli.storage.active_pack import ActivePackTracker
from iconpack_cli.storage.settings import SettingsStore

ORIGINAL_SVG = b'<svg id="original"/>'


class FakeFetcher:
    """Returns canned bodies per URL, or raises the configured exception."""

    def __init__(self, responses=None, default=b"<svg/>"):
        self.responses = responses or {}
        self.default = default
        self.urls = []

    async def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        result = self.responses.get(url, self.default)
        if isinstance(result, Exception):
            raise result
        return result


class RecordingProgress:
    """Records every progress notice; cancels once `cancel_at` is reached."""

    def __init__(self, cancel_at: int | None = None):
        self.cancel_at = cancel_at
        self.notices = []
        self.advanced = 0
        self.cleared = False

    def info(self, text: str, index: int, total: int) -> bool:
        if self.cancel_at is not None and index >= self.cancel_at:
            return False
        self.notices.append((text, index, total))
        return True

    def advance(self) -> None:
        self.advanced += 1

    def clear(self) -> None:
        self.cleared = True


def icon_url(prefix: str, name: str) -> str:
    return f"https://api.iconify.design/{prefix}/{name}.svg?color=%23000000"


@pytest.fixture
def icons_dir(tmp_path) -> Path:
    """An icons directory with two original icons and one non-icon file."""
    directory = tmp_path / "resources" / "icons"
    directory.mkdir(parents=True)
    (directory / "home.svg").write_bytes(ORIGINAL_SVG)
    (directory / "search.svg").write_bytes(ORIGINAL_SVG)
    (directory / "README.txt").write_text("not an icon")
    return directory


@pytest.fixture
def packs_root(tmp_path) -> Path:
    """A packs root with a manifest listing one pack."""
    root = tmp_path / "iconpacks"
    (root / "packs").mkdir(parents=True)
    (root / "packs" / "material.json").write_text(
        json.dumps({"home": "mdi-home", "search": "mdi-magnify"})
    )
    (root / "config.json").write_text(
        json.dumps([{"display_name": "Material", "path": "packs/material.json"}])
    )
    return root


@pytest.fixture
def config(tmp_path, icons_dir, packs_root) -> AppConfig:
    return AppConfig(
        icons_dir=str(icons_dir),
        packs_root=str(packs_root),
        config_path=str(tmp_path / "config"),
    )


@pytest.fixture
def store(tmp_path) -> SettingsStore:
    return SettingsStore(tmp_path / "settings" / "iconschanger.ini")


@pytest.fixture
def tracker(store) -> ActivePackTracker:
    return ActivePackTracker(store)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture
def recording_progress():
    return RecordingProgress


@pytest.fixture
def url_for():
    return icon_url


@pytest.fixture
def fetch_error():
    return FetchFailedError("Network error")
