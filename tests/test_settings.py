"""Tests for the settings store and the active pack tracker."""

import pytest

from iconpack_cli.exceptions import SettingsWriteError
from iconpack_cli.storage.active_pack import ActivePackTracker
from iconpack_cli.storage.settings import SettingsStore


def test_active_pack_defaults_to_original(tracker):
    assert tracker.get() == "original"
    assert tracker.is_active("original")


def test_active_pack_is_persisted(tmp_path):
    path = tmp_path / "iconschanger.ini"
    ActivePackTracker(SettingsStore(path)).set("packs/material.json")

    assert ActivePackTracker(SettingsStore(path)).get() == "packs/material.json"


def test_no_validation_of_identifier(tracker):
    tracker.set("packs/deleted-long-ago.json")
    assert tracker.get() == "packs/deleted-long-ago.json"


def test_store_without_autoflush_writes_on_flush(tmp_path):
    path = tmp_path / "settings.ini"
    store = SettingsStore(path, autoflush=False)
    store.set("key", "value")
    assert not path.exists()

    store.flush()
    assert SettingsStore(path).get("key") == "value"


def test_flush_without_changes_creates_nothing(tmp_path):
    path = tmp_path / "settings.ini"
    SettingsStore(path).flush()
    assert not path.exists()


def test_unreadable_settings_start_fresh(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text("this is [not an ini file")
    store = SettingsStore(path)
    assert store.get("active_icon_pack", "original") == "original"


def test_failed_flush_raises_and_keeps_changes_pending(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = SettingsStore(blocker / "iconschanger.ini", autoflush=False)
    store.set("active_icon_pack", "packs/material.json")

    with pytest.raises(SettingsWriteError, match="Could not save settings"):
        store.flush()
    assert store.get("active_icon_pack") == "packs/material.json"
