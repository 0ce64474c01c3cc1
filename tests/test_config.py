"""Tests for the INI configuration layer."""

import pytest

from iconpack_cli.exceptions import ConfigurationError
from iconpack_cli.models.config import AppConfig
from iconpack_cli.storage.config_manager import ConfigManager


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "conf" / "config.ini"


def test_missing_file_raises(config_file):
    with pytest.raises(ConfigurationError, match="init"):
        ConfigManager(config_file).load_config()


def test_saved_config_round_trips_with_defaults(config_file, tmp_path):
    ConfigManager(config_file).save_new_config({"icons_dir": str(tmp_path / "icons")})

    config = ConfigManager(config_file).load_config()

    assert config.icons_path == tmp_path / "icons"
    assert config.packs_path == config_file.parent / "iconpacks"
    assert config.backup_path == config_file.parent / "iconschanger_backup"
    assert config.settings_path == config_file.parent / "iconschanger.ini"
    assert config.manifest_path == config_file.parent / "iconpacks" / "config.json"
    assert config.api_base == "https://api.iconify.design"
    assert config.fill_color == "#000000"
    assert config.timeout == 300


def test_missing_keys_are_migrated(config_file, tmp_path):
    config_file.parent.mkdir(parents=True)
    config_file.write_text(f"[DEFAULT]\nicons_dir = {tmp_path / 'icons'}\n")

    config = ConfigManager(config_file).load_config()

    assert config.max_attempts == 1
    text = config_file.read_text()
    assert "failure_threshold" in text
    assert "api_base" in text


def test_cli_options_override_file(config_file, tmp_path):
    ConfigManager(config_file).save_new_config({"icons_dir": str(tmp_path / "icons")})
    config = ConfigManager(config_file).load_config({"packs_root": str(tmp_path / "p")})
    assert config.packs_path == tmp_path / "p"


@pytest.mark.parametrize(
    "line",
    [
        "timeout = 1",
        "max_attempts = 9",
        "fill_color = black",
        "api_base = ftp://icons",
        "manifest_name = ../config.json",
        "timeout = soon",
    ],
)
def test_invalid_values_raise(config_file, tmp_path, line):
    config_file.parent.mkdir(parents=True)
    config_file.write_text(f"[DEFAULT]\nicons_dir = {tmp_path / 'icons'}\n{line}\n")
    with pytest.raises(ConfigurationError):
        ConfigManager(config_file).load_config()


def test_empty_icons_dir_is_rejected(config_file):
    config_file.parent.mkdir(parents=True)
    config_file.write_text("[DEFAULT]\nicons_dir =\n")
    with pytest.raises(ConfigurationError):
        ConfigManager(config_file).load_config()


def test_backup_inside_icons_dir_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        AppConfig(
            icons_dir=str(tmp_path / "icons"),
            backup_dir=str(tmp_path / "icons" / "backup"),
            config_path=str(tmp_path),
        )


def test_api_base_trailing_slash_is_stripped(tmp_path):
    config = AppConfig(
        icons_dir=str(tmp_path / "icons"),
        api_base="https://api.iconify.design/",
        config_path=str(tmp_path),
    )
    assert config.api_base == "https://api.iconify.design"
