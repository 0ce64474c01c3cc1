"""Tests for the Typer command-line interface."""

import pytest
from typer.testing import CliRunner

from iconpack_cli.cli import app as app_module
from iconpack_cli.cli.app import app
from iconpack_cli.exceptions import FetchFailedError

from .conftest import ORIGINAL_SVG

runner = CliRunner()


class StubClient:
    """Stands in for IconifyClient inside IconChanger."""

    fail = False

    def __init__(self, **kwargs):
        self.urls = []

    async def fetch(self, url):
        if self.fail:
            raise FetchFailedError("offline")
        return b"<svg id='pack'/>"

    async def close(self):
        pass


@pytest.fixture
def cli_env(tmp_path, monkeypatch, icons_dir, packs_root):
    config_dir = tmp_path / "cli-config"
    monkeypatch.setattr(app_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(app_module, "CONFIG_FILE", config_dir / "config.ini")
    monkeypatch.setattr("iconpack_cli.core.icon_changer.IconifyClient", StubClient)
    StubClient.fail = False
    result = runner.invoke(
        app, ["init", str(icons_dir), "--packs-root", str(packs_root), "--force"]
    )
    assert result.exit_code == 0, result.output
    return config_dir


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "iconpack-cli" in result.output


def test_commands_require_config(tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, "CONFIG_FILE", tmp_path / "none" / "config.ini")
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 1
    assert "init" in result.output


def test_init_writes_config(cli_env):
    assert (cli_env / "config.ini").is_file()


def test_list_shows_menu(cli_env):
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0, result.output
    assert "Original Icons ✓" in result.output
    assert "Material" in result.output


def test_list_without_packs(cli_env, packs_root):
    (packs_root / "config.json").unlink()
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "No icon packs found" in result.output


def test_apply_then_restore(cli_env, icons_dir):
    result = runner.invoke(app, ["apply", "Material"])
    assert result.exit_code == 0, result.output
    assert "Successfully downloaded 2 icons" in result.output
    assert (icons_dir / "home.svg").read_bytes() == b"<svg id='pack'/>"

    result = runner.invoke(app, ["list"])
    assert "Material ✓" in result.output

    result = runner.invoke(app, ["restore"])
    assert result.exit_code == 0, result.output
    assert "Original icons restored" in result.output
    assert (icons_dir / "home.svg").read_bytes() == ORIGINAL_SVG


def test_apply_when_every_icon_fails(cli_env):
    StubClient.fail = True
    result = runner.invoke(app, ["apply", "packs/material.json"])
    assert result.exit_code == 1
    assert "No icons could be downloaded" in result.output


def test_apply_unknown_pack(cli_env):
    result = runner.invoke(app, ["apply", "packs/nope.json"])
    assert result.exit_code == 1
    assert "Failed to read icon pack file" in result.output


def test_restore_without_backup(cli_env):
    result = runner.invoke(app, ["restore"])
    assert result.exit_code == 1
    assert "No backup found" in result.output


def test_choose_dispatches_to_apply(cli_env, icons_dir):
    result = runner.invoke(app, ["choose"], input="2\n")
    assert result.exit_code == 0, result.output
    assert (icons_dir / "home.svg").read_bytes() == b"<svg id='pack'/>"


def test_choose_rejects_out_of_range(cli_env):
    result = runner.invoke(app, ["choose"], input="9\n")
    assert result.exit_code == 1


def test_status(cli_env):
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 0, result.output
    assert "original" in result.output
    assert "Not created yet" in result.output
