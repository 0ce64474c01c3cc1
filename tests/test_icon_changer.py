"""Tests for the apply/restore workflow as a whole."""

import asyncio
import json

import pytest

from iconpack_cli.core.icon_changer import IconChanger
from iconpack_cli.exceptions import (
    MappingFileUnreadableError,
    MappingInvalidError,
    OperationInProgressError,
)
from iconpack_cli.models.stats import ApplyStatus, RestoreResult

from .conftest import ORIGINAL_SVG

PACK = "packs/material.json"


@pytest.fixture
def make_changer(config, store):
    def _make(fetcher=None, progress=None):
        return IconChanger(config, fetcher=fetcher, progress=progress, store=store)

    return _make


async def test_apply_backs_up_originals_before_overwriting(
    make_changer, fake_fetcher, config
):
    changer = make_changer(fake_fetcher(default=b"<svg id='pack'/>"))

    outcome = await changer.apply_pack(PACK)

    assert outcome.status is ApplyStatus.SUCCESS
    assert (config.backup_path / "home.svg").read_bytes() == ORIGINAL_SVG
    assert (config.icons_path / "home.svg").read_bytes() == b"<svg id='pack'/>"
    assert changer.tracker.get() == PACK


async def test_second_pack_does_not_replace_backup(
    make_changer, fake_fetcher, config, packs_root
):
    (packs_root / "packs" / "phosphor.json").write_text(json.dumps({"home": "ph-house"}))
    changer = make_changer(fake_fetcher(default=b"<svg id='pack'/>"))

    await changer.apply_pack(PACK)
    await changer.apply_pack("packs/phosphor.json")

    assert (config.backup_path / "home.svg").read_bytes() == ORIGINAL_SVG
    assert changer.tracker.get() == "packs/phosphor.json"


async def test_restore_after_apply(make_changer, fake_fetcher, config):
    changer = make_changer(fake_fetcher())
    await changer.apply_pack(PACK)

    assert await changer.restore_original() is RestoreResult.OK
    assert (config.icons_path / "home.svg").read_bytes() == ORIGINAL_SVG
    assert changer.tracker.get() == "original"


async def test_restore_without_backup(make_changer):
    assert await make_changer().restore_original() is RestoreResult.NO_BACKUP_FOUND


async def test_missing_pack_file_aborts_before_backup(make_changer, fake_fetcher, config):
    fetcher = fake_fetcher()
    changer = make_changer(fetcher)

    with pytest.raises(MappingFileUnreadableError):
        await changer.apply_pack("packs/missing.json")

    assert not changer.backup.has_backup
    assert fetcher.urls == []


async def test_invalid_pack_file_aborts_before_backup(make_changer, packs_root):
    (packs_root / "packs" / "broken.json").write_text("[1, 2")
    changer = make_changer()

    with pytest.raises(MappingInvalidError):
        await changer.apply_pack("packs/broken.json")
    assert not changer.backup.has_backup


async def test_empty_pack_is_nothing_to_do(make_changer, fake_fetcher, packs_root):
    (packs_root / "packs" / "empty.json").write_text("{}")
    changer = make_changer(fake_fetcher())

    outcome = await changer.apply_pack("packs/empty.json")

    assert outcome.status is ApplyStatus.NOTHING_TO_DO
    assert not changer.backup.has_backup
    assert changer.tracker.get() == "original"


async def test_concurrent_trigger_is_rejected(make_changer):
    release = asyncio.Event()

    class SlowFetcher:
        async def fetch(self, url):
            await release.wait()
            return b"<svg/>"

    changer = make_changer(SlowFetcher())
    running = asyncio.create_task(changer.apply_pack(PACK))
    await asyncio.sleep(0)

    with pytest.raises(OperationInProgressError):
        await changer.restore_original()
    with pytest.raises(OperationInProgressError):
        await changer.apply_pack(PACK)

    release.set()
    outcome = await running
    assert outcome.success_count == 2


async def test_menu_marks_active_pack(make_changer, fake_fetcher):
    changer = make_changer(fake_fetcher())
    assert [i.text for i in changer.menu_items()] == ["Original Icons ✓", "Material"]

    await changer.apply_pack(PACK)
    assert [i.text for i in changer.menu_items()] == ["Original Icons", "Material ✓"]


def test_find_pack_by_display_name_or_path(make_changer):
    changer = make_changer()
    assert changer.find_pack("material") == PACK
    assert changer.find_pack(PACK) == PACK
    assert changer.find_pack("packs/other.json") == "packs/other.json"


def test_bootstrap_creates_state_directories(config, store, tmp_path):
    assert not config.backup_path.exists()
    IconChanger(config, store=store)
    assert config.backup_path.is_dir()
    assert config.packs_path.is_dir()
