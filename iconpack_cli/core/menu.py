"""
Builds the icon pack menu shown to the user.
"""

from dataclasses import dataclass
from typing import Optional

from iconpack_cli.models.pack import PackDescriptor
from iconpack_cli.storage.active_pack import ORIGINAL

ACTIVE_MARK = " ✓"


@dataclass(frozen=True)
class MenuItem:
    label: str
    identifier: Optional[str] = None  # "original", a pack path, or None for info rows
    active: bool = False
    enabled: bool = True

    @property
    def text(self) -> str:
        return self.label + ACTIVE_MARK if self.active else self.label


def build_menu_items(packs: list[PackDescriptor], active: str) -> list[MenuItem]:
    """
    "Original Icons" first, then one entry per pack in manifest order. The entry
    whose identifier equals `active` is marked. Packs sharing a path are all
    listed and all marked.
    """
    items = [MenuItem("Original Icons", ORIGINAL, active=active == ORIGINAL)]
    if not packs:
        items.append(MenuItem("No icon packs found", enabled=False))
        items.append(MenuItem("Check config.json file", enabled=False))
        return items

    for pack in packs:
        items.append(MenuItem(pack.display_name, pack.path, active=active == pack.path))
    return items
