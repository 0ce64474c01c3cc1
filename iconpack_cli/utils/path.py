"""
Utilities for handling icon file paths.
"""

from pathlib import Path

ICON_SUFFIX = ".svg"


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def list_icon_files(directory_path: Path) -> list[Path]:
    """Returns the SVG icon files directly inside a directory, sorted by name."""
    if not directory_path.is_dir():
        return []
    return sorted(
        p for p in directory_path.iterdir() if p.suffix == ICON_SUFFIX and p.is_file()
    )


def icon_path(icons_dir: Path, icon_name: str) -> Path:
    """
    Builds the destination path for a local icon name.

    Raises:
        ValueError: If the name would escape the icons directory.
    """
    if not icon_name or "/" in icon_name or "\\" in icon_name or icon_name in (".", ".."):
        raise ValueError(f"'{icon_name}' is not a valid icon file name")
    return icons_dir / f"{icon_name}{ICON_SUFFIX}"
