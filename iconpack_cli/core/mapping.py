"""
Loads a pack's icon mapping file.
"""

import json
import logging
from pathlib import Path

from iconpack_cli.exceptions import (
    MappingEmptyError,
    MappingFileUnreadableError,
    MappingInvalidError,
)
from iconpack_cli.models.pack import IconMapping

log = logging.getLogger(__name__)


def load_mapping(path: Path) -> IconMapping:
    """
    Reads a JSON object mapping local icon names to remote icon specs.

    The returned dict keeps the document's key order.

    Raises:
        MappingFileUnreadableError: If the file is missing or cannot be read.
        MappingInvalidError: If the content is not a JSON object of strings.
        MappingEmptyError: If the object has no entries.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise MappingFileUnreadableError(
            f"Failed to read icon pack file '{path}': {e.strerror or e}"
        ) from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MappingInvalidError(f"Invalid icon pack file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise MappingInvalidError(
            f"Invalid icon pack file '{path}': expected a JSON object, "
            f"got {type(data).__name__}"
        )

    bad_keys = [key for key, value in data.items() if not isinstance(value, str)]
    if bad_keys:
        raise MappingInvalidError(
            f"Invalid icon pack file '{path}': icon specs must be strings "
            f"(check {', '.join(bad_keys[:5])})"
        )

    if not data:
        raise MappingEmptyError(f"Icon pack '{path.name}' lists no icons.")

    log.debug(f"Loaded {len(data)} icon mappings from {path}")
    return data
