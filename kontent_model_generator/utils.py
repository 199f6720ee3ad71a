"""Utility functions for loading and saving schema snapshots.

A snapshot file holds the raw Management API lists
(``{"types": [...], "snippets": [...], "taxonomies": [...]}``) so models
can be regenerated without network access.
"""

import json
from pathlib import Path
from typing import Any

from .codegen.core.schema import SchemaSnapshot, parse_snapshot
from .logging_config import get_logger

logger = get_logger(__name__)


class SnapshotLoaderError(Exception):
    """Custom exception for snapshot loading errors."""

    pass


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON data.

    Raises:
        FileNotFoundError: If file doesn't exist.
        SnapshotLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load JSON from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Successfully loaded JSON from {file_path}")
        return data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}", exc_info=True)
        raise SnapshotLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise SnapshotLoaderError(f"Error reading file {file_path}: {e}") from e


def load_snapshot(file_path: str | Path) -> SchemaSnapshot:
    """Load and parse a schema snapshot file."""
    return parse_snapshot(load_json_from_file(file_path))


def save_snapshot(raw_snapshot: dict[str, Any], file_path: str | Path) -> Path:
    """Write raw Management API lists to a snapshot file.

    Args:
        raw_snapshot: Dict with "types", "snippets" and "taxonomies" lists.
        file_path: Destination path.

    Returns:
        The written path.
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with file_path.open("w", encoding="utf-8") as f:
            json.dump(raw_snapshot, f, indent=2, ensure_ascii=False, sort_keys=True)
    except OSError as e:
        logger.error(f"Error writing file {file_path}: {e}", exc_info=True)
        raise SnapshotLoaderError(f"Error writing file {file_path}: {e}") from e

    logger.info(f"Saved snapshot to {file_path}")
    return file_path
