"""Loading sync pairs from a JSON configuration file."""

import json
import logging
from pathlib import Path
from typing import Any, Union

from ..exceptions import DirSyncConfigError
from .pair import SyncPair

logger = logging.getLogger(__name__)


class SyncConfigError(DirSyncConfigError):
    """Raised when a sync pairs file cannot be loaded or validated."""


def parse_sync_pairs(data: Any) -> list[SyncPair]:
    """Validate decoded JSON data and build sync pairs.

    Args:
        data: Either a list of pair objects or an object with a "pairs" list

    Returns:
        List of SyncPair objects in file order

    Raises:
        SyncConfigError: If the structure or any pair is invalid
    """
    if isinstance(data, dict):
        if "pairs" not in data:
            raise SyncConfigError("Configuration object must contain a 'pairs' list")
        data = data["pairs"]

    if not isinstance(data, list):
        raise SyncConfigError("Sync pairs must be a JSON list of objects")

    pairs: list[SyncPair] = []
    aliases: set[str] = set()
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise SyncConfigError(f"Sync pair #{index} must be a JSON object")
        try:
            pair = SyncPair.from_dict(item)
        except ValueError as e:
            raise SyncConfigError(f"Invalid sync pair #{index}: {e}") from e

        if pair.alias:
            if pair.alias in aliases:
                raise SyncConfigError(
                    f"Invalid sync pair #{index}: duplicate alias '{pair.alias}'"
                )
            aliases.add(pair.alias)
        pairs.append(pair)

    return pairs


def load_sync_pairs_from_json(path: Union[str, Path]) -> list[SyncPair]:
    """Load sync pairs from a JSON file.

    Example file::

        [
            {
                "source": "/home/user/docs",
                "destination": "/mnt/backup/docs",
                "policy": "differential",
                "exclude": ["*.tmp", "*cache*"],
                "alias": "docs"
            }
        ]

    Args:
        path: JSON file to read

    Returns:
        List of SyncPair objects

    Raises:
        SyncConfigError: If the file cannot be read, decoded or validated
    """
    config_path = Path(path)
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SyncConfigError(f"Cannot read sync config {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SyncConfigError(f"Invalid JSON in {config_path}: {e}") from e

    pairs = parse_sync_pairs(data)
    logger.debug(f"Loaded {len(pairs)} sync pair(s) from {config_path}")
    return pairs
