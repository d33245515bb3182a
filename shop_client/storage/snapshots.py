"""Versioned JSON snapshots of container state"""

import json
import logging
from typing import Any, Optional

from .local_store import KeyValueStore

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class SnapshotError(Exception):
    """Stored snapshot could not be read"""
    pass


class SnapshotStore:
    """
    Reads and writes item lists wrapped as ``{"version": N, "items": [...]}``.

    Bare JSON arrays written before versioning are read as version 0 and
    upgraded on the next save.
    """

    def __init__(self, backend: KeyValueStore):
        self.backend = backend

    def load(self, key: str) -> Optional[list[Any]]:
        """
        Load the item list stored under ``key``.

        Returns:
            The items, or None if nothing is stored

        Raises:
            SnapshotError: content is not valid JSON, has an unknown
                shape, or carries an unsupported version
        """
        raw = self.backend.get(key)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise SnapshotError(f"Snapshot {key!r} is not valid JSON: {e}") from e

        if isinstance(data, list):
            logger.info(f"Migrating unversioned snapshot {key!r}")
            return data

        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise SnapshotError(f"Snapshot {key!r} has an unrecognised shape")

        version = data.get("version")
        if version != SNAPSHOT_VERSION:
            raise SnapshotError(f"Snapshot {key!r} has unsupported version {version!r}")

        return data["items"]

    def save(self, key: str, items: list[Any]) -> None:
        self.backend.set(key, json.dumps({"version": SNAPSHOT_VERSION, "items": items}))

    def discard(self, key: str) -> None:
        self.backend.remove(key)
