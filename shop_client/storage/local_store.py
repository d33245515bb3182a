"""
Key-value persistence backends

The containers only need get/set/remove on string values; any backend
honouring that contract can be swapped in.
"""

import os
import re
import logging
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..core.config import StorageBackend

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """String key-value storage"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if absent"""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one"""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key; absent keys are ignored"""


class MemoryKeyValueStore(KeyValueStore):
    """Process-local storage, lost on exit"""

    def __init__(self):
        self.data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """
    One file per key in a directory.

    Writes go to a temporary file that is then renamed over the target,
    so readers never observe a half-written value. Concurrent writers
    are last-write-wins.
    """

    _VALID_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not self._VALID_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass


def create_store(backend: StorageBackend, directory: Union[str, Path]) -> KeyValueStore:
    """Build the configured backend"""
    if backend == StorageBackend.MEMORY:
        return MemoryKeyValueStore()
    logger.debug(f"Using file storage in {directory}")
    return FileKeyValueStore(directory)
