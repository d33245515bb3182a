# Local persistence

from .local_store import KeyValueStore, MemoryKeyValueStore, FileKeyValueStore, create_store
from .snapshots import SnapshotStore, SnapshotError, SNAPSHOT_VERSION

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "create_store",
    "SnapshotStore",
    "SnapshotError",
    "SNAPSHOT_VERSION",
]
