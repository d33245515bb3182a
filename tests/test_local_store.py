# Test key-value backends and versioned snapshots

import json

import pytest

from shop_client.core.config import StorageBackend
from shop_client.storage import (
    FileKeyValueStore,
    MemoryKeyValueStore,
    SnapshotError,
    SnapshotStore,
    create_store,
)


@pytest.fixture(params=["memory", "file"])
def backend(request, tmp_path):
    if request.param == "memory":
        return MemoryKeyValueStore()
    return FileKeyValueStore(tmp_path / "store")


class TestKeyValueStore:

    def test_get_set_remove(self, backend):
        assert backend.get("cart") is None

        backend.set("cart", "[1]")
        backend.set("cart", "[2]")
        assert backend.get("cart") == "[2]"

        backend.remove("cart")
        assert backend.get("cart") is None

    def test_remove_absent_key(self, backend):
        backend.remove("never-set")

    def test_keys_are_independent(self, backend):
        backend.set("cart", "a")
        backend.set("wishlist", "b")
        backend.remove("cart")
        assert backend.get("wishlist") == "b"


class TestFileKeyValueStore:

    def test_one_file_per_key(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("cart", "[]")
        assert (tmp_path / "cart.json").read_text(encoding="utf-8") == "[]"

    def test_no_temp_files_left_behind(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        for i in range(3):
            store.set("wishlist", str(i))
        assert [p.name for p in tmp_path.iterdir()] == ["wishlist.json"]

    def test_values_survive_new_instance(self, tmp_path):
        FileKeyValueStore(tmp_path).set("cart", "saved")
        assert FileKeyValueStore(tmp_path).get("cart") == "saved"

    @pytest.mark.parametrize("key", ["../escape", "a/b", ""])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            FileKeyValueStore(tmp_path).set(key, "x")


class TestCreateStore:

    def test_memory(self, tmp_path):
        assert isinstance(create_store(StorageBackend.MEMORY, tmp_path), MemoryKeyValueStore)

    def test_file(self, tmp_path):
        assert isinstance(create_store(StorageBackend.FILE, tmp_path / "data"), FileKeyValueStore)
        assert (tmp_path / "data").is_dir()


class TestSnapshotStore:

    def setup_method(self):
        self.backend = MemoryKeyValueStore()
        self.snapshots = SnapshotStore(self.backend)

    def test_missing_key(self):
        assert self.snapshots.load("cart") is None

    def test_save_writes_envelope(self):
        self.snapshots.save("cart", [{"id": 1, "price": 100, "quantity": 2}])
        assert json.loads(self.backend.get("cart")) == {
            "version": 1,
            "items": [{"id": 1, "price": 100, "quantity": 2}],
        }
        assert self.snapshots.load("cart") == [{"id": 1, "price": 100, "quantity": 2}]

    def test_legacy_array_is_migrated(self):
        self.backend.set("wishlist", json.dumps([{"productId": "p1"}]))
        assert self.snapshots.load("wishlist") == [{"productId": "p1"}]

    @pytest.mark.parametrize("raw", [
        "{not json",
        '"a string"',
        '{"version": 1}',
        '{"version": 1, "items": {}}',
        '{"version": 99, "items": []}',
    ])
    def test_unreadable_snapshots(self, raw):
        self.backend.set("cart", raw)
        with pytest.raises(SnapshotError):
            self.snapshots.load("cart")

    def test_discard(self):
        self.snapshots.save("cart", [])
        self.snapshots.discard("cart")
        assert self.backend.get("cart") is None
