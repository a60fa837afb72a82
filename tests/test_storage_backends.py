"""
Tests for the key-value storage backends and backend selection.
"""

import pytest

from complaint_tracker.core.settings import settings
from complaint_tracker.services.storage import (
    FileBackend,
    MemoryBackend,
    StorageError,
    create_storage_backend,
)
from complaint_tracker.services.storage.firestore_backend import FirestoreBackend


class TestFileBackend:
    def test_set_get_remove(self, tmp_path):
        backend = FileBackend(str(tmp_path / "store"))
        assert backend.is_available() is True
        assert backend.get("cts_data_v1") is None

        backend.set("cts_data_v1", '{"a":1}')
        assert backend.get("cts_data_v1") == '{"a":1}'
        assert (tmp_path / "store" / "cts_data_v1.json").read_text(encoding="utf-8") == '{"a":1}'

        backend.set("cts_data_v1", '{"a":2}')
        assert backend.get("cts_data_v1") == '{"a":2}'

        backend.remove("cts_data_v1")
        assert backend.get("cts_data_v1") is None

    def test_remove_missing_key_is_noop(self, tmp_path):
        FileBackend(str(tmp_path)).remove("never_written")

    def test_no_temp_files_left_behind(self, tmp_path):
        backend = FileBackend(str(tmp_path))
        backend.set("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", "spaces here"])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        with pytest.raises(StorageError):
            FileBackend(str(tmp_path)).get(key)

    def test_describe_names_directory(self, tmp_path):
        assert FileBackend(str(tmp_path)).describe() == f"file:{tmp_path.resolve()}"


class TestMemoryBackend:
    def test_round_trip(self):
        backend = MemoryBackend()
        backend.set("k", "v")
        assert backend.get("k") == "v"
        backend.remove("k")
        backend.remove("k")
        assert backend.get("k") is None
        assert backend.describe() == "memory"


class _FakeSnapshot:
    def __init__(self, value):
        self._value = value

    @property
    def exists(self):
        return self._value is not None

    def to_dict(self):
        return dict(self._value) if self._value is not None else None


class _FakeDocument:
    def __init__(self, store, key):
        self.store = store
        self.key = key

    def get(self):
        return _FakeSnapshot(self.store.get(self.key))

    def set(self, value):
        self.store[self.key] = value

    def delete(self):
        self.store.pop(self.key, None)


class _FakeFirestore:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        store = self.collections.setdefault(name, {})
        return type("Collection", (), {"document": lambda _self, key: _FakeDocument(store, key)})()


class TestFirestoreBackend:
    def test_value_is_stored_in_document(self):
        db = _FakeFirestore()
        backend = FirestoreBackend(db, "kv_store")

        assert backend.is_available() is True
        assert backend.get("cts_data_v1") is None

        backend.set("cts_data_v1", "payload")
        assert backend.get("cts_data_v1") == "payload"
        assert db.collections["kv_store"]["cts_data_v1"]["value"] == "payload"
        assert "updated_at" in db.collections["kv_store"]["cts_data_v1"]

        backend.remove("cts_data_v1")
        assert backend.get("cts_data_v1") is None
        assert backend.describe() == "firestore:kv_store"

    def test_client_errors_become_storage_errors(self):
        class BrokenDb:
            def collection(self, name):
                raise ConnectionError("offline")

        backend = FirestoreBackend(BrokenDb(), "kv_store")
        assert backend.is_available() is False
        with pytest.raises(StorageError, match="offline"):
            backend.get("k")
        with pytest.raises(StorageError):
            backend.set("k", "v")


class TestRegistry:
    def test_memory(self):
        assert isinstance(create_storage_backend("memory"), MemoryBackend)

    def test_file_uses_configured_directory(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "STORAGE_DIR", str(tmp_path))
        backend = create_storage_backend("file")
        assert isinstance(backend, FileBackend)
        assert backend.directory == tmp_path

    def test_unknown_name_falls_back_to_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "STORAGE_DIR", str(tmp_path))
        assert isinstance(create_storage_backend("redis"), FileBackend)

    def test_firestore_without_credentials_falls_back_to_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "STORAGE_DIR", str(tmp_path))
        monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_PATH", str(tmp_path / "missing.json"))
        assert isinstance(create_storage_backend("firestore"), FileBackend)
