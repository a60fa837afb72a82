"""
Tests for the versioned storage layer.
"""

import json

import pytest

from complaint_tracker.services.sample_data import STORAGE_VERSION, generate_sample_data
from complaint_tracker.services.storage import MemoryBackend
from complaint_tracker.services.storage_service import StorageService

from conftest import TEST_KEY, UnavailableBackend


class TestLoad:
    def test_empty_store_is_seeded_and_persisted(self, storage, backend):
        data = storage.load()
        assert len(data["complaints"]) == 2
        assert len(data["users"]) == 2
        assert data["version"] == STORAGE_VERSION
        assert backend.get(TEST_KEY) is not None

    def test_existing_data_is_returned(self, storage, backend):
        stored = generate_sample_data()
        stored["complaints"] = stored["complaints"][:1]
        backend.set(TEST_KEY, json.dumps(stored))

        data = storage.load()
        assert len(data["complaints"]) == 1
        assert data["complaints"][0]["id"] == stored["complaints"][0]["id"]

    def test_version_mismatch_reseeds(self, storage, backend):
        stored = generate_sample_data()
        stored["complaints"] = []
        stored["version"] = "0.9.0"
        backend.set(TEST_KEY, json.dumps(stored))

        data = storage.load()
        assert data["version"] == STORAGE_VERSION
        assert len(data["complaints"]) == 2
        assert json.loads(backend.get(TEST_KEY))["version"] == STORAGE_VERSION

    def test_corrupt_payload_reseeds(self, storage, backend):
        backend.set(TEST_KEY, "{not json")
        data = storage.load()
        assert len(data["complaints"]) == 2
        json.loads(backend.get(TEST_KEY))

    def test_missing_arrays_reseed(self, storage, backend):
        backend.set(TEST_KEY, json.dumps({"version": STORAGE_VERSION, "complaints": "nope", "users": []}))
        data = storage.load()
        assert isinstance(data["complaints"], list)
        assert len(data["complaints"]) == 2

    def test_malformed_complaint_reseeds(self, storage, backend):
        stored = generate_sample_data()
        stored["complaints"] = [{"id": "CT-20240101-0001", "status": "Resolved", "createdAt": 0}]
        backend.set(TEST_KEY, json.dumps(stored))

        data = storage.load()
        assert len(data["complaints"]) == 2
        assert "CT-20240101-0001" not in backend.get(TEST_KEY)

    def test_unavailable_backend_returns_sample_without_saving(self):
        backend = UnavailableBackend()
        storage = StorageService(backend=backend, key=TEST_KEY)
        data = storage.load()
        assert len(data["complaints"]) == 2
        assert backend.get(TEST_KEY) is None


class TestSave:
    def test_save_stamps_last_modified(self, storage, backend):
        data = generate_sample_data(now=1000)
        assert storage.save(data) is True
        stored = json.loads(backend.get(TEST_KEY))
        assert stored["lastModified"] > 1000
        assert stored["lastModified"] == data["lastModified"]

    def test_save_is_compact_json(self, storage, backend):
        storage.save(generate_sample_data())
        assert ", " not in backend.get(TEST_KEY)[:50]

    def test_save_refuses_payload_over_quota(self, backend):
        storage = StorageService(backend=backend, key=TEST_KEY, quota_bytes=100)
        assert storage.save(generate_sample_data()) is False
        assert backend.get(TEST_KEY) is None

    def test_save_on_unavailable_backend_fails(self):
        storage = StorageService(backend=UnavailableBackend(), key=TEST_KEY)
        assert storage.save(generate_sample_data()) is False


class TestClearExportImport:
    def test_clear_removes_key(self, storage, backend):
        storage.load()
        assert storage.clear() is True
        assert backend.get(TEST_KEY) is None

    def test_export_is_pretty_printed(self, storage):
        exported = storage.export_data()
        assert exported.startswith("{\n  ")
        assert len(json.loads(exported)["complaints"]) == 2

    def test_import_forces_current_version(self, storage, backend):
        backup = generate_sample_data()
        backup["version"] = "0.1.0"
        backup["settings"]["version"] = "0.1.0"
        backup["complaints"] = backup["complaints"][:1]

        assert storage.import_data(json.dumps(backup)) is True
        stored = json.loads(backend.get(TEST_KEY))
        assert stored["version"] == STORAGE_VERSION
        assert stored["settings"]["version"] == STORAGE_VERSION
        assert len(stored["complaints"]) == 1

    def test_import_without_settings_gets_version(self, storage):
        data = storage.parse_import(json.dumps({"complaints": [], "users": []}))
        assert data["settings"] == {"version": STORAGE_VERSION}

    @pytest.mark.parametrize("payload, message", [
        ("not json", "not valid JSON"),
        ("[]", "expected a JSON object"),
        ('{"users": []}', "missing complaints array"),
        ('{"complaints": []}', "missing users array"),
        ('{"complaints": [{"id": "A"}, {"id": "A"}], "users": []}', "duplicate complaint id A"),
        ('{"complaints": [{"title": "x"}], "users": []}', "needs an id"),
    ])
    def test_import_rejects_invalid_backups(self, storage, backend, payload, message):
        with pytest.raises(ValueError, match=message):
            storage.import_data(payload)
        assert backend.get(TEST_KEY) is None

    @pytest.mark.parametrize("field, value, location", [
        ("updatedAt", None, "complaints.0.updatedAt"),
        ("status", "Closed", "complaints.0.status"),
        ("reporter", {"name": "No Email"}, "complaints.0.reporter.email"),
    ])
    def test_import_rejects_malformed_complaints(self, storage, backend, field, value, location):
        backup = generate_sample_data()
        if value is None:
            del backup["complaints"][0][field]
        else:
            backup["complaints"][0][field] = value

        with pytest.raises(ValueError, match=location):
            storage.import_data(json.dumps(backup))
        assert backend.get(TEST_KEY) is None

    def test_import_rejects_unknown_user_role(self, storage):
        backup = generate_sample_data()
        backup["users"][0]["role"] = "superuser"
        with pytest.raises(ValueError, match="users.0.role"):
            storage.parse_import(json.dumps(backup))


class TestStorageInfo:
    def test_info_reports_usage(self, storage, backend):
        storage.load()
        info = storage.get_storage_info()
        used = len(backend.get(TEST_KEY).encode("utf-8"))
        assert info["supported"] is True
        assert info["backend"] == "memory"
        assert info["used"] == used
        assert info["available"] == 5 * 1024 * 1024 - used
        assert info["usedFormatted"].endswith("KB")

    def test_info_on_empty_store(self):
        info = StorageService(backend=MemoryBackend(), key=TEST_KEY).get_storage_info()
        assert info["used"] == 0
        assert info["usedFormatted"] == "0 Bytes"
        assert info["availableFormatted"] == "5 MB"

    def test_info_when_unsupported(self):
        info = StorageService(backend=UnavailableBackend(), key=TEST_KEY).get_storage_info()
        assert info == {"backend": "unavailable", "used": 0, "available": 0, "supported": False}
