"""
Shared pytest fixtures for the Complaint Tracker test suite.

Every test gets a fresh in-memory store; the API client runs the FastAPI app
in-process against it.
"""

import pytest
from fastapi.testclient import TestClient

from complaint_tracker.main import app
from complaint_tracker.models.complaint import ComplaintCreate
from complaint_tracker.services.complaint_service import ComplaintService, set_complaint_service
from complaint_tracker.services.storage import MemoryBackend
from complaint_tracker.services.storage_service import StorageService

TEST_KEY = "cts_test"


class UnavailableBackend(MemoryBackend):
    """A backend that reports itself unusable, like a browser with storage disabled."""

    name = "unavailable"

    def is_available(self) -> bool:
        return False


class ReadCountingBackend(MemoryBackend):
    """
    Counts reads. `write_on_read = (n, payload)` stores payload just before the
    n-th read after arming, standing in for another process writing.
    """

    def __init__(self):
        super().__init__()
        self.reads = 0
        self.write_on_read = None
        self._reads_since_armed = 0

    def get(self, key):
        self.reads += 1
        if self.write_on_read is not None:
            self._reads_since_armed += 1
            trigger, payload = self.write_on_read
            if self._reads_since_armed == trigger:
                self.write_on_read = None
                self.set(key, payload)
        return super().get(key)


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def storage(backend):
    return StorageService(backend=backend, key=TEST_KEY)


@pytest.fixture
def service(storage):
    svc = ComplaintService(storage=storage)
    set_complaint_service(svc)
    yield svc
    set_complaint_service(None)


@pytest.fixture
def client(service):
    """In-process TestClient bound to the per-test service."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_payload():
    """Factory for valid submission payloads; keyword overrides use snake_case field names."""

    def _make(**overrides) -> ComplaintCreate:
        fields = {
            "title": "Pothole outside the school gate",
            "description": "A deep pothole has formed right outside the primary school gate on Hill Road.",
            "category": "Roads & Infrastructure",
            "priority": "High",
            "location": "Hill Road",
            "reporter_name": "Asha Verma",
            "reporter_email": "asha.verma@example.com",
            "reporter_phone": "+91 98765 43210",
            "preferred_contact": "email",
        }
        fields.update(overrides)
        return ComplaintCreate(**fields)

    return _make


@pytest.fixture
def form_json():
    """Submission body as the frontend sends it (camelCase)."""
    return {
        "title": "Signal stuck on red at Ring Road",
        "description": "The traffic signal at the Ring Road junction has been stuck on red since morning.",
        "category": "Traffic",
        "priority": "Critical",
        "location": "Ring Road junction",
        "reporterName": "Ravi Kumar",
        "reporterEmail": "ravi.kumar@example.com",
        "reporterPhone": "9876543210",
        "preferredContact": "phone",
    }
