"""
Sample data used to seed an empty (or unreadable) store.
"""

from typing import Dict, Optional

from complaint_tracker.utils.identifiers import generate_complaint_id
from complaint_tracker.utils.timestamps import DAY_MS, now_ms

STORAGE_VERSION = "1.0.0"


def default_settings() -> Dict:
    return {
        "version": STORAGE_VERSION,
        "notifications": True,
        "theme": "system",
    }


def generate_sample_data(now: Optional[int] = None) -> Dict:
    """Build a fresh application document with two demo complaints and two admins."""
    now = now if now is not None else now_ms()

    drain_id = generate_complaint_id()
    light_id = generate_complaint_id(existing=[drain_id])

    return {
        "complaints": [
            {
                "id": drain_id,
                "title": "Blocked storm drain on Main Street",
                "description": (
                    "The storm drain near 123 Main Street has been blocked for several days, "
                    "causing water to pool during rain. This creates a safety hazard for "
                    "pedestrians and vehicles."
                ),
                "category": "Sanitation",
                "priority": "High",
                "status": "In Review",
                "createdAt": now - 2 * DAY_MS,
                "updatedAt": now - DAY_MS,
                "location": "123 Main Street, Downtown",
                "reporter": {
                    "name": "John Smith",
                    "email": "john.smith@email.com",
                    "phone": "+1-555-0123",
                    "preferredContact": "email",
                },
                "assignee": "Sarah Johnson",
                "attachments": [],
                "history": [
                    {
                        "id": "hist_1",
                        "timestamp": now - 2 * DAY_MS,
                        "by": "System",
                        "action": "Complaint submitted",
                        "newStatus": "New",
                    },
                    {
                        "id": "hist_2",
                        "timestamp": now - DAY_MS,
                        "by": "Sarah Johnson",
                        "action": "Status updated",
                        "note": "Assigned to maintenance team for inspection",
                        "previousStatus": "New",
                        "newStatus": "In Review",
                    },
                ],
                "comments": [
                    {
                        "id": "comm_1",
                        "by": "Sarah Johnson",
                        "text": (
                            "We have received your complaint and dispatched a team to assess the "
                            "situation. Expected resolution within 3-5 business days."
                        ),
                        "timestamp": now - DAY_MS,
                        "isPrivate": False,
                    }
                ],
                "tags": ["infrastructure", "safety"],
            },
            {
                "id": light_id,
                "title": "Streetlight not working",
                "description": (
                    "The streetlight at the corner of Oak and Pine has been out for over a week, "
                    "making the area unsafe at night."
                ),
                "category": "Public Safety",
                "priority": "Medium",
                "status": "New",
                "createdAt": now - DAY_MS,
                "updatedAt": now - DAY_MS,
                "location": "Corner of Oak St and Pine Ave",
                "reporter": {
                    "name": "Maria Garcia",
                    "email": "maria.garcia@email.com",
                    "preferredContact": "email",
                },
                "attachments": [],
                "history": [
                    {
                        "id": "hist_3",
                        "timestamp": now - DAY_MS,
                        "by": "System",
                        "action": "Complaint submitted",
                        "newStatus": "New",
                    }
                ],
                "comments": [],
                "tags": ["lighting", "safety"],
            },
        ],
        "users": [
            {"id": "admin_1", "name": "Sarah Johnson", "email": "admin@city.gov", "role": "admin"},
            {"id": "admin_2", "name": "Michael Chen", "email": "supervisor@city.gov", "role": "admin"},
        ],
        "settings": default_settings(),
        "version": STORAGE_VERSION,
        "lastModified": now,
    }
