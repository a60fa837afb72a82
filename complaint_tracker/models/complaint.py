"""
Pydantic models for citizen complaints.
These models handle validation for complaint submission, admin actions and responses.
"""

import re
from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from complaint_tracker.models.base import CamelModel


class ComplaintStatus(str, Enum):
    """
    Complaint lifecycle states.
    New → In Review → Resolved / Rejected (closed complaints can be reopened).
    """
    NEW = "New"
    IN_REVIEW = "In Review"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"


class ComplaintCategory(str, Enum):
    SANITATION = "Sanitation"
    ROADS_INFRASTRUCTURE = "Roads & Infrastructure"
    UTILITIES = "Utilities"
    PUBLIC_SAFETY = "Public Safety"
    PARKS_RECREATION = "Parks & Recreation"
    HOUSING = "Housing"
    NOISE = "Noise"
    TRAFFIC = "Traffic"
    CYBER_CRIME = "Cyber Crime"
    OTHER = "Other"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ContactMethod(str, Enum):
    EMAIL = "email"
    PHONE = "phone"


# Ordinal ranks used when sorting by priority or status
PRIORITY_RANK: Dict[str, int] = {p.value: i for i, p in enumerate(Priority)}
STATUS_ORDER: Dict[str, int] = {s.value: i for i, s in enumerate(ComplaintStatus)}

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[\s\d\-\(\)]*$")


class Attachment(CamelModel):
    """Stored attachment (file content kept inline as a base64 data URL)."""
    id: str
    name: str
    mime: str
    base64: str
    size: int = Field(..., ge=0, description="Decoded size in bytes")


class AttachmentUpload(CamelModel):
    """Attachment as sent by the submission form."""
    name: str = Field(..., min_length=1, max_length=255)
    mime: str = Field(..., min_length=1, max_length=100)
    base64: str = Field(..., min_length=1, description="Base64 payload or data URL")
    size: Optional[int] = Field(None, ge=0, description="Size in bytes (computed when omitted)")


class HistoryEntry(CamelModel):
    """Audit-log line appended on every status change or assignment."""
    id: str
    timestamp: int
    by: str
    action: str
    note: Optional[str] = None
    previous_status: Optional[ComplaintStatus] = None
    new_status: Optional[ComplaintStatus] = None


class Comment(CamelModel):
    id: str
    by: str
    text: str
    timestamp: int
    is_private: bool = Field(default=False, description="Admin-only comment")


class Reporter(CamelModel):
    name: str
    email: str
    phone: Optional[str] = None
    preferred_contact: ContactMethod = ContactMethod.EMAIL


class Complaint(CamelModel):
    """
    Full complaint record as stored.
    ID format: CT-YYYYMMDD-XXXX
    """
    id: str
    title: str
    description: str
    category: ComplaintCategory
    priority: Priority
    status: ComplaintStatus
    created_at: int
    updated_at: int
    location: Optional[str] = None
    reporter: Reporter
    assignee: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)
    history: List[HistoryEntry] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)
    tags: Optional[List[str]] = None


class ComplaintCreate(CamelModel):
    """
    Model for a new complaint (incoming POST request).
    These are the fields citizens provide on the submission form.
    """
    title: str = Field(..., min_length=10, max_length=100)
    description: str = Field(..., min_length=20, max_length=1000)
    category: ComplaintCategory
    priority: Priority
    location: Optional[str] = Field(None, max_length=200)
    reporter_name: str = Field(..., min_length=2, max_length=50)
    reporter_email: str
    reporter_phone: Optional[str] = None
    preferred_contact: ContactMethod = ContactMethod.EMAIL
    attachments: List[AttachmentUpload] = Field(default_factory=list)
    tags: Optional[List[str]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Overflowing garbage bins",
                "description": "The bins on Market Road have not been emptied for a week.",
                "category": "Sanitation",
                "priority": "Medium",
                "location": "Market Road, Ward 12",
                "reporterName": "Asha Verma",
                "reporterEmail": "asha@example.com",
                "reporterPhone": "+91 98765 43210",
                "preferredContact": "email",
            }
        }

    @field_validator("title", "description", "reporter_name")
    @classmethod
    def strip_required_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("location")
    @classmethod
    def blank_location_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("reporter_email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        value = value.strip()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please enter a valid email address")
        return value

    @field_validator("reporter_phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        value = value.strip()
        if not PHONE_PATTERN.match(value):
            raise ValueError("Please enter a valid phone number")
        if len(value) < 10:
            raise ValueError("Phone number must be at least 10 digits")
        return value


class StatusUpdateRequest(CamelModel):
    status: ComplaintStatus
    note: Optional[str] = Field(None, max_length=500)
    updated_by: str = Field(default="Admin", min_length=1, max_length=100)


class BulkStatusUpdateRequest(CamelModel):
    ids: List[str] = Field(..., min_length=1, description="Selected complaint IDs")
    status: ComplaintStatus
    note: Optional[str] = Field(None, max_length=500)
    updated_by: str = Field(default="Admin", min_length=1, max_length=100)


class BulkStatusUpdateResult(CamelModel):
    updated: int
    total: int
    failed: List[str] = Field(default_factory=list)
    message: str


class AssignRequest(CamelModel):
    assignee: str = Field(..., min_length=1, max_length=100)
    by: str = Field(default="Admin", min_length=1, max_length=100)


class CommentCreate(CamelModel):
    text: str = Field(..., min_length=1, max_length=1000)
    by: str = Field(default="Admin", min_length=1, max_length=100)
    is_private: bool = False


class ExportRequest(CamelModel):
    ids: List[str] = Field(..., min_length=1, description="Selected complaint IDs")


class ComplaintListResponse(CamelModel):
    complaints: List[Complaint]
    total: int
    page: int
    limit: int
    pages: int
