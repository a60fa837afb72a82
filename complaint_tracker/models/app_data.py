"""
Models for the stored application document and its settings.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from complaint_tracker.models.base import CamelModel
from complaint_tracker.models.complaint import Complaint


class UserRole(str, Enum):
    ADMIN = "admin"
    CITIZEN = "citizen"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class User(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole


class AppSettings(CamelModel):
    version: str
    last_backup: Optional[int] = None
    notifications: bool = True
    theme: Theme = Theme.SYSTEM


class SettingsUpdate(CamelModel):
    notifications: Optional[bool] = None
    theme: Optional[Theme] = None


class AppData(CamelModel):
    """The single document persisted under the storage key."""
    complaints: List[Complaint] = Field(default_factory=list)
    users: List[User] = Field(default_factory=list)
    settings: AppSettings
    last_modified: Optional[int] = None
    version: str


class StorageInfo(CamelModel):
    backend: str
    supported: bool
    used: int = 0
    available: int = 0
    used_formatted: Optional[str] = None
    available_formatted: Optional[str] = None
