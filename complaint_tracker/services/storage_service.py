"""
Storage service - the versioned application document on top of a key-value backend.

DESIGN NOTE:
- The whole application state is ONE JSON document under ONE key
- The document carries a version; a mismatch discards it and reseeds sample data
- Unreadable or invalid documents are also replaced by sample data
- Write failures are reported as False, never raised to callers
"""

import json
import logging
from typing import Dict, Optional

from pydantic import ValidationError

from complaint_tracker.core.settings import settings
from complaint_tracker.models.app_data import AppData
from complaint_tracker.services.sample_data import STORAGE_VERSION, generate_sample_data
from complaint_tracker.services.storage import StorageBackend, StorageError, get_storage_backend
from complaint_tracker.utils.formatting import format_bytes
from complaint_tracker.utils.timestamps import now_ms

logger = logging.getLogger(__name__)


def validate_document(data: Dict) -> None:
    """
    Check every record of the document against the AppData model.

    The document itself stays a plain dict; only the check goes through pydantic.

    Raises:
        ValueError: Naming the first offending field
    """
    try:
        AppData.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ValueError(
            f"Invalid data format: {location}: {first['msg']} ({e.error_count()} error(s))"
        )


class StorageService:
    """Read/write/version the application document."""

    def __init__(
        self,
        backend: Optional[StorageBackend] = None,
        key: Optional[str] = None,
        quota_bytes: Optional[int] = None,
    ):
        self.backend = backend or get_storage_backend()
        self.key = key or settings.STORAGE_KEY
        self.quota_bytes = quota_bytes if quota_bytes is not None else settings.STORAGE_QUOTA_BYTES

    @staticmethod
    def serialize(data: Dict) -> str:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))

    def save(self, data: Dict) -> bool:
        """
        Persist the document, stamping lastModified.

        Returns:
            True on success, False if the backend is unavailable, the payload
            exceeds the quota, or the write failed
        """
        if not self.backend.is_available():
            logger.warning(f"Storage backend '{self.backend.name}' not available, data will not persist")
            return False

        data["lastModified"] = now_ms()
        try:
            payload = self.serialize(data)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize application data: {e}")
            return False

        size = len(payload.encode("utf-8"))
        if size > self.quota_bytes:
            logger.error(
                f"Refusing to save {format_bytes(size)}: storage quota is {format_bytes(self.quota_bytes)}"
            )
            return False

        try:
            self.backend.set(self.key, payload)
            return True
        except StorageError as e:
            logger.error(f"Failed to save to storage: {e}")
            return False

    def _reseed(self, reason: str) -> Dict:
        logger.info(f"{reason}, initializing with sample data")
        sample = generate_sample_data()
        self.save(sample)
        return sample

    def load(self) -> Dict:
        """
        Load the document, falling back to sample data.

        - Backend unavailable: sample data (not persisted)
        - Nothing stored yet: sample data, persisted
        - Version mismatch / unreadable / invalid: sample data, persisted
        """
        if not self.backend.is_available():
            logger.warning(f"Storage backend '{self.backend.name}' not available, using sample data")
            return generate_sample_data()

        try:
            raw = self.backend.get(self.key)
        except StorageError as e:
            logger.error(f"Failed to load from storage: {e}")
            return self._reseed("Stored data could not be read")

        if not raw:
            return self._reseed("No existing data found")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Stored data is not valid JSON: {e}")
            return self._reseed("Stored data is corrupt")

        if not isinstance(data, dict) or data.get("version") != STORAGE_VERSION:
            return self._reseed("Stored data has an unsupported version")

        if not isinstance(data.get("complaints"), list) or not isinstance(data.get("users"), list):
            logger.error("Stored data is missing the complaints or users array")
            return self._reseed("Stored data is invalid")

        try:
            validate_document(data)
        except ValueError as e:
            logger.error(f"Stored data failed validation: {e}")
            return self._reseed("Stored data is invalid")

        return data

    def read_raw(self) -> Optional[str]:
        """Raw stored payload, or None when absent or unreadable."""
        try:
            return self.backend.get(self.key)
        except StorageError as e:
            logger.warning(f"Failed to read raw storage payload: {e}")
            return None

    def clear(self) -> bool:
        try:
            if self.backend.is_available():
                self.backend.remove(self.key)
            return True
        except StorageError as e:
            logger.error(f"Failed to clear storage: {e}")
            return False

    def export_data(self) -> str:
        """Pretty-printed JSON backup of the current document."""
        return json.dumps(self.load(), ensure_ascii=False, indent=2)

    @staticmethod
    def parse_import(json_data: str) -> Dict:
        """
        Parse and validate a backup.

        Raises:
            ValueError: If the backup is not JSON, lacks the complaints/users arrays,
                holds duplicate complaint IDs, or has a malformed record
        """
        try:
            data = json.loads(json_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid data format: not valid JSON ({e})")

        if not isinstance(data, dict):
            raise ValueError("Invalid data format: expected a JSON object")
        if not isinstance(data.get("complaints"), list):
            raise ValueError("Invalid data format: missing complaints array")
        if not isinstance(data.get("users"), list):
            raise ValueError("Invalid data format: missing users array")

        seen = set()
        for complaint in data["complaints"]:
            complaint_id = complaint.get("id") if isinstance(complaint, dict) else None
            if not complaint_id:
                raise ValueError("Invalid data format: every complaint needs an id")
            if complaint_id in seen:
                raise ValueError(f"Invalid data format: duplicate complaint id {complaint_id}")
            seen.add(complaint_id)

        data["version"] = STORAGE_VERSION
        settings_block = data.get("settings") if isinstance(data.get("settings"), dict) else {}
        data["settings"] = {**settings_block, "version": STORAGE_VERSION}
        validate_document(data)
        return data

    def import_data(self, json_data: str) -> bool:
        """
        Replace the stored document with a backup.

        Raises:
            ValueError: If the backup is invalid (see parse_import)

        Returns:
            True if the backup was saved
        """
        data = self.parse_import(json_data)
        return self.save(data)

    def get_storage_info(self) -> Dict:
        if not self.backend.is_available():
            return {"backend": self.backend.name, "used": 0, "available": 0, "supported": False}

        raw = self.read_raw()
        used = len(raw.encode("utf-8")) if raw else 0
        available = self.quota_bytes - used
        return {
            "backend": self.backend.name,
            "used": used,
            "available": available,
            "supported": True,
            "usedFormatted": format_bytes(used),
            "availableFormatted": format_bytes(available),
        }


# Global service instance
_storage_service: Optional[StorageService] = None


def get_storage_service() -> StorageService:
    """Get or create StorageService singleton."""
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService()
    return _storage_service


def set_storage_service(service: Optional[StorageService]) -> None:
    global _storage_service
    _storage_service = service
