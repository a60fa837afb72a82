"""
Complaint service - Business logic for citizen complaint handling.
Holds the loaded application document and persists every change through the storage service.

DESIGN NOTE:
- The stored document is the system-of-record; this service keeps a working copy
- A change written by another process is picked up on the next access (sync)
- A failed write discards the working copy so memory never drifts from storage
- Unknown complaint IDs return None; rule violations raise ValueError
"""

import copy
import logging
from typing import Dict, Iterable, List, Optional

from complaint_tracker.models.app_data import SettingsUpdate
from complaint_tracker.models.complaint import ComplaintCreate, ComplaintStatus
from complaint_tracker.models.filters import ComplaintFilters, PaginationOptions
from complaint_tracker.services.analytics_service import get_analytics_service
from complaint_tracker.services.complaint_query import query_complaints
from complaint_tracker.services.status_workflow import StatusWorkflowEngine
from complaint_tracker.services.storage_service import StorageService, get_storage_service
from complaint_tracker.utils.attachments import prepare_attachments
from complaint_tracker.utils.identifiers import generate_complaint_id, new_entry_id
from complaint_tracker.utils.security import mask_email, mask_phone
from complaint_tracker.utils.timestamps import now_ms

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """The change could not be written to storage."""


class ComplaintService:
    """CRUD, triage, analytics and data management for complaints."""

    def __init__(self, storage: Optional[StorageService] = None):
        self.storage = storage or get_storage_service()
        self._data: Optional[Dict] = None
        self._raw: Optional[str] = None

    # ------------------------------------------------------------------
    # Document access
    # ------------------------------------------------------------------

    def sync(self) -> bool:
        """
        Reload the document if the stored payload changed since it was last read or written.

        Returns:
            True if the working copy was (re)loaded
        """
        raw = self.storage.read_raw()
        if self._data is not None and raw == self._raw:
            return False

        if self._data is not None:
            logger.info("Stored data changed outside this service, reloading")
        self._data = self.storage.load()
        self._raw = self.storage.read_raw()
        return True

    @property
    def data(self) -> Dict:
        self.sync()
        return self._data

    def _commit(self) -> None:
        """
        Persist the working copy.

        Raises:
            PersistenceError: If the write failed (the working copy is dropped)
        """
        if not self.storage.save(self._data):
            self._data = None
            self._raw = None
            raise PersistenceError("Failed to save data to storage")
        self._raw = self.storage.serialize(self._data)

    def _find(self, complaint_id: str) -> Optional[Dict]:
        complaint_id = (complaint_id or "").strip()
        if not complaint_id:
            return None
        for complaint in self.data["complaints"]:
            if complaint.get("id") == complaint_id:
                return complaint
        return None

    # ------------------------------------------------------------------
    # Complaints
    # ------------------------------------------------------------------

    def create_complaint(self, payload: ComplaintCreate) -> Dict:
        """
        Create a new complaint with status New and a "Complaint submitted" history entry.

        Raises:
            ValueError: If an attachment is rejected
            PersistenceError: If the complaint could not be saved
        """
        now = now_ms()
        attachments = prepare_attachments(payload.attachments, now)
        data = self.data

        complaint_id = generate_complaint_id(existing=(c["id"] for c in data["complaints"]))
        status = ComplaintStatus.NEW.value

        reporter = {
            "name": payload.reporter_name,
            "email": payload.reporter_email,
            "preferredContact": payload.preferred_contact.value,
        }
        if payload.reporter_phone:
            reporter["phone"] = payload.reporter_phone

        complaint = {
            "id": complaint_id,
            "title": payload.title,
            "description": payload.description,
            "category": payload.category.value,
            "priority": payload.priority.value,
            "status": status,
            "createdAt": now,
            "updatedAt": now,
            "reporter": reporter,
            "attachments": attachments,
            "history": [
                StatusWorkflowEngine.create_history_entry(
                    action="Complaint submitted",
                    by="System",
                    new_status=status,
                    timestamp=now,
                )
            ],
            "comments": [],
        }
        if payload.location:
            complaint["location"] = payload.location
        if payload.tags:
            complaint["tags"] = [tag.strip() for tag in payload.tags if tag.strip()]

        data["complaints"].append(complaint)
        self._commit()

        logger.info(f"Complaint submitted with ID: {complaint_id}")
        return complaint

    def get_complaint_by_id(self, complaint_id: str) -> Optional[Dict]:
        return self._find(complaint_id)

    def get_public_complaint(self, complaint_id: str) -> Optional[Dict]:
        """
        Citizen tracking view: private comments removed, reporter contact masked.
        """
        complaint = self._find(complaint_id)
        if complaint is None:
            return None

        public = copy.deepcopy(complaint)
        public["comments"] = [c for c in public.get("comments", []) if not c.get("isPrivate")]
        reporter = public.get("reporter", {})
        reporter["email"] = mask_email(reporter.get("email")) or ""
        if reporter.get("phone"):
            reporter["phone"] = mask_phone(reporter["phone"])
        return public

    def get_complaints_by_ids(self, ids: Iterable[str], categories: Optional[List[str]] = None) -> List[Dict]:
        """Complaints whose ID is in `ids`, in stored order, optionally limited to categories."""
        wanted = {i.strip() for i in ids}
        return [
            c for c in self.data["complaints"]
            if c["id"] in wanted and (not categories or c.get("category") in categories)
        ]

    def _apply_status(
        self,
        complaint: Dict,
        new_status: str,
        note: Optional[str],
        updated_by: str,
        now: int,
    ) -> None:
        entry = StatusWorkflowEngine.validate_and_transition(
            current_status=complaint["status"],
            new_status=new_status,
            changed_by=updated_by,
            note=note,
            timestamp=now,
        )
        complaint["status"] = new_status
        complaint["updatedAt"] = now
        complaint.setdefault("history", []).append(entry)

    def update_complaint_status(
        self,
        complaint_id: str,
        new_status: ComplaintStatus,
        note: Optional[str] = None,
        updated_by: str = "Admin",
    ) -> Optional[Dict]:
        """
        Change a complaint's status and append a history entry.

        Returns:
            The updated complaint, or None if the ID is unknown

        Raises:
            ValueError: If the transition is not allowed
            PersistenceError: If the change could not be saved
        """
        complaint = self._find(complaint_id)
        if complaint is None:
            return None

        new_status = ComplaintStatus(new_status).value
        previous = complaint["status"]
        self._apply_status(complaint, new_status, note, updated_by, now_ms())
        self._commit()

        logger.info(f"Complaint {complaint['id']} status changed {previous} → {new_status} by {updated_by}")
        return complaint

    def bulk_update_status(
        self,
        ids: List[str],
        new_status: ComplaintStatus,
        note: Optional[str] = None,
        updated_by: str = "Admin",
        categories: Optional[List[str]] = None,
    ) -> Dict:
        """
        Apply the same status change to several complaints and save once.

        IDs that are unknown, outside `categories`, or whose transition is not
        allowed are reported in "failed".
        """
        new_status = ComplaintStatus(new_status).value
        unique_ids = list(dict.fromkeys(i.strip() for i in ids if i and i.strip()))
        now = now_ms()
        updated = 0
        failed = []

        # Single snapshot, no reload between updates
        by_id = {c.get("id"): c for c in self.data["complaints"]}

        for complaint_id in unique_ids:
            complaint = by_id.get(complaint_id)
            if complaint is None or (categories and complaint.get("category") not in categories):
                failed.append(complaint_id)
                continue
            try:
                self._apply_status(complaint, new_status, note, updated_by, now)
                updated += 1
            except ValueError as e:
                logger.warning(f"Bulk update skipped {complaint_id}: {e}")
                failed.append(complaint_id)

        if updated:
            self._commit()

        return {
            "updated": updated,
            "total": len(unique_ids),
            "failed": failed,
            "message": f"Updated {updated} of {len(unique_ids)} complaints to {new_status}",
        }

    def assign_complaint(self, complaint_id: str, assignee: str, by: str = "Admin") -> Optional[Dict]:
        complaint = self._find(complaint_id)
        if complaint is None:
            return None

        now = now_ms()
        assignee = assignee.strip()
        complaint["assignee"] = assignee
        complaint["updatedAt"] = now
        complaint.setdefault("history", []).append(
            StatusWorkflowEngine.create_history_entry(
                action="Assigned",
                by=by,
                note=f"Assigned to {assignee}",
                timestamp=now,
            )
        )
        self._commit()
        return complaint

    def add_comment(self, complaint_id: str, text: str, by: str, is_private: bool = False) -> Optional[Dict]:
        """
        Append a comment. Private comments are visible to admins only.

        Returns:
            The new comment, or None if the ID is unknown
        """
        complaint = self._find(complaint_id)
        if complaint is None:
            return None

        now = now_ms()
        comment = {
            "id": new_entry_id("comm", now),
            "by": by,
            "text": text,
            "timestamp": now,
            "isPrivate": is_private,
        }
        complaint.setdefault("comments", []).append(comment)
        complaint["updatedAt"] = now
        self._commit()
        return comment

    def get_filtered_complaints(
        self,
        filters: Optional[ComplaintFilters] = None,
        pagination: Optional[PaginationOptions] = None,
    ) -> Dict:
        return query_complaints(self.data["complaints"], filters, pagination)

    def get_analytics_data(self) -> Dict:
        return get_analytics_service().get_analytics(self.data["complaints"])

    # ------------------------------------------------------------------
    # Users and settings
    # ------------------------------------------------------------------

    def list_users(self, role: Optional[str] = None) -> List[Dict]:
        users = self.data.get("users", [])
        if role:
            users = [u for u in users if u.get("role") == role]
        return users

    def get_settings(self) -> Dict:
        return self.data["settings"]

    def update_settings(self, update: SettingsUpdate) -> Dict:
        settings_block = self.data["settings"]
        if update.notifications is not None:
            settings_block["notifications"] = update.notifications
        if update.theme is not None:
            settings_block["theme"] = update.theme.value
        self._commit()
        return settings_block

    # ------------------------------------------------------------------
    # Data management
    # ------------------------------------------------------------------

    def reset_data(self) -> bool:
        """Clear storage and reload (which reseeds the sample data)."""
        success = self.storage.clear()
        if success:
            self._data = None
            self.sync()
            logger.info("All data has been cleared and reset to defaults")
        return success

    def export_data(self) -> str:
        """JSON backup of the whole document; records the backup time in settings."""
        self.data["settings"]["lastBackup"] = now_ms()
        self._commit()
        return self.storage.export_data()

    def import_data(self, json_data: str) -> bool:
        """
        Replace all data with a backup.

        Raises:
            ValueError: If the backup is invalid
        """
        success = self.storage.import_data(json_data)
        if success:
            self._data = None
            self.sync()
            logger.info("Data has been imported successfully")
        else:
            logger.error("Failed to import data")
        return success


# Global service instance
_complaint_service: Optional[ComplaintService] = None


def get_complaint_service() -> ComplaintService:
    """Get or create ComplaintService singleton."""
    global _complaint_service
    if _complaint_service is None:
        _complaint_service = ComplaintService()
    return _complaint_service


def set_complaint_service(service: Optional[ComplaintService]) -> None:
    global _complaint_service
    _complaint_service = service
