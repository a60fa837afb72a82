"""
Status Workflow Engine - complaint lifecycle rules and audit entries.

DESIGN PRINCIPLES:
- Open complaints (New, In Review) can move to any other state
- Closed complaints (Resolved, Rejected) can only be reopened to In Review
- Every status change produces a history entry
- Invalid transitions are rejected programmatically
"""

from typing import Dict, List, Optional
import logging

from complaint_tracker.models.complaint import ComplaintStatus
from complaint_tracker.utils.identifiers import new_entry_id
from complaint_tracker.utils.timestamps import now_ms

logger = logging.getLogger(__name__)


class StatusWorkflowEngine:
    """
    State machine for complaint status transitions.

    Rules:
    - Same-status updates are allowed and still logged
    - Closed complaints must be reopened before being closed differently
    """

    # Allowed transitions map: {from_status: [to_status, ...]}
    ALLOWED_TRANSITIONS: Dict[ComplaintStatus, List[ComplaintStatus]] = {
        ComplaintStatus.NEW: [ComplaintStatus.IN_REVIEW, ComplaintStatus.RESOLVED, ComplaintStatus.REJECTED],
        ComplaintStatus.IN_REVIEW: [ComplaintStatus.NEW, ComplaintStatus.RESOLVED, ComplaintStatus.REJECTED],
        ComplaintStatus.RESOLVED: [ComplaintStatus.IN_REVIEW],
        ComplaintStatus.REJECTED: [ComplaintStatus.IN_REVIEW],
    }

    @classmethod
    def is_valid_transition(cls, from_status: str, to_status: str) -> bool:
        """
        Check if a status transition is valid.

        Args:
            from_status: Current status
            to_status: Desired new status

        Returns:
            True if transition is allowed, False otherwise
        """
        try:
            from_enum = ComplaintStatus(from_status)
            to_enum = ComplaintStatus(to_status)
        except ValueError:
            return False

        if from_enum == to_enum:
            return True

        return to_enum in cls.ALLOWED_TRANSITIONS.get(from_enum, [])

    @classmethod
    def get_allowed_transitions(cls, current_status: str) -> List[str]:
        try:
            current_enum = ComplaintStatus(current_status)
        except ValueError:
            return []
        return [status.value for status in cls.ALLOWED_TRANSITIONS.get(current_enum, [])]

    @classmethod
    def create_history_entry(
        cls,
        action: str,
        by: str,
        previous_status: Optional[str] = None,
        new_status: Optional[str] = None,
        note: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> Dict:
        """
        Create a history entry for the audit trail.

        Optional keys are omitted rather than stored as null, matching stored documents.
        """
        timestamp = timestamp if timestamp is not None else now_ms()
        entry = {
            "id": new_entry_id("hist", timestamp),
            "timestamp": timestamp,
            "by": by,
            "action": action,
        }
        if note:
            entry["note"] = note
        if previous_status:
            entry["previousStatus"] = previous_status
        if new_status:
            entry["newStatus"] = new_status
        return entry

    @classmethod
    def validate_and_transition(
        cls,
        current_status: str,
        new_status: str,
        changed_by: str,
        note: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> Dict:
        """
        Validate transition and create the "Status updated" history entry.

        Raises:
            ValueError: If transition is invalid
        """
        if not cls.is_valid_transition(current_status, new_status):
            allowed = cls.get_allowed_transitions(current_status)
            raise ValueError(
                f"Invalid status transition: {current_status} → {new_status}. "
                f"Allowed transitions from {current_status}: {allowed}"
            )

        return cls.create_history_entry(
            action="Status updated",
            by=changed_by,
            previous_status=current_status,
            new_status=new_status,
            note=note,
            timestamp=timestamp,
        )
