"""
Department Service - scoped dashboards for the general admin, traffic and cyber-crime desks.

Each department sees only its own categories (the general desk sees all).
Summary figures cover the whole department scope; the listing honours the
caller's filters with the department's categories forced on top.
"""

import logging
from typing import Dict, List, Optional

from complaint_tracker.core.settings import settings
from complaint_tracker.models.complaint import ComplaintCategory, ComplaintStatus
from complaint_tracker.models.filters import ComplaintFilters, PaginationOptions
from complaint_tracker.services.complaint_service import ComplaintService, get_complaint_service
from complaint_tracker.utils.csv_export import export_filename, generate_csv
from complaint_tracker.utils.formatting import format_category_name

logger = logging.getLogger(__name__)


class Department:
    def __init__(self, slug: str, categories: Optional[List[ComplaintCategory]] = None, export_prefix: str = ""):
        self.slug = slug
        self.categories = categories or []
        self.export_prefix = export_prefix

    @property
    def name(self) -> str:
        return format_category_name(self.slug)

    @property
    def category_values(self) -> List[str]:
        return [c.value for c in self.categories]


DEPARTMENTS: Dict[str, Department] = {
    "general": Department("general"),
    "traffic": Department("traffic", [ComplaintCategory.TRAFFIC], export_prefix="traffic_"),
    "cyber-crime": Department("cyber-crime", [ComplaintCategory.CYBER_CRIME], export_prefix="cyber_crime_"),
}


def get_department(slug: str) -> Optional[Department]:
    return DEPARTMENTS.get((slug or "").lower())


class DepartmentService:
    """Service for department dashboards."""

    def __init__(self, complaint_service: Optional[ComplaintService] = None):
        self._complaint_service = complaint_service

    @property
    def complaints(self) -> ComplaintService:
        return self._complaint_service or get_complaint_service()

    def _scoped(self, department: Department) -> List[Dict]:
        all_complaints = self.complaints.data["complaints"]
        if not department.categories:
            return all_complaints
        return [c for c in all_complaints if c.get("category") in department.category_values]

    def get_summary_stats(self, department: Department) -> Dict:
        scoped = self._scoped(department)

        def count(status: ComplaintStatus) -> int:
            return sum(1 for c in scoped if c.get("status") == status.value)

        return {
            "total": len(scoped),
            "new": count(ComplaintStatus.NEW),
            "inReview": count(ComplaintStatus.IN_REVIEW),
            "resolved": count(ComplaintStatus.RESOLVED),
            "rejected": count(ComplaintStatus.REJECTED),
        }

    def get_dashboard(
        self,
        department: Department,
        filters: Optional[ComplaintFilters] = None,
        pagination: Optional[PaginationOptions] = None,
    ) -> Dict:
        filters = filters.model_copy() if filters else ComplaintFilters()
        if department.categories:
            filters.category = list(department.categories)
        pagination = pagination or PaginationOptions(limit=settings.DEFAULT_PAGE_SIZE)

        result = self.complaints.get_filtered_complaints(filters, pagination)
        return {
            "department": department.slug,
            "name": department.name,
            "summary": self.get_summary_stats(department),
            **result,
        }

    def bulk_update_status(
        self,
        department: Department,
        ids: List[str],
        new_status: ComplaintStatus,
        note: Optional[str] = None,
        updated_by: str = "Admin",
    ) -> Dict:
        return self.complaints.bulk_update_status(
            ids,
            new_status,
            note=note or f"Bulk status update via {department.name.lower()} dashboard",
            updated_by=updated_by,
            categories=department.category_values or None,
        )

    def export_csv(self, department: Department, ids: List[str]) -> Dict:
        """
        CSV of the selected complaints within the department scope.

        Returns:
            {"filename": ..., "content": ..., "count": ...}
        """
        selected = self.complaints.get_complaints_by_ids(ids, categories=department.category_values or None)
        logger.info(f"Exporting {len(selected)} complaint(s) for {department.slug}")
        return {
            "filename": export_filename(department.export_prefix),
            "content": generate_csv(selected),
            "count": len(selected),
        }


# Global service instance
_department_service = None


def get_department_service() -> DepartmentService:
    """Get or create DepartmentService singleton."""
    global _department_service
    if _department_service is None:
        _department_service = DepartmentService()
    return _department_service
