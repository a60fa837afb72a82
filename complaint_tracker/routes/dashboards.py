"""
Department dashboard routes - general, traffic and cyber-crime desks.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from complaint_tracker.models.analytics import DepartmentDashboard
from complaint_tracker.models.complaint import BulkStatusUpdateRequest, BulkStatusUpdateResult, ExportRequest
from complaint_tracker.models.filters import ComplaintFilters, PaginationOptions
from complaint_tracker.routes.admin import csv_response
from complaint_tracker.routes.dependencies import complaint_filters, pagination_options
from complaint_tracker.services.complaint_service import PersistenceError
from complaint_tracker.services.department_service import (
    DEPARTMENTS,
    Department,
    get_department,
    get_department_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboards", tags=["Dashboards"])


def resolve_department(department: str) -> Department:
    dept = get_department(department)
    if dept is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown department '{department}'. Available: {sorted(DEPARTMENTS)}",
        )
    return dept


@router.get("/{department}", response_model=DepartmentDashboard, response_model_exclude_none=True)
async def get_dashboard(
    dept: Department = Depends(resolve_department),
    filters: ComplaintFilters = Depends(complaint_filters),
    pagination: PaginationOptions = Depends(pagination_options),
):
    """
    Department dashboard.

    - summary: counts per status over the department's whole scope
    - complaints: the filtered page (category is forced to the department's)
    """
    return get_department_service().get_dashboard(dept, filters, pagination)


@router.post("/{department}/bulk-status", response_model=BulkStatusUpdateResult)
async def bulk_change_status(request: BulkStatusUpdateRequest, dept: Department = Depends(resolve_department)):
    """Bulk status change limited to complaints in the department's scope."""
    try:
        return get_department_service().bulk_update_status(
            dept,
            request.ids,
            request.status,
            note=request.note,
            updated_by=request.updated_by,
        )
    except PersistenceError as e:
        logger.error(f"Bulk update for {dept.slug} failed to persist: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/{department}/export")
async def export_selected(request: ExportRequest, dept: Department = Depends(resolve_department)):
    """CSV download of the selected complaints within the department's scope."""
    result = get_department_service().export_csv(dept, request.ids)
    return csv_response(result["content"], result["filename"])
