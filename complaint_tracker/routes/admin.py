"""
Admin endpoints - triage layer for complaint handlers.

SCOPE OF ADMIN:
✅ List, search, filter and sort all complaints
✅ Change complaint status (single and bulk), with history entries
✅ Assign complaints to staff
✅ Add public or private comments
✅ Export selected complaints as CSV

❌ NOT edit complaint content submitted by citizens
❌ NOT delete individual complaints
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from complaint_tracker.models.app_data import User, UserRole
from complaint_tracker.models.complaint import (
    AssignRequest,
    BulkStatusUpdateRequest,
    BulkStatusUpdateResult,
    Comment,
    CommentCreate,
    Complaint,
    ComplaintListResponse,
    ExportRequest,
    StatusUpdateRequest,
)
from complaint_tracker.models.filters import ComplaintFilters, PaginationOptions
from complaint_tracker.routes.dependencies import complaint_filters, pagination_options
from complaint_tracker.services.complaint_service import PersistenceError, get_complaint_service
from complaint_tracker.utils.csv_export import export_filename, generate_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def _not_found(complaint_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Complaint {complaint_id} not found")


def _save_failed(e: PersistenceError) -> HTTPException:
    logger.error(f"Admin action failed to persist: {e}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/complaints", response_model=ComplaintListResponse, response_model_exclude_none=True)
async def list_complaints(
    filters: ComplaintFilters = Depends(complaint_filters),
    pagination: PaginationOptions = Depends(pagination_options),
):
    """
    Filtered, sorted and paginated complaint listing.

    `total` counts all matches; `complaints` holds only the requested page.
    """
    return get_complaint_service().get_filtered_complaints(filters, pagination)


@router.get("/complaints/{complaint_id}", response_model=Complaint, response_model_exclude_none=True)
async def get_complaint(complaint_id: str):
    """Full complaint including private comments and reporter contact details."""
    complaint = get_complaint_service().get_complaint_by_id(complaint_id)
    if complaint is None:
        raise _not_found(complaint_id)
    return complaint


@router.patch("/complaints/{complaint_id}/status", response_model=Complaint, response_model_exclude_none=True)
async def change_status(complaint_id: str, request: StatusUpdateRequest):
    """
    Change complaint status.

    **Rules:**
    - New / In Review can move to any other status
    - Resolved / Rejected can only be reopened to In Review
    - Every change appends a history entry with previous and new status

    Raises:
        404: Complaint not found
        400: Transition not allowed
    """
    try:
        complaint = get_complaint_service().update_complaint_status(
            complaint_id,
            request.status,
            note=request.note or "Status updated via admin dashboard",
            updated_by=request.updated_by,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError as e:
        raise _save_failed(e)

    if complaint is None:
        raise _not_found(complaint_id)
    return complaint


@router.post("/complaints/bulk-status", response_model=BulkStatusUpdateResult)
async def bulk_change_status(request: BulkStatusUpdateRequest):
    """Apply one status change to all selected complaints; reports how many succeeded."""
    try:
        return get_complaint_service().bulk_update_status(
            request.ids,
            request.status,
            note=request.note or "Bulk status update via admin dashboard",
            updated_by=request.updated_by,
        )
    except PersistenceError as e:
        raise _save_failed(e)


@router.patch("/complaints/{complaint_id}/assignee", response_model=Complaint, response_model_exclude_none=True)
async def assign_complaint(complaint_id: str, request: AssignRequest):
    try:
        complaint = get_complaint_service().assign_complaint(complaint_id, request.assignee, by=request.by)
    except PersistenceError as e:
        raise _save_failed(e)

    if complaint is None:
        raise _not_found(complaint_id)
    return complaint


@router.post(
    "/complaints/{complaint_id}/comments",
    status_code=status.HTTP_201_CREATED,
    response_model=Comment,
)
async def add_comment(complaint_id: str, request: CommentCreate):
    """Add a comment. Private comments never appear on the citizen tracking view."""
    try:
        comment = get_complaint_service().add_comment(
            complaint_id,
            request.text,
            by=request.by,
            is_private=request.is_private,
        )
    except PersistenceError as e:
        raise _save_failed(e)

    if comment is None:
        raise _not_found(complaint_id)
    return comment


@router.post("/complaints/export")
async def export_selected(request: ExportRequest):
    """Download the selected complaints as CSV."""
    selected = get_complaint_service().get_complaints_by_ids(request.ids)
    logger.info(f"Exporting {len(selected)} of {len(request.ids)} selected complaint(s)")
    return csv_response(generate_csv(selected), export_filename())


@router.get("/users", response_model=List[User])
async def list_users(role: Optional[UserRole] = Query(UserRole.ADMIN)):
    return get_complaint_service().list_users(role.value if role else None)
