"""
Complaint endpoints for citizens - submission and tracking.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from complaint_tracker.models.complaint import Complaint, ComplaintCreate
from complaint_tracker.services.complaint_service import PersistenceError, get_complaint_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Complaint, response_model_exclude_none=True)
async def submit_complaint(payload: ComplaintCreate):
    """
    Submit a new citizen complaint.

    This endpoint:
    1. Validates the form data and attachments
    2. Assigns a tracking ID (CT-YYYYMMDD-XXXX)
    3. Stores the complaint with status New and an initial history entry

    Returns the created complaint; its ID is what citizens use to track it.
    """
    logger.info(f"POST /complaints - category={payload.category.value}, priority={payload.priority.value}")
    try:
        return get_complaint_service().create_complaint(payload)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError as e:
        logger.error(f"POST /complaints - {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{complaint_id}", response_model=Complaint, response_model_exclude_none=True)
async def track_complaint(complaint_id: str):
    """
    Track a complaint by its ID.

    Private (admin-only) comments are hidden and reporter contact details are masked.
    """
    if not complaint_id.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please enter a complaint ID to search.")

    complaint = get_complaint_service().get_public_complaint(complaint_id)
    if complaint is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'No complaint found with ID "{complaint_id.strip()}".',
        )
    return complaint
