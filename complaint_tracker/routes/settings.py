"""
Settings routes - application preferences and data management (backup, restore, reset).
"""

import json
import logging

from fastapi import APIRouter, Body, HTTPException, Response, status

from complaint_tracker.models.app_data import AppSettings, SettingsUpdate, StorageInfo
from complaint_tracker.models.base import BaseResponse
from complaint_tracker.services.complaint_service import PersistenceError, get_complaint_service
from complaint_tracker.utils.timestamps import today_iso_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=AppSettings, response_model_exclude_none=True)
async def get_settings():
    return get_complaint_service().get_settings()


@router.patch("", response_model=AppSettings, response_model_exclude_none=True)
async def update_settings(update: SettingsUpdate):
    try:
        return get_complaint_service().update_settings(update)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/export")
async def export_data():
    """Download a JSON backup of all data."""
    try:
        content = get_complaint_service().export_data()
    except PersistenceError as e:
        logger.error(f"Export failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to export data")

    filename = f"complaints_backup_{today_iso_date()}.json"
    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=BaseResponse)
async def import_data(backup: dict = Body(..., description="A backup produced by /settings/export")):
    """
    Restore a JSON backup, replacing all current data.

    The backup must contain `complaints` and `users` arrays; its version is
    brought up to the current storage version.
    """
    try:
        success = get_complaint_service().import_data(json.dumps(backup))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not success:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to import data. Please check the file format.",
        )
    return BaseResponse(message="Data has been imported successfully")


@router.post("/reset", response_model=BaseResponse)
async def reset_data():
    """Delete all data and reseed the sample complaints. Cannot be undone."""
    if not get_complaint_service().reset_data():
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to reset data")
    return BaseResponse(message="All data has been cleared and reset to defaults")


@router.get("/storage", response_model=StorageInfo, response_model_exclude_none=True)
async def storage_info():
    """Storage usage against the configured quota."""
    return get_complaint_service().storage.get_storage_info()
