"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException

from complaint_tracker.core.settings import settings
from complaint_tracker.services.complaint_service import get_complaint_service

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/storage")
async def storage_health():
    """
    Storage backend check.
    Verifies the configured backend can be read and written.
    """
    storage = get_complaint_service().storage
    if not storage.backend.is_available():
        raise HTTPException(
            status_code=503,
            detail=f"Storage backend '{storage.backend.name}' is not available",
        )

    return {
        "status": "healthy",
        "backend": storage.backend.describe(),
        "key": storage.key,
        "has_data": storage.read_raw() is not None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
