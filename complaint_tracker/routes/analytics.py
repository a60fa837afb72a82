"""
Analytics routes - outcome summary across all complaints.
"""

from fastapi import APIRouter

from complaint_tracker.models.analytics import AnalyticsSummary
from complaint_tracker.services.complaint_service import get_complaint_service

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("", response_model=AnalyticsSummary)
async def get_analytics():
    """
    Complaint analytics.

    Includes:
    - Totals per status, category and priority
    - Complaints created in the last 30 days
    - Average resolution time (days) and resolution rate (%)
    - Chart series for status and category breakdowns
    """
    return get_complaint_service().get_analytics_data()
