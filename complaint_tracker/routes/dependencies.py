"""
Shared query-string dependencies for complaint listings.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException, Query, status

from complaint_tracker.core.settings import settings
from complaint_tracker.models.complaint import ComplaintCategory, ComplaintStatus, Priority
from complaint_tracker.models.filters import (
    ComplaintFilters,
    DateRange,
    PaginationOptions,
    SortField,
    SortOrder,
)
from complaint_tracker.utils.timestamps import to_ms


def complaint_filters(
    status_filter: Optional[List[ComplaintStatus]] = Query(None, alias="status", description="Repeat to match several"),
    category: Optional[List[ComplaintCategory]] = Query(None),
    priority: Optional[List[Priority]] = Query(None),
    assignee: Optional[List[str]] = Query(None),
    search: Optional[str] = Query(None, max_length=200, description="Matches title, description, ID or reporter name"),
    created_from: Optional[datetime] = Query(None, description="Inclusive lower bound on creation time"),
    created_to: Optional[datetime] = Query(None, description="Inclusive upper bound on creation time"),
) -> ComplaintFilters:
    date_range = None
    if created_from or created_to:
        start = to_ms(created_from) if created_from else 0
        end = to_ms(created_to) if created_to else 2 ** 53
        if end < start:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="created_to must not be before created_from",
            )
        date_range = DateRange(start=start, end=end)

    return ComplaintFilters(
        status=status_filter,
        category=category,
        priority=priority,
        assignee=assignee,
        search_query=search.strip() if search and search.strip() else None,
        date_range=date_range,
    )


def pagination_options(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    sort_by: SortField = Query(SortField.CREATED_AT),
    sort_order: SortOrder = Query(SortOrder.DESC),
) -> PaginationOptions:
    return PaginationOptions(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)
