"""
Filter / sort / paginate over the in-memory complaint array.
"""

import math
from typing import Any, Dict, List, Optional, Tuple

from complaint_tracker.models.complaint import PRIORITY_RANK, STATUS_ORDER
from complaint_tracker.models.filters import ComplaintFilters, PaginationOptions, SortField, SortOrder


def _values(items) -> List[str]:
    return [getattr(item, "value", item) for item in items]


def matches_search(complaint: Dict, query: str) -> bool:
    """Case-insensitive substring match over title, description, id and reporter name."""
    query = query.lower()
    reporter_name = (complaint.get("reporter") or {}).get("name", "")
    return any(
        query in (field or "").lower()
        for field in (complaint.get("title"), complaint.get("description"), complaint.get("id"), reporter_name)
    )


def apply_filters(complaints: List[Dict], filters: Optional[ComplaintFilters]) -> List[Dict]:
    """All filters combine with AND. Empty lists are ignored."""
    filtered = list(complaints)
    if filters is None:
        return filtered

    if filters.status:
        wanted = _values(filters.status)
        filtered = [c for c in filtered if c.get("status") in wanted]

    if filters.category:
        wanted = _values(filters.category)
        filtered = [c for c in filtered if c.get("category") in wanted]

    if filters.priority:
        wanted = _values(filters.priority)
        filtered = [c for c in filtered if c.get("priority") in wanted]

    if filters.assignee:
        filtered = [c for c in filtered if c.get("assignee") and c["assignee"] in filters.assignee]

    if filters.search_query and filters.search_query.strip():
        query = filters.search_query.strip()
        filtered = [c for c in filtered if matches_search(c, query)]

    if filters.date_range:
        start, end = filters.date_range.start, filters.date_range.end
        filtered = [c for c in filtered if start <= c.get("createdAt", 0) <= end]

    return filtered


def _sort_value(complaint: Dict, sort_by: SortField) -> Any:
    value = complaint.get(sort_by.value)
    if value is None:
        return None
    if sort_by == SortField.PRIORITY:
        return PRIORITY_RANK.get(value, len(PRIORITY_RANK))
    if sort_by == SortField.STATUS:
        return STATUS_ORDER.get(value, len(STATUS_ORDER))
    return value


def sort_complaints(complaints: List[Dict], sort_by: SortField, sort_order: SortOrder) -> List[Dict]:
    """
    Stable sort by one field. Priority and status sort by rank, not alphabetically.
    Complaints without a value for the field always come last.
    """
    present = [c for c in complaints if _sort_value(c, sort_by) is not None]
    missing = [c for c in complaints if _sort_value(c, sort_by) is None]
    present.sort(key=lambda c: _sort_value(c, sort_by), reverse=sort_order == SortOrder.DESC)
    return present + missing


def paginate(complaints: List[Dict], page: int, limit: int) -> Tuple[List[Dict], int]:
    """Return the requested 1-based page and the total page count."""
    start = (page - 1) * limit
    pages = math.ceil(len(complaints) / limit) if limit else 0
    return complaints[start:start + limit], pages


def query_complaints(
    complaints: List[Dict],
    filters: Optional[ComplaintFilters] = None,
    pagination: Optional[PaginationOptions] = None,
) -> Dict:
    """
    Filter, then (when pagination is given) sort and slice.

    Returns:
        {"complaints": [...], "total": <matches before slicing>}
        plus "page", "limit" and "pages" when paginated
    """
    filtered = apply_filters(complaints, filters)

    if pagination is None:
        return {"complaints": filtered, "total": len(filtered)}

    ordered = sort_complaints(filtered, pagination.sort_by, pagination.sort_order)
    page_items, pages = paginate(ordered, pagination.page, pagination.limit)
    return {
        "complaints": page_items,
        "total": len(filtered),
        "page": pagination.page,
        "limit": pagination.limit,
        "pages": pages,
    }
