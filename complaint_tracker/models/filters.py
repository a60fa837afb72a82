"""
Filter and pagination options for complaint listings.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field, model_validator

from complaint_tracker.models.base import CamelModel
from complaint_tracker.models.complaint import ComplaintCategory, ComplaintStatus, Priority


class SortField(str, Enum):
    """Complaint fields a listing can be sorted by (stored camelCase keys)."""
    ID = "id"
    TITLE = "title"
    CATEGORY = "category"
    PRIORITY = "priority"
    STATUS = "status"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    LOCATION = "location"
    ASSIGNEE = "assignee"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class DateRange(CamelModel):
    """Inclusive createdAt window, epoch milliseconds."""
    start: int
    end: int

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError("dateRange end must not be before start")
        return self


class ComplaintFilters(CamelModel):
    status: Optional[List[ComplaintStatus]] = None
    category: Optional[List[ComplaintCategory]] = None
    priority: Optional[List[Priority]] = None
    assignee: Optional[List[str]] = None
    date_range: Optional[DateRange] = None
    search_query: Optional[str] = None


class PaginationOptions(CamelModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
