"""
Analytics and dashboard response models.
"""

from typing import Dict, List

from pydantic import Field

from complaint_tracker.models.base import CamelModel
from complaint_tracker.models.complaint import Complaint


class ChartDatum(CamelModel):
    name: str
    value: int


class AnalyticsSummary(CamelModel):
    total: int
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_priority: Dict[str, int] = Field(default_factory=dict)
    recent: int = Field(default=0, description="Complaints created in the last 30 days")
    avg_resolution_time: int = Field(default=0, description="Average days from creation to closure")
    resolution_rate: float = Field(default=0.0, description="Resolved share of all complaints, percent")
    status_data: List[ChartDatum] = Field(default_factory=list)
    category_data: List[ChartDatum] = Field(default_factory=list)


class SummaryStats(CamelModel):
    total: int = 0
    new: int = 0
    in_review: int = 0
    resolved: int = 0
    rejected: int = 0


class DepartmentDashboard(CamelModel):
    department: str
    name: str
    summary: SummaryStats
    complaints: List[Complaint]
    total: int
    page: int
    limit: int
    pages: int
