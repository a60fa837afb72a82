"""
Analytics Service - Summary statistics and chart data over all complaints.
"""

import math
from collections import defaultdict
from typing import Dict, List, Optional
import logging

from complaint_tracker.models.complaint import ComplaintStatus
from complaint_tracker.utils.timestamps import DAY_MS, now_ms

logger = logging.getLogger(__name__)

RECENT_WINDOW_DAYS = 30
CLOSED_STATUSES = (ComplaintStatus.RESOLVED.value, ComplaintStatus.REJECTED.value)


class AnalyticsService:
    """Service for generating complaint analytics."""

    def get_analytics(self, complaints: List[Dict], now: Optional[int] = None) -> Dict:
        """
        Build the analytics summary.

        Returns:
            Dict with totals, distributions, resolution figures and chart series
        """
        now = now if now is not None else now_ms()
        by_status = self._distribution(complaints, "status")
        by_category = self._distribution(complaints, "category")
        total = len(complaints)

        return {
            "total": total,
            "byStatus": by_status,
            "byCategory": by_category,
            "byPriority": self._distribution(complaints, "priority"),
            "recent": self._count_recent(complaints, now),
            "avgResolutionTime": self.calculate_average_resolution_time(complaints),
            "resolutionRate": self._resolution_rate(by_status, total),
            "statusData": self._chart_series(by_status),
            "categoryData": self._chart_series(by_category),
        }

    def _distribution(self, complaints: List[Dict], field: str) -> Dict[str, int]:
        """Count complaints per value of `field` (only values that occur)."""
        distribution = defaultdict(int)
        for complaint in complaints:
            distribution[complaint.get(field)] += 1
        return dict(distribution)

    def _count_recent(self, complaints: List[Dict], now: int) -> int:
        cutoff = now - RECENT_WINDOW_DAYS * DAY_MS
        return sum(1 for c in complaints if c.get("createdAt", 0) > cutoff)

    @staticmethod
    def calculate_average_resolution_time(complaints: List[Dict]) -> int:
        """Mean days from creation to last update over Resolved/Rejected complaints, rounded."""
        closed = [c for c in complaints if c.get("status") in CLOSED_STATUSES]
        if not closed:
            return 0

        total_time = sum(c["updatedAt"] - c["createdAt"] for c in closed)
        # Round half up
        return int(math.floor(total_time / len(closed) / DAY_MS + 0.5))

    def _resolution_rate(self, by_status: Dict[str, int], total: int) -> float:
        if total == 0:
            return 0.0
        return round(by_status.get(ComplaintStatus.RESOLVED.value, 0) / total * 100, 1)

    def _chart_series(self, distribution: Dict[str, int]) -> List[Dict]:
        return [{"name": name, "value": value} for name, value in distribution.items()]


# Global service instance
_analytics_service = None


def get_analytics_service() -> AnalyticsService:
    """Get or create AnalyticsService singleton."""
    global _analytics_service
    if _analytics_service is None:
        _analytics_service = AnalyticsService()
    return _analytics_service
