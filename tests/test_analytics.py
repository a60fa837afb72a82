"""
Tests for complaint analytics.
"""

from complaint_tracker.services.analytics_service import AnalyticsService
from complaint_tracker.utils.timestamps import DAY_MS

NOW = 100 * DAY_MS


def _complaint(status, category="Sanitation", priority="Medium", created_days_ago=1, open_days=0):
    created = NOW - created_days_ago * DAY_MS
    return {
        "status": status,
        "category": category,
        "priority": priority,
        "createdAt": created,
        "updatedAt": created + open_days * DAY_MS,
    }


class TestAnalytics:
    def test_empty(self):
        analytics = AnalyticsService().get_analytics([], now=NOW)
        assert analytics == {
            "total": 0,
            "byStatus": {},
            "byCategory": {},
            "byPriority": {},
            "recent": 0,
            "avgResolutionTime": 0,
            "resolutionRate": 0.0,
            "statusData": [],
            "categoryData": [],
        }

    def test_distributions_and_rates(self):
        complaints = [
            _complaint("Resolved", category="Traffic", priority="High", created_days_ago=40, open_days=2),
            _complaint("Resolved", open_days=3),
            _complaint("Rejected", category="Traffic", open_days=1),
            _complaint("New", priority="Critical", created_days_ago=31),
            _complaint("In Review", category="Noise"),
            _complaint("New", category="Noise", created_days_ago=5),
        ]
        analytics = AnalyticsService().get_analytics(complaints, now=NOW)

        assert analytics["total"] == 6
        assert analytics["byStatus"] == {"Resolved": 2, "Rejected": 1, "New": 2, "In Review": 1}
        assert analytics["byCategory"] == {"Traffic": 2, "Sanitation": 2, "Noise": 2}
        assert analytics["byPriority"] == {"High": 1, "Medium": 4, "Critical": 1}
        assert analytics["recent"] == 4
        assert analytics["avgResolutionTime"] == 2
        assert analytics["resolutionRate"] == 33.3
        assert analytics["statusData"][0] == {"name": "Resolved", "value": 2}
        assert {"name": "Noise", "value": 2} in analytics["categoryData"]

    def test_average_resolution_rounds_half_up(self):
        complaints = [_complaint("Resolved", open_days=1), _complaint("Rejected", open_days=2)]
        assert AnalyticsService.calculate_average_resolution_time(complaints) == 2

    def test_open_complaints_do_not_count_towards_resolution_time(self):
        complaints = [_complaint("New", open_days=50), _complaint("Resolved", open_days=4)]
        assert AnalyticsService.calculate_average_resolution_time(complaints) == 4

    def test_recent_window_is_exclusive(self):
        complaints = [_complaint("New", created_days_ago=30), _complaint("New", created_days_ago=29)]
        assert AnalyticsService().get_analytics(complaints, now=NOW)["recent"] == 1
