"""
CSV export of complaint listings for admin and department dashboards.
"""

from datetime import datetime
from typing import Dict, Iterable, Optional

from complaint_tracker.utils.timestamps import ms_to_iso, today_iso_date

CSV_HEADERS = ["ID", "Title", "Category", "Priority", "Status", "Reporter", "Created", "Updated", "Assignee"]


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def generate_csv(complaints: Iterable[Dict]) -> str:
    """
    Render complaints as CSV.

    Title and reporter name are always quoted, timestamps are ISO-8601 UTC.
    Rows are joined with a bare newline and there is no trailing newline.
    """
    rows = [CSV_HEADERS]
    for c in complaints:
        rows.append([
            c["id"],
            _quote(c["title"]),
            c["category"],
            c["priority"],
            c["status"],
            _quote(c.get("reporter", {}).get("name", "")),
            ms_to_iso(c["createdAt"]),
            ms_to_iso(c["updatedAt"]),
            c.get("assignee") or "Unassigned",
        ])
    return "\n".join(",".join(row) for row in rows)


def export_filename(prefix: str = "", now: Optional[datetime] = None) -> str:
    """complaints_export_2024-09-25.csv, optionally prefixed (e.g. "traffic_")."""
    return f"{prefix}complaints_export_{today_iso_date(now)}.csv"
