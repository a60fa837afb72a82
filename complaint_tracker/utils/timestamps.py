"""
Epoch-millisecond timestamp helpers. Stored documents keep all times as integer milliseconds.
"""

import time
from datetime import datetime, timezone
from typing import Optional

DAY_MS = 24 * 60 * 60 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


def to_ms(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive values are treated as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def ms_to_iso(timestamp: int) -> str:
    """ISO-8601 UTC with milliseconds and a trailing Z, e.g. 2024-01-15T10:30:00.000Z"""
    dt = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def today_iso_date(now: Optional[datetime] = None) -> str:
    return (now or datetime.now(timezone.utc)).strftime("%Y-%m-%d")
