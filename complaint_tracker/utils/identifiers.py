"""
Identifier helpers for complaints and their history / comment entries.
"""

import random
import uuid
from datetime import datetime
from typing import Iterable, Optional

COMPLAINT_ID_PREFIX = "CT"

# Guard against a pathological loop once a day's 10,000 IDs are nearly exhausted
MAX_ID_ATTEMPTS = 1000


def generate_complaint_id(existing: Optional[Iterable[str]] = None, now: Optional[datetime] = None) -> str:
    """
    Generate a complaint ID in the format CT-YYYYMMDD-XXXX.

    The date part uses local time, the suffix is four random digits.
    When `existing` is given, a fresh suffix is drawn until the ID is unused.

    Raises:
        RuntimeError: If no free ID could be found
    """
    date_part = (now or datetime.now()).strftime("%Y%m%d")
    taken = set(existing or ())

    for _ in range(MAX_ID_ATTEMPTS):
        candidate = f"{COMPLAINT_ID_PREFIX}-{date_part}-{random.randint(0, 9999):04d}"
        if candidate not in taken:
            return candidate

    raise RuntimeError(f"Could not allocate a unique complaint ID for {date_part}")


def new_entry_id(prefix: str, timestamp: int) -> str:
    """ID for history entries ("hist") and comments ("comm")."""
    return f"{prefix}_{timestamp}_{uuid.uuid4().hex[:6]}"
