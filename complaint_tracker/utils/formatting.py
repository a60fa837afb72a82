"""
Display formatting helpers.
"""

import re

BYTE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_bytes(size: int) -> str:
    """
    Human-readable byte count.

    Examples:
        0 -> "0 Bytes"
        1536 -> "1.5 KB"
        5242880 -> "5 MB"
    """
    if size <= 0:
        return "0 Bytes"

    i = 0
    value = float(size)
    while value >= 1024 and i < len(BYTE_UNITS) - 1:
        value /= 1024
        i += 1
    value = round(value, 2)
    # Drop trailing zeros the way a float-to-string round trip does (5.0 -> 5)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {BYTE_UNITS[i]}"


def format_category_name(slug: str) -> str:
    """
    Turn a department slug into a display name.

    "cyber-crime" -> "Cyber Crime", "women_child-safety" -> "Women & Child Safety"
    """
    if not slug:
        return "Unknown Department"
    text = slug.replace("-", " ").replace("_", " & ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), text)
