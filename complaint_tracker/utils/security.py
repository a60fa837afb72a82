"""
Privacy utilities: mask reporter contact details on public tracking views.
"""

from typing import Optional


def mask_email(email: Optional[str]) -> Optional[str]:
    """
    Mask an email address for display.

    john.smith@email.com → j*********@email.com

    Args:
        email: Raw email address

    Returns:
        Masked email or None if input is None/empty
    """
    if not email or not email.strip():
        return None

    if "@" not in email:
        return "*" * len(email)

    local, domain = email.split("@", 1)
    if len(local) <= 1:
        return f"*@{domain}"
    return f"{local[0]}{'*' * (len(local) - 1)}@{domain}"


def mask_phone(phone: Optional[str]) -> Optional[str]:
    """
    Mask a phone number, keeping only the last 4 digits.

    +1-555-0123 → +*-***-0123
    """
    if not phone or not phone.strip():
        return None

    digits_seen = 0
    total_digits = sum(1 for ch in phone if ch.isdigit())
    masked = []
    for ch in phone:
        if ch.isdigit():
            digits_seen += 1
            masked.append(ch if digits_seen > total_digits - 4 else "*")
        else:
            masked.append(ch)
    return "".join(masked)
