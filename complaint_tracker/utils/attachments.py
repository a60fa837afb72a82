"""
Attachment validation for complaint submissions.

Rules:
- Images (image/*) and PDF only
- At most 5 MB per file
- At most 5 files per complaint, extras are dropped
"""

import base64
import binascii
import logging
from typing import Dict, List

from complaint_tracker.models.complaint import AttachmentUpload
from complaint_tracker.utils.identifiers import new_entry_id

logger = logging.getLogger(__name__)

MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024
MAX_ATTACHMENTS = 5


def is_allowed_mime(mime: str) -> bool:
    return mime.startswith("image/") or mime == "application/pdf"


def _split_data_url(payload: str) -> str:
    """Return the bare base64 part of a data URL (or the payload unchanged)."""
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


def decoded_size(payload: str) -> int:
    """
    Size in bytes of a base64 payload.

    Raises:
        ValueError: If the payload is not valid base64
    """
    try:
        return len(base64.b64decode(_split_data_url(payload), validate=True))
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Attachment content is not valid base64: {e}")


def prepare_attachments(uploads: List[AttachmentUpload], timestamp: int) -> List[Dict]:
    """
    Validate uploads and convert them to stored attachment dicts.

    Raises:
        ValueError: If a file has an unsupported type, is too large or is not valid base64
    """
    attachments = []
    for upload in uploads:
        if not is_allowed_mime(upload.mime):
            raise ValueError(
                f"{upload.name} is not a supported file type. Please upload images or PDF files only."
            )

        size = decoded_size(upload.base64)
        if size > MAX_ATTACHMENT_BYTES:
            raise ValueError(f"{upload.name} is too large. Please upload files smaller than 5MB.")

        content = upload.base64
        if not content.startswith("data:"):
            content = f"data:{upload.mime};base64,{content}"

        attachments.append({
            "id": new_entry_id("att", timestamp),
            "name": upload.name,
            "mime": upload.mime,
            "base64": content,
            "size": size,
        })

    if len(attachments) > MAX_ATTACHMENTS:
        logger.info(f"Dropping {len(attachments) - MAX_ATTACHMENTS} attachment(s) over the limit of {MAX_ATTACHMENTS}")
    return attachments[:MAX_ATTACHMENTS]
