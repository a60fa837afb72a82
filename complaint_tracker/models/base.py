"""
Pydantic base models for request/response validation.

DESIGN PRINCIPLE:
- Models should reflect data structure, not business logic
- Stored documents use camelCase keys, Python code uses snake_case
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import Optional


class CamelModel(BaseModel):
    """
    Base for every model that mirrors the stored JSON document.
    Fields are declared in snake_case and (de)serialized as camelCase.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class BaseResponse(BaseModel):
    """
    Base response model for API responses.
    All API responses can extend this for consistency.
    """
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
