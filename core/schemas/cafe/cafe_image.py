"""Cafe image schema."""

from datetime import datetime

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.types import UrlStr


class CafeImage(BaseSchemaModel):
    """Photo uploaded for a cafe."""

    url: UrlStr = Field(..., description="Full size image URL")
    thumbnail_url: UrlStr = Field(..., description="Thumbnail image URL")
    uploaded_by: str = Field(
        ..., min_length=1, max_length=100, description="Uploader identifier"
    )
    uploaded_at: datetime = Field(..., description="Upload time (ISO 8601)")
