"""Community metadata schema."""

from datetime import datetime

from pydantic import Field

from core.enums import VerificationStatus
from core.schemas.base_schema_model import BaseSchemaModel


class Community(BaseSchemaModel):
    """Crowd-sourced metadata for a cafe listing."""

    love_count: int = Field(0, ge=0, description="Number of loves received")
    last_updated: datetime | None = Field(
        None, description="Last update (ISO 8601), mirrors the cafe updatedAt"
    )
    contributor_id: str = Field(
        ..., min_length=1, max_length=100, description="Original contributor"
    )
    verification_status: VerificationStatus = Field(
        VerificationStatus.UNVERIFIED, description="Verification level"
    )
