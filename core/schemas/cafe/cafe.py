"""Cafe schema, the primary entity stored in the Cafes sheet."""

from datetime import datetime

from pydantic import ConfigDict, Field, model_validator

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.cafe.cafe_image import CafeImage
from core.schemas.cafe.community import Community
from core.schemas.cafe.location import Location
from core.schemas.cafe.operating_hours import OperatingHours
from core.schemas.cafe.work_metrics import WorkMetrics
from core.schemas.types import UuidStr


class Cafe(BaseSchemaModel):
    """A work-friendly cafe listing.

    Attributes:
        id: Opaque identifier, format-checked as a UUID.
        name: Display name.
        location: Position and address.
        work_metrics: WiFi, comfort, noise and amenities.
        operating_hours: Weekday name to opening window (None when closed).
        images: Ordered photos, at most 10.
        community: Love count, contributor and verification status.
        created_at: Creation time.
        updated_at: Last modification time.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Kopi Kenangan Senopati",
                "location": {
                    "latitude": -6.2297,
                    "longitude": 106.8075,
                    "address": "Jl. Senopati No. 10",
                    "city": "Jakarta",
                    "district": "Kebayoran Baru",
                },
                "workMetrics": {
                    "wifiSpeed": "fast",
                    "comfortRating": 4,
                    "noiseLevel": "moderate",
                    "amenities": ["power_outlets", "air_conditioning"],
                },
                "operatingHours": {
                    "monday": {"open": "08:00", "close": "22:00"},
                    "sunday": None,
                },
                "images": [],
                "community": {
                    "loveCount": 12,
                    "lastUpdated": "2024-01-15T10:30:00Z",
                    "contributorId": "session-abc",
                    "verificationStatus": "verified",
                },
                "createdAt": "2024-01-10T08:00:00Z",
                "updatedAt": "2024-01-15T10:30:00Z",
            }
        }
    )

    id: UuidStr = Field(..., description="Unique cafe identifier (UUID)")
    name: str = Field(..., min_length=1, max_length=200, description="Cafe name")
    location: Location
    work_metrics: WorkMetrics
    operating_hours: OperatingHours = Field(default_factory=dict)
    images: list[CafeImage] = Field(default_factory=list, max_length=10)
    community: Community
    created_at: datetime = Field(..., description="Creation time (ISO 8601)")
    updated_at: datetime = Field(..., description="Last update time (ISO 8601)")

    @model_validator(mode="after")
    def _sync_last_updated(self) -> "Cafe":
        # The sheet has no lastUpdated column; it is stored as updatedAt
        if self.community.last_updated != self.updated_at:
            self.community = self.community.model_copy(
                update={"last_updated": self.updated_at}
            )
        return self
