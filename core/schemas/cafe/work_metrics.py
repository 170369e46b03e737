"""Work-friendliness metrics schemas.

A cafe always carries the full set of metrics. A rating may override any
subset of them, so it uses :class:`RatingWorkMetrics` where every field is
optional and amenities are not part of the rating sheet.
"""

from pydantic import Field

from core.enums import NoiseLevel, WifiSpeed
from core.schemas.base_schema_model import BaseSchemaModel


class WorkMetrics(BaseSchemaModel):
    """How suitable a cafe is for working."""

    wifi_speed: WifiSpeed = Field(..., description="Perceived WiFi speed")
    comfort_rating: int = Field(
        ..., ge=1, le=5, description="Seating comfort on a 1-5 scale"
    )
    noise_level: NoiseLevel = Field(..., description="Ambient noise level")
    amenities: list[str] = Field(
        default_factory=list,
        max_length=20,
        description="Free-text amenity tags, order irrelevant",
    )

    def has_amenities(self, required: list[str]) -> bool:
        """Return True if every required amenity is offered."""
        return set(required).issubset(self.amenities)


class RatingWorkMetrics(BaseSchemaModel):
    """Partial work metrics submitted with a rating."""

    wifi_speed: WifiSpeed | None = Field(None, description="Perceived WiFi speed")
    comfort_rating: int | None = Field(
        None, ge=1, le=5, description="Seating comfort on a 1-5 scale"
    )
    noise_level: NoiseLevel | None = Field(None, description="Ambient noise level")
