"""Cafe list filter schema."""

from pydantic import Field

from core.enums import NoiseLevel, VerificationStatus, WifiSpeed
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.cafe.cafe import Cafe


class FilterOptions(BaseSchemaModel):
    """Optional predicates over a cafe list, AND-combined when present."""

    city: str | None = Field(None, description="Exact city match")
    district: str | None = Field(None, description="Exact district match")
    wifi_speed: WifiSpeed | None = Field(None, description="Exact WiFi speed")
    min_comfort_rating: int | None = Field(
        None, ge=1, le=5, description="Minimum comfort rating"
    )
    noise_level: NoiseLevel | None = Field(None, description="Exact noise level")
    amenities: list[str] | None = Field(
        None, description="Amenities the cafe must all offer"
    )
    verification_status: VerificationStatus | None = Field(
        None, description="Exact verification status"
    )

    def matches(self, cafe: Cafe) -> bool:
        """Return True if the cafe satisfies every present predicate."""
        location = cafe.location
        metrics = cafe.work_metrics
        if self.city and location.city != self.city:
            return False
        if self.district and location.district != self.district:
            return False
        if self.wifi_speed and metrics.wifi_speed != self.wifi_speed:
            return False
        if self.noise_level and metrics.noise_level != self.noise_level:
            return False
        if self.min_comfort_rating and metrics.comfort_rating < self.min_comfort_rating:
            return False
        if (
            self.verification_status
            and cafe.community.verification_status != self.verification_status
        ):
            return False
        if self.amenities and not metrics.has_amenities(self.amenities):
            return False
        return True

    def cache_key(self) -> str:
        """Stable string form used to key cached cafe lists."""
        return self.model_dump_json(exclude_none=True)
