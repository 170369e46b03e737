"""Cafe location schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class Location(BaseSchemaModel):
    """Geographic position and postal address of a cafe."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(
        ..., ge=-180, le=180, description="Longitude in degrees"
    )
    address: str = Field(..., min_length=1, max_length=500, description="Address")
    city: str = Field(..., min_length=1, max_length=100, description="City")
    district: str | None = Field(
        None, max_length=100, description="District within the city"
    )
