"""Operating hours schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.types import TimeOfDay


class DayHours(BaseSchemaModel):
    """Opening window for a single weekday."""

    open: TimeOfDay = Field(..., description="Opening time, 24-hour HH:MM")
    close: TimeOfDay = Field(..., description="Closing time, 24-hour HH:MM")
    is_24_hours: bool | None = Field(
        None, alias="is24Hours", description="Open around the clock"
    )


# Weekday name -> hours, or None when closed that day
OperatingHours = dict[str, DayHours | None]
