"""Rate limit window statistics."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class RateLimitInfo(BaseSchemaModel):
    """Snapshot of the request window."""

    requests_per_minute: int = Field(..., description="Configured window budget")
    current_requests: int = Field(
        ..., ge=0, description="Requests recorded inside the current window"
    )
    reset_time: float = Field(
        ...,
        description=(
            "Epoch seconds at which the oldest in-window request ages out "
            "(now when the window is empty)"
        ),
    )
