"""Cafe rating schema, stored in the Ratings sheet."""

from datetime import datetime

from pydantic import ConfigDict, Field, model_validator

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.cafe.work_metrics import RatingWorkMetrics
from core.schemas.types import UrlStr, UuidStr


class CafeRating(BaseSchemaModel):
    """An anonymous rating left for a cafe.

    ``cafe_id`` references a cafe but is not checked for existence.
    Omitted optional fields stay omitted (None) rather than defaulted. An
    empty comment or empty work metrics are treated as omitted.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ratingId": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
                "cafeId": "550e8400-e29b-41d4-a716-446655440000",
                "sessionId": "session-abc",
                "workMetrics": {"wifiSpeed": "fiber"},
                "comment": "Great coffee, plenty of outlets",
                "loveGiven": True,
                "ratedAt": "2024-01-15T10:30:00Z",
            }
        }
    )

    rating_id: UuidStr = Field(..., description="Unique rating identifier (UUID)")
    cafe_id: UuidStr = Field(..., description="Rated cafe identifier (UUID)")
    session_id: str = Field(
        ..., min_length=1, max_length=100, description="Anonymous session token"
    )
    work_metrics: RatingWorkMetrics | None = Field(
        None, description="Partial override of the cafe's work metrics"
    )
    comment: str | None = Field(None, max_length=280, description="Short comment")
    photos: list[UrlStr] | None = Field(
        None, max_length=5, description="Photo URLs, at most 5"
    )
    love_given: bool = Field(False, description="Whether the rater loved the cafe")
    rated_at: datetime = Field(..., description="Rating time (ISO 8601)")

    @model_validator(mode="after")
    def _drop_empty_optionals(self) -> "CafeRating":
        # The sheet stores both as an empty cell, which reads back as None
        if self.comment == "":
            self.comment = None
        if self.work_metrics is not None and not self.work_metrics.model_dump(
            exclude_none=True
        ):
            self.work_metrics = None
        return self
