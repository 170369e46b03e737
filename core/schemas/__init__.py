"""Schemas for the core app."""

from core.schemas.cafe import (
    Cafe,
    CafeImage,
    Community,
    DayHours,
    Location,
    OperatingHours,
    RatingWorkMetrics,
    WorkMetrics,
)
from core.schemas.filter_options import FilterOptions
from core.schemas.network_status import NetworkStatus
from core.schemas.rate_limit_info import RateLimitInfo
from core.schemas.rating import CafeRating
from core.schemas.sheets import ValueRange

__all__ = [
    "Cafe",
    "CafeImage",
    "CafeRating",
    "Community",
    "DayHours",
    "FilterOptions",
    "Location",
    "NetworkStatus",
    "OperatingHours",
    "RateLimitInfo",
    "RatingWorkMetrics",
    "ValueRange",
    "WorkMetrics",
]
