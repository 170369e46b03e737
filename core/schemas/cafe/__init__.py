"""Cafe schemas."""

from core.schemas.cafe.cafe import Cafe
from core.schemas.cafe.cafe_image import CafeImage
from core.schemas.cafe.community import Community
from core.schemas.cafe.location import Location
from core.schemas.cafe.operating_hours import DayHours, OperatingHours
from core.schemas.cafe.work_metrics import RatingWorkMetrics, WorkMetrics

__all__ = [
    "Cafe",
    "CafeImage",
    "Community",
    "DayHours",
    "Location",
    "OperatingHours",
    "RatingWorkMetrics",
    "WorkMetrics",
]
