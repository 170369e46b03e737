"""Rating schemas."""

from core.schemas.rating.cafe_rating import CafeRating

__all__ = ["CafeRating"]
