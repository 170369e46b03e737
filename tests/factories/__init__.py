"""Builders for cafe and rating test data."""

from typing import Any

from core.schemas import Cafe, CafeRating
from core.services.transformers import cafe_to_row, rating_to_row

CAFE_ID = "550e8400-e29b-41d4-a716-446655440000"
OTHER_CAFE_ID = "6fa459ea-ee8a-3ca4-894e-db77e160355e"
THIRD_CAFE_ID = "16fd2706-8baf-433b-82eb-8c7fada847da"
RATING_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"


def cafe_data(
    cafe_id: str = CAFE_ID,
    name: str = "Kopi Kenangan Senopati",
    city: str = "Jakarta",
    district: str | None = "Kebayoran Baru",
    wifi_speed: str = "fast",
    comfort_rating: int = 4,
    noise_level: str = "moderate",
    amenities: list[str] | None = None,
    verification_status: str = "verified",
) -> dict[str, Any]:
    """Build camelCase cafe data as a client would send it."""
    return {
        "id": cafe_id,
        "name": name,
        "location": {
            "latitude": -6.2297,
            "longitude": 106.8075,
            "address": "Jl. Senopati No. 10",
            "city": city,
            "district": district,
        },
        "workMetrics": {
            "wifiSpeed": wifi_speed,
            "comfortRating": comfort_rating,
            "noiseLevel": noise_level,
            "amenities": (
                amenities
                if amenities is not None
                else ["power_outlets", "air_conditioning"]
            ),
        },
        "operatingHours": {
            "monday": {"open": "08:00", "close": "22:00"},
            "saturday": {"open": "00:00", "close": "23:59", "is24Hours": True},
            "sunday": None,
        },
        "images": [
            {
                "url": "https://images.example.com/senopati.jpg",
                "thumbnailUrl": "https://images.example.com/senopati_thumb.jpg",
                "uploadedBy": "session-abc",
                "uploadedAt": "2024-01-12T09:15:00Z",
            }
        ],
        "community": {
            "loveCount": 12,
            "contributorId": "session-abc",
            "verificationStatus": verification_status,
        },
        "createdAt": "2024-01-10T08:00:00Z",
        "updatedAt": "2024-01-15T10:30:00Z",
    }


def make_cafe(**kwargs: Any) -> Cafe:
    """Build a valid Cafe; keyword arguments as for cafe_data()."""
    return Cafe.model_validate(cafe_data(**kwargs))


def rating_data(
    rating_id: str = RATING_ID,
    cafe_id: str = CAFE_ID,
    **overrides: Any,
) -> dict[str, Any]:
    """Build camelCase rating data as a client would send it."""
    data = {
        "ratingId": rating_id,
        "cafeId": cafe_id,
        "sessionId": "session-xyz",
        "workMetrics": {"wifiSpeed": "fiber", "comfortRating": 5},
        "comment": "Plenty of outlets",
        "photos": ["https://images.example.com/rating.jpg"],
        "loveGiven": True,
        "ratedAt": "2024-01-16T14:00:00Z",
    }
    data.update(overrides)
    return data


def make_rating(**kwargs: Any) -> CafeRating:
    """Build a valid CafeRating; keyword arguments as for rating_data()."""
    return CafeRating.model_validate(rating_data(**kwargs))


def cafe_rows(*cafes: Cafe) -> list[list[str]]:
    """Serialize cafes as the Cafes sheet would return them."""
    return [cafe_to_row(cafe) for cafe in cafes]


def rating_rows(*ratings: CafeRating) -> list[list[str]]:
    """Serialize ratings as the Ratings sheet would return them."""
    return [rating_to_row(rating) for rating in ratings]
