"""API views for core application.

Views are synchronous DRF views; the data access layer is async and is
entered through ``async_to_sync``. Sheets and validation errors propagate to
the DRF exception handler, which maps them onto HTTP status codes.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

import structlog
from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.schemas import Cafe, CafeRating, FilterOptions
from core.services.context import get_app_context
from core.services.validation_service import validation_service

logger = structlog.get_logger(__name__)

FILTER_QUERY_PARAMS = (
    "city",
    "district",
    "wifiSpeed",
    "minComfortRating",
    "noiseLevel",
    "verificationStatus",
)


def _dump(entity: Cafe | CafeRating) -> dict[str, Any]:
    return entity.model_dump(mode="json", by_alias=True)


def _parse_filters(query_params: Any) -> FilterOptions | None:
    """Build FilterOptions from query parameters, None when none are given.

    ``amenities`` is a comma separated list.
    """
    data: dict[str, Any] = {
        name: query_params[name] for name in FILTER_QUERY_PARAMS if query_params.get(name)
    }
    amenities = query_params.get("amenities")
    if amenities:
        data["amenities"] = [tag.strip() for tag in amenities.split(",") if tag.strip()]
    if not data:
        return None
    return validation_service.validate_filter_options(data)


def _json_object(data: Any, what: str = "request body") -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object as the {what}")
    return data


def _new_cafe(data: Any) -> Cafe:
    """Validate a cafe submitted by a client, filling server-side defaults."""
    now = datetime.now(UTC)
    payload = {
        "id": str(uuid.uuid4()),
        "createdAt": now,
        "updatedAt": now,
        **_json_object(data, "cafe"),
    }
    return validation_service.validate_cafe(payload)


class BaseCafeView(APIView):
    """Common configuration of the cafe endpoints.

    The service is public and anonymous, like the app it backs.
    """

    authentication_classes: list = []
    permission_classes = (AllowAny,)

    @property
    def cafe_service(self):
        return get_app_context().cafe_service


class CafeListView(BaseCafeView):
    """API endpoint for listing and adding cafes.

    GET: List cafes, optionally filtered
    POST: Add a cafe
    """

    def get(self, request):
        """List cafes matching the query parameters.

        Query Parameters:
        - city, district, wifiSpeed, noiseLevel, verificationStatus: exact match
        - minComfortRating: minimum comfort rating (1-5)
        - amenities: comma separated tags that must all be present

        Returns:
            200 OK with {results, count}
            400 Bad Request if a filter value is invalid
            429 Too Many Requests if the request budget is exhausted
            503 Service Unavailable if the store cannot be reached
        """
        filters = _parse_filters(request.query_params)
        cafes = async_to_sync(self.cafe_service.get_cafes)(filters)

        logger.info(
            "Cafe list retrieved",
            count=len(cafes),
            filters=filters.cache_key() if filters else None,
        )
        return Response(
            {"results": [_dump(cafe) for cafe in cafes], "count": len(cafes)},
            status=status.HTTP_200_OK,
        )

    def post(self, request):
        """Add a cafe.

        ``id``, ``createdAt`` and ``updatedAt`` are generated when omitted.

        Returns:
            201 Created with the stored cafe
            400 Bad Request if validation fails
        """
        cafe = _new_cafe(request.data)
        async_to_sync(self.cafe_service.add_cafe)(cafe)

        logger.info("Cafe created", cafe_id=cafe.id)
        return Response(_dump(cafe), status=status.HTTP_201_CREATED)


class CafeBatchView(BaseCafeView):
    """API endpoint for adding several cafes with one write."""

    def post(self, request):
        """Add a batch of cafes.

        Body: {"cafes": [...]}. Every cafe is validated before anything is
        written; one invalid cafe rejects the whole batch.

        Returns:
            201 Created with {results, count}
            400 Bad Request if the body or any cafe is invalid
        """
        items = request.data.get("cafes") if isinstance(request.data, dict) else None
        if not isinstance(items, list):
            return Response(
                {
                    "error": "bad_request",
                    "message": "Invalid request body",
                    "detail": "Expected an object with a 'cafes' list",
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        cafes = [_new_cafe(item) for item in items]
        async_to_sync(self.cafe_service.batch_add_cafes)(cafes)

        logger.info("Cafe batch created", count=len(cafes))
        return Response(
            {"results": [_dump(cafe) for cafe in cafes], "count": len(cafes)},
            status=status.HTTP_201_CREATED,
        )


class CafeDetailView(BaseCafeView):
    """API endpoint for a single cafe.

    GET: Retrieve a cafe
    PUT: Replace a cafe
    """

    def get(self, _request, cafe_id):
        """Retrieve a cafe by ID.

        Returns:
            200 OK with the cafe
            404 Not Found if no cafe has the ID
        """
        cafe = async_to_sync(self.cafe_service.get_cafe)(cafe_id)
        return Response(_dump(cafe), status=status.HTTP_200_OK)

    def put(self, request, cafe_id):
        """Replace a cafe.

        The ID in the path wins over any ID in the body. ``updatedAt`` is
        set to now when omitted.

        Returns:
            200 OK with the stored cafe
            400 Bad Request if validation fails
            404 Not Found if no cafe has the ID
        """
        payload = {
            "updatedAt": datetime.now(UTC),
            **_json_object(request.data),
            "id": cafe_id,
        }
        cafe = validation_service.validate_cafe(payload)
        async_to_sync(self.cafe_service.update_cafe)(cafe)

        logger.info("Cafe updated", cafe_id=cafe_id)
        return Response(_dump(cafe), status=status.HTTP_200_OK)


class CafeRatingListView(BaseCafeView):
    """API endpoint for listing the ratings of a cafe."""

    def get(self, _request, cafe_id):
        """List the ratings of a cafe.

        Returns:
            200 OK with {results, count}; an unknown cafe has no ratings
        """
        ratings = async_to_sync(self.cafe_service.get_cafe_ratings)(cafe_id)
        return Response(
            {"results": [_dump(rating) for rating in ratings], "count": len(ratings)},
            status=status.HTTP_200_OK,
        )


class RatingCreateView(BaseCafeView):
    """API endpoint for rating a cafe."""

    def post(self, request):
        """Add a rating.

        ``ratingId`` and ``ratedAt`` are generated when omitted.

        Returns:
            201 Created with the stored rating
            400 Bad Request if validation fails
        """
        payload = {
            "ratingId": str(uuid.uuid4()),
            "ratedAt": datetime.now(UTC),
            **_json_object(request.data),
        }
        rating = validation_service.validate_cafe_rating(payload)
        async_to_sync(self.cafe_service.add_rating)(rating)

        return Response(_dump(rating), status=status.HTTP_201_CREATED)


class RateLimitView(BaseCafeView):
    """API endpoint exposing the remaining Google Sheets request budget."""

    def get(self, _request):
        """Return the current rate limit window statistics.

        Returns:
            200 OK with RateLimitInfo
        """
        info = self.cafe_service.get_rate_limit_info()
        return Response(info.model_dump(by_alias=True), status=status.HTTP_200_OK)
