"""Cafe queries and writes over the cache coordinator and the sheets store."""

from collections.abc import Awaitable, Callable

import structlog

from core.exceptions import CafeNotFoundError
from core.schemas import Cafe, CafeRating, FilterOptions, RateLimitInfo
from core.services.cache_coordinator import CacheCoordinator
from core.services.google_sheets_service import GoogleSheetsService

logger = structlog.get_logger(__name__)

CAFES_PREFIX = "cafes:"
CAFE_LIST_PREFIX = "cafes:list:"
CAFE_DETAIL_PREFIX = "cafes:detail:"
RATINGS_PREFIX = "ratings:"


def cafe_list_key(filters: FilterOptions | None = None) -> str:
    """Query key of a (filtered) cafe list."""
    return f"{CAFE_LIST_PREFIX}{(filters or FilterOptions()).cache_key()}"


def cafe_detail_key(cafe_id: str) -> str:
    """Query key of a single cafe."""
    return f"{CAFE_DETAIL_PREFIX}{cafe_id}"


def cafe_ratings_key(cafe_id: str) -> str:
    """Query key of the ratings of a cafe."""
    return f"{RATINGS_PREFIX}{cafe_id}"


class CafeService:
    """Service for reading and writing cafes and ratings."""

    def __init__(self, sheets: GoogleSheetsService, coordinator: CacheCoordinator):
        self.sheets = sheets
        self.coordinator = coordinator

    async def get_cafes(self, filters: FilterOptions | None = None) -> list[Cafe]:
        """Get cafes matching the filters, from cache while fresh."""
        return await self.coordinator.query(
            cafe_list_key(filters), lambda: self.sheets.get_cafes(filters)
        )

    async def get_cafe(self, cafe_id: str) -> Cafe:
        """Get a single cafe.

        The unfiltered cafe list is consulted first when it is cached, so
        opening a cafe from the list costs no request.

        Raises:
            CafeNotFoundError: If no cafe has the id
        """

        async def fetch_cafe() -> Cafe:
            cafes = self.coordinator.get_cached(cafe_list_key())
            if cafes is None or self.coordinator.is_stale(cafe_list_key()):
                cafes = await self.sheets.get_cafes()
            for cafe in cafes:
                if cafe.id == cafe_id:
                    return cafe
            raise CafeNotFoundError(cafe_id=cafe_id)

        return await self.coordinator.query(cafe_detail_key(cafe_id), fetch_cafe)

    async def get_cafe_ratings(self, cafe_id: str) -> list[CafeRating]:
        """Get the ratings of a cafe, from cache while fresh."""
        return await self.coordinator.query(
            cafe_ratings_key(cafe_id), lambda: self.sheets.get_cafe_ratings(cafe_id)
        )

    async def add_cafe(self, cafe: Cafe) -> Cafe:
        """Add a cafe and invalidate cached cafe queries."""
        await self.coordinator.mutate(
            lambda: self.sheets.add_cafe(cafe), invalidate=[CAFES_PREFIX]
        )
        return cafe

    async def batch_add_cafes(self, cafes: list[Cafe]) -> list[Cafe]:
        """Add several cafes with one write."""
        if not cafes:
            return cafes
        await self.coordinator.mutate(
            lambda: self.sheets.batch_add_cafes(cafes), invalidate=[CAFES_PREFIX]
        )
        return cafes

    async def update_cafe(self, cafe: Cafe) -> Cafe:
        """Overwrite an existing cafe and invalidate cached cafe queries.

        Raises:
            CafeNotFoundError: If no cafe has the id
        """
        await self.coordinator.mutate(
            lambda: self.sheets.update_cafe(cafe), invalidate=[CAFES_PREFIX]
        )
        return cafe

    async def add_rating(self, rating: CafeRating) -> CafeRating:
        """Add a rating and invalidate the rated cafe's cached queries."""
        await self.coordinator.mutate(
            lambda: self.sheets.add_rating(rating),
            invalidate=[cafe_ratings_key(rating.cafe_id), cafe_detail_key(rating.cafe_id)],
        )
        logger.info("Rating recorded", cafe_id=rating.cafe_id, love_given=rating.love_given)
        return rating

    def get_rate_limit_info(self) -> RateLimitInfo:
        """Get the current request budget statistics."""
        return self.sheets.get_rate_limit_info()

    def refresh_jobs(self) -> list[tuple[str, Callable[[], Awaitable[list[Cafe]]]]]:
        """Queries kept fresh in the background: the unfiltered cafe list."""
        return [(cafe_list_key(), lambda: self.sheets.get_cafes(None))]
