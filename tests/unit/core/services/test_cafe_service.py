"""Tests for CafeService."""

from unittest import IsolatedAsyncioTestCase
from unittest.mock import AsyncMock, Mock, patch

from django.core.cache import caches

from core.exceptions import CafeNotFoundError
from core.schemas import FilterOptions, RateLimitInfo
from core.services.cache_coordinator import CacheCoordinator
from core.services.cafe_service import (
    CafeService,
    cafe_detail_key,
    cafe_list_key,
    cafe_ratings_key,
)
from core.services.google_sheets_service import GoogleSheetsService
from tests.factories import CAFE_ID, OTHER_CAFE_ID, make_cafe, make_rating


class TestQueryKeys(IsolatedAsyncioTestCase):
    """Test query key construction."""

    async def test_keys(self):
        """Test keys are namespaced by entity."""
        self.assertEqual(cafe_list_key(), "cafes:list:{}")
        self.assertEqual(
            cafe_list_key(FilterOptions(city="Jakarta")), 'cafes:list:{"city":"Jakarta"}'
        )
        self.assertEqual(cafe_detail_key(CAFE_ID), f"cafes:detail:{CAFE_ID}")
        self.assertEqual(cafe_ratings_key(CAFE_ID), f"ratings:{CAFE_ID}")


class TestCafeService(IsolatedAsyncioTestCase):
    """Test cafe operations over a mocked sheets store."""

    def setUp(self):
        """Set up the service with a mocked store and a real coordinator."""
        caches["default"].clear()
        self.sleep_patcher = patch.object(
            CacheCoordinator, "_sleep", new_callable=AsyncMock
        )
        self.sleep_patcher.start()
        self.addCleanup(self.sleep_patcher.stop)

        self.sheets = Mock(spec=GoogleSheetsService)
        self.sheets.get_cafes = AsyncMock()
        self.sheets.get_cafe_ratings = AsyncMock()
        self.sheets.add_cafe = AsyncMock()
        self.sheets.batch_add_cafes = AsyncMock()
        self.sheets.update_cafe = AsyncMock()
        self.sheets.add_rating = AsyncMock()

        self.coordinator = CacheCoordinator()
        self.service = CafeService(self.sheets, self.coordinator)

        self.cafe = make_cafe()
        self.other = make_cafe(cafe_id=OTHER_CAFE_ID, city="Bandung")

    async def test_get_cafes_is_cached(self):
        """Test repeated list queries hit the store once."""
        self.sheets.get_cafes.return_value = [self.cafe, self.other]

        first = await self.service.get_cafes()
        second = await self.service.get_cafes()

        self.assertEqual(first, second)
        self.sheets.get_cafes.assert_awaited_once_with(None)

    async def test_get_cafes_caches_each_filter_separately(self):
        """Test different filters are different queries."""
        self.sheets.get_cafes.side_effect = [[self.cafe, self.other], [self.cafe]]

        await self.service.get_cafes()
        jakarta = await self.service.get_cafes(FilterOptions(city="Jakarta"))

        self.assertEqual(jakarta, [self.cafe])
        self.assertEqual(self.sheets.get_cafes.await_count, 2)

    async def test_get_cafe_uses_cached_list(self):
        """Test a cafe is found in the cached list without another read."""
        self.sheets.get_cafes.return_value = [self.cafe, self.other]
        await self.service.get_cafes()

        cafe = await self.service.get_cafe(OTHER_CAFE_ID)

        self.assertEqual(cafe, self.other)
        self.sheets.get_cafes.assert_awaited_once()

    async def test_get_cafe_reads_store_without_cached_list(self):
        """Test a cold detail query reads the sheet."""
        self.sheets.get_cafes.return_value = [self.cafe]

        cafe = await self.service.get_cafe(CAFE_ID)

        self.assertEqual(cafe, self.cafe)
        self.sheets.get_cafes.assert_awaited_once_with()

    async def test_get_cafe_not_found(self):
        """Test an unknown id raises CafeNotFoundError without retrying."""
        self.sheets.get_cafes.return_value = [self.other]

        with self.assertRaises(CafeNotFoundError):
            await self.service.get_cafe(CAFE_ID)

        self.sheets.get_cafes.assert_awaited_once()

    async def test_add_cafe_invalidates_cafe_queries(self):
        """Test adding a cafe makes cached lists stale."""
        self.sheets.get_cafes.return_value = [self.other]
        await self.service.get_cafes()

        result = await self.service.add_cafe(self.cafe)

        self.assertEqual(result, self.cafe)
        self.sheets.add_cafe.assert_awaited_once_with(self.cafe)
        self.assertTrue(self.coordinator.is_stale(cafe_list_key()))

    async def test_batch_add_empty_is_a_no_op(self):
        """Test an empty batch never reaches the store."""
        self.assertEqual(await self.service.batch_add_cafes([]), [])

        self.sheets.batch_add_cafes.assert_not_awaited()

    async def test_batch_add_cafes(self):
        """Test a batch is written with one call."""
        await self.service.batch_add_cafes([self.cafe, self.other])

        self.sheets.batch_add_cafes.assert_awaited_once_with([self.cafe, self.other])

    async def test_update_cafe_invalidates_detail(self):
        """Test updating a cafe makes its cached detail stale."""
        self.sheets.get_cafes.return_value = [self.cafe]
        await self.service.get_cafe(CAFE_ID)

        await self.service.update_cafe(self.cafe)

        self.assertTrue(self.coordinator.is_stale(cafe_detail_key(CAFE_ID)))

    async def test_update_missing_cafe_is_not_retried(self):
        """Test CafeNotFoundError from the store surfaces directly."""
        self.sheets.update_cafe.side_effect = CafeNotFoundError(CAFE_ID)

        with self.assertRaises(CafeNotFoundError):
            await self.service.update_cafe(self.cafe)

        self.sheets.update_cafe.assert_awaited_once()

    async def test_add_rating_invalidates_ratings(self):
        """Test adding a rating makes that cafe's ratings stale."""
        rating = make_rating()
        self.sheets.get_cafe_ratings.return_value = []
        await self.service.get_cafe_ratings(CAFE_ID)

        await self.service.add_rating(rating)

        self.sheets.add_rating.assert_awaited_once_with(rating)
        self.assertTrue(self.coordinator.is_stale(cafe_ratings_key(CAFE_ID)))

    async def test_get_rate_limit_info(self):
        """Test rate limit info is passed through from the store."""
        info = RateLimitInfo(requests_per_minute=300, current_requests=4, reset_time=1.0)
        self.sheets.get_rate_limit_info.return_value = info

        self.assertEqual(self.service.get_rate_limit_info(), info)
