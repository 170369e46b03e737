"""Google Sheets backed store for cafes and ratings.

The spreadsheet holds two sheets, ``Cafes`` and ``Ratings``, each with a
header row followed by one entity per row. Reads fetch the whole data range
and filter in memory. Writes append rows; updates locate a cafe by its id
cell and overwrite that row in place. Rows are never deleted.
"""

from typing import Any

import structlog
from pydantic import ValidationError

from core.config import SheetsConfig
from core.constants import (
    CAFES_LAST_COLUMN,
    CAFES_READ_RANGE,
    CAFES_SHEET,
    HEADER_ROW_COUNT,
    RATINGS_LAST_COLUMN,
    RATINGS_READ_RANGE,
    RATINGS_SHEET,
    SHEETS_VALUE_INPUT_OPTION,
)
from core.exceptions import CafeNotFoundError, GoogleSheetsError
from core.schemas import Cafe, CafeRating, FilterOptions, RateLimitInfo, ValueRange
from core.services.downstream.base_downstream_client import BaseDownstreamClient
from core.services.network_service import ConnectivityProbe
from core.services.rate_limiter import RateLimiter
from core.services.transformers import (
    cafe_to_row,
    rating_to_row,
    rows_to_cafes,
    rows_to_ratings,
)

logger = structlog.get_logger(__name__)


class GoogleSheetsService(BaseDownstreamClient):
    """Client for reading and writing cafes and ratings in a spreadsheet."""

    def __init__(
        self,
        config: SheetsConfig,
        rate_limiter: RateLimiter | None = None,
        connectivity_probe: ConnectivityProbe | None = None,
    ):
        """Initialize the Google Sheets service.

        Args:
            config: Resolved sheets configuration
            rate_limiter: Shared admission control; built from config if None
            connectivity_probe: Checked before every call; online if None

        Raises:
            SheetsConfigurationError: If the spreadsheet id or API key is missing
        """
        config.require_credentials()
        super().__init__(
            service_name="google-sheets",
            base_url=config.base_url,
            rate_limiter=rate_limiter
            or RateLimiter(config.rate_limit_requests, config.rate_limit_window),
            connectivity_probe=connectivity_probe,
            timeout=config.request_timeout,
        )
        self.spreadsheet_id = config.spreadsheet_id
        self.api_key = config.api_key

    async def get_cafes(self, filters: FilterOptions | None = None) -> list[Cafe]:
        """Fetch every valid cafe, optionally filtered.

        Args:
            filters: Predicates that must all hold; None returns every cafe

        Returns:
            Cafes in sheet order; rows that fail validation are dropped

        Raises:
            RateLimitError: If the request budget is exhausted
            NetworkError: If offline or the transport fails
            GoogleSheetsError: If the Sheets API rejects the call
        """
        rows = await self._read_rows(CAFES_READ_RANGE)
        cafes = rows_to_cafes(rows)

        if filters is not None:
            cafes = [cafe for cafe in cafes if filters.matches(cafe)]

        logger.info(
            "Fetched cafes",
            row_count=len(rows),
            cafe_count=len(cafes),
            filtered=filters is not None,
        )
        return cafes

    async def get_cafe_ratings(self, cafe_id: str) -> list[CafeRating]:
        """Fetch every valid rating of a cafe.

        Args:
            cafe_id: Cafe whose ratings are returned

        Returns:
            Ratings in sheet order
        """
        rows = await self._read_rows(RATINGS_READ_RANGE)
        ratings = [rating for rating in rows_to_ratings(rows) if rating.cafe_id == cafe_id]
        logger.info("Fetched cafe ratings", cafe_id=cafe_id, rating_count=len(ratings))
        return ratings

    async def add_cafe(self, cafe: Cafe) -> None:
        """Append a cafe to the Cafes sheet.

        Raises:
            SchemaValidationError: If the cafe is invalid; nothing is sent
        """
        row = cafe_to_row(cafe)
        await self._append_rows(CAFES_SHEET, CAFES_LAST_COLUMN, [row])
        logger.info("Added cafe", cafe_id=cafe.id, name=cafe.name)

    async def batch_add_cafes(self, cafes: list[Cafe]) -> None:
        """Append several cafes with a single call.

        An empty list makes no call and consumes no request budget.

        Raises:
            SchemaValidationError: If any cafe is invalid; nothing is sent
        """
        if not cafes:
            logger.debug("Empty cafe batch, nothing to append")
            return

        rows = [cafe_to_row(cafe) for cafe in cafes]
        await self._append_rows(CAFES_SHEET, CAFES_LAST_COLUMN, rows)
        logger.info("Added cafe batch", cafe_count=len(rows))

    async def update_cafe(self, cafe: Cafe) -> None:
        """Overwrite the row of an existing cafe.

        The sheet is read in full to locate the first row whose id cell
        equals ``cafe.id``; that row is then replaced. A concurrent writer
        between the read and the write is not detected.

        Raises:
            SchemaValidationError: If the cafe is invalid; nothing is sent
            CafeNotFoundError: If no row carries the cafe id; nothing is written
        """
        row = cafe_to_row(cafe)
        rows = await self._read_rows(CAFES_READ_RANGE)

        index = next(
            (
                position
                for position, existing in enumerate(rows)
                if existing and str(existing[0]).strip() == cafe.id
            ),
            None,
        )
        if index is None:
            logger.warning("Cafe not found for update", cafe_id=cafe.id)
            raise CafeNotFoundError(cafe_id=cafe.id)

        row_number = index + HEADER_ROW_COUNT + 1
        cell_range = f"{CAFES_SHEET}!A{row_number}:{CAFES_LAST_COLUMN}{row_number}"
        await self._make_request(
            "PUT",
            self._values_url(cell_range),
            params=self._params(valueInputOption=SHEETS_VALUE_INPUT_OPTION),
            json_data={"values": [row]},
        )
        logger.info("Updated cafe", cafe_id=cafe.id, row_number=row_number)

    async def add_rating(self, rating: CafeRating) -> None:
        """Append a rating to the Ratings sheet.

        Raises:
            SchemaValidationError: If the rating is invalid; nothing is sent
        """
        row = rating_to_row(rating)
        await self._append_rows(RATINGS_SHEET, RATINGS_LAST_COLUMN, [row])
        logger.info("Added rating", rating_id=rating.rating_id, cafe_id=rating.cafe_id)

    def get_rate_limit_info(self) -> RateLimitInfo:
        """Get the current request budget statistics."""
        return self.rate_limiter.get_rate_limit_info()

    async def _read_rows(self, cell_range: str) -> list[list[Any]]:
        response = await self._make_request(
            "GET", self._values_url(cell_range), params=self._params()
        )
        try:
            value_range = ValueRange.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(
                "Failed to parse values response",
                range=cell_range,
                error=str(e),
            )
            raise GoogleSheetsError(
                message="Malformed values response",
                code="INVALID_RESPONSE",
                status_code=response.status_code,
                details=str(e),
            ) from e
        return value_range.values

    async def _append_rows(
        self, sheet: str, last_column: str, rows: list[list[str]]
    ) -> None:
        await self._make_request(
            "POST",
            self._values_url(f"{sheet}!A:{last_column}") + ":append",
            params=self._params(valueInputOption=SHEETS_VALUE_INPUT_OPTION),
            json_data={"values": rows},
        )

    def _values_url(self, cell_range: str) -> str:
        return f"{self.base_url}/{self.spreadsheet_id}/values/{cell_range}"

    def _params(self, **extra: str) -> dict[str, str]:
        return {"key": self.api_key, **extra}
