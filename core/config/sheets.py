"""Google Sheets and cache policy configuration.

Values come from Django settings, which read them from the environment.
The spreadsheet id and API key are required; everything else has a default.
"""

from django.conf import settings

from pydantic import BaseModel, Field

from core.constants import (
    DEFAULT_CACHE_GC_TIME,
    DEFAULT_CACHE_REFETCH_INTERVAL,
    DEFAULT_CACHE_STALE_TIME,
    DEFAULT_CONNECTIVITY_CHECK_HOST,
    DEFAULT_RATE_LIMIT_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW,
    DEFAULT_REQUEST_TIMEOUT,
    SHEETS_API_BASE_URL,
)
from core.exceptions import SheetsConfigurationError


class SheetsConfig(BaseModel):
    """Resolved configuration for the data access layer."""

    spreadsheet_id: str = ""
    api_key: str = ""
    base_url: str = SHEETS_API_BASE_URL
    request_timeout: float = Field(DEFAULT_REQUEST_TIMEOUT, gt=0)
    rate_limit_requests: int = Field(DEFAULT_RATE_LIMIT_REQUESTS, gt=0)
    rate_limit_window: float = Field(DEFAULT_RATE_LIMIT_WINDOW, gt=0)
    cache_alias: str = "default"
    cache_stale_time: float = Field(DEFAULT_CACHE_STALE_TIME, ge=0)
    cache_gc_time: float = Field(DEFAULT_CACHE_GC_TIME, gt=0)
    cache_refetch_interval: float = Field(DEFAULT_CACHE_REFETCH_INTERVAL, gt=0)
    connectivity_check_host: str | None = DEFAULT_CONNECTIVITY_CHECK_HOST
    background_refresh: bool = True

    def require_credentials(self) -> None:
        """Raise if the spreadsheet id or API key is missing.

        Raises:
            SheetsConfigurationError: If either value is empty
        """
        missing = []
        if not self.spreadsheet_id.strip():
            missing.append("GOOGLE_SHEETS_SPREADSHEET_ID")
        if not self.api_key.strip():
            missing.append("GOOGLE_SHEETS_API_KEY")
        if missing:
            raise SheetsConfigurationError(missing)


def load_sheets_config() -> SheetsConfig:
    """Build the configuration from Django settings.

    Returns:
        SheetsConfig populated from settings, defaults where unset
    """
    return SheetsConfig(
        spreadsheet_id=getattr(settings, "GOOGLE_SHEETS_SPREADSHEET_ID", ""),
        api_key=getattr(settings, "GOOGLE_SHEETS_API_KEY", ""),
        base_url=getattr(settings, "SHEETS_API_BASE_URL", SHEETS_API_BASE_URL),
        request_timeout=getattr(
            settings, "SHEETS_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT
        ),
        rate_limit_requests=getattr(
            settings, "SHEETS_RATE_LIMIT_REQUESTS", DEFAULT_RATE_LIMIT_REQUESTS
        ),
        rate_limit_window=getattr(
            settings, "SHEETS_RATE_LIMIT_WINDOW", DEFAULT_RATE_LIMIT_WINDOW
        ),
        cache_alias=getattr(settings, "CAFE_CACHE_ALIAS", "default"),
        cache_stale_time=getattr(
            settings, "CAFE_CACHE_STALE_TIME", DEFAULT_CACHE_STALE_TIME
        ),
        cache_gc_time=getattr(settings, "CAFE_CACHE_GC_TIME", DEFAULT_CACHE_GC_TIME),
        cache_refetch_interval=getattr(
            settings, "CAFE_CACHE_REFETCH_INTERVAL", DEFAULT_CACHE_REFETCH_INTERVAL
        ),
        connectivity_check_host=getattr(
            settings, "CONNECTIVITY_CHECK_HOST", DEFAULT_CONNECTIVITY_CHECK_HOST
        ),
        background_refresh=getattr(settings, "CAFE_BACKGROUND_REFRESH", True),
    )
