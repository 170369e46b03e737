"""Process-wide application context.

The rate limiter, connectivity probe, sheets store, cache coordinator,
cafe service and background refresher are built together once per process
and shared by every request. The shared context starts its refresher when
``CAFE_BACKGROUND_REFRESH`` is on. Tests build their own context with
:func:`build_app_context` or swap the shared one with :func:`set_app_context`.
"""

import threading
from dataclasses import dataclass

import structlog

from core.config import SheetsConfig, load_sheets_config
from core.services.background_refresh import BackgroundRefresher
from core.services.cache_coordinator import CacheCoordinator
from core.services.cafe_service import CafeService
from core.services.google_sheets_service import GoogleSheetsService
from core.services.network_service import (
    ConnectivityProbe,
    SocketConnectivityProbe,
    StaticConnectivityProbe,
)
from core.services.rate_limiter import RateLimiter

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AppContext:
    """Everything the data access layer shares across requests."""

    config: SheetsConfig
    rate_limiter: RateLimiter
    connectivity_probe: ConnectivityProbe
    sheets: GoogleSheetsService
    coordinator: CacheCoordinator
    cafe_service: CafeService
    refresher: BackgroundRefresher


def build_app_context(
    config: SheetsConfig | None = None,
    connectivity_probe: ConnectivityProbe | None = None,
) -> AppContext:
    """Build a new application context.

    Args:
        config: Sheets configuration; loaded from Django settings if None
        connectivity_probe: Probe to use; a socket probe against
            ``config.connectivity_check_host``, or always-online when no
            host is configured

    Raises:
        SheetsConfigurationError: If the spreadsheet id or API key is missing
    """
    config = config or load_sheets_config()

    if connectivity_probe is None:
        if config.connectivity_check_host:
            connectivity_probe = SocketConnectivityProbe(config.connectivity_check_host)
        else:
            connectivity_probe = StaticConnectivityProbe(online=True)

    rate_limiter = RateLimiter(config.rate_limit_requests, config.rate_limit_window)
    sheets = GoogleSheetsService(
        config,
        rate_limiter=rate_limiter,
        connectivity_probe=connectivity_probe,
    )
    coordinator = CacheCoordinator(
        cache_alias=config.cache_alias,
        stale_time=config.cache_stale_time,
        gc_time=config.cache_gc_time,
        refetch_interval=config.cache_refetch_interval,
        connectivity_probe=connectivity_probe,
    )

    cafe_service = CafeService(sheets, coordinator)

    logger.info(
        "Application context built",
        rate_limit_requests=config.rate_limit_requests,
        rate_limit_window=config.rate_limit_window,
        cache_alias=config.cache_alias,
        probe=type(connectivity_probe).__name__,
    )
    return AppContext(
        config=config,
        rate_limiter=rate_limiter,
        connectivity_probe=connectivity_probe,
        sheets=sheets,
        coordinator=coordinator,
        cafe_service=cafe_service,
        refresher=BackgroundRefresher(coordinator, cafe_service.refresh_jobs()),
    )


_app_context: AppContext | None = None
_app_context_lock = threading.Lock()


def get_app_context() -> AppContext:
    """Return the shared context, building it on first use."""
    global _app_context  # noqa: PLW0603
    with _app_context_lock:
        if _app_context is None:
            _app_context = build_app_context()
            if _app_context.config.background_refresh:
                _app_context.refresher.start()
        return _app_context


def set_app_context(context: AppContext | None) -> None:
    """Replace the shared context; None forces a rebuild on next use.

    The refresher of the replaced context is stopped.
    """
    global _app_context  # noqa: PLW0603
    with _app_context_lock:
        if _app_context is not None and _app_context is not context:
            _app_context.refresher.stop()
        _app_context = context
