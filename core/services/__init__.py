"""Services for the core app."""

from core.services.background_refresh import BackgroundRefresher
from core.services.cache_coordinator import CacheCoordinator
from core.services.cafe_service import CafeService
from core.services.context import AppContext, build_app_context, get_app_context
from core.services.google_sheets_service import GoogleSheetsService
from core.services.network_service import (
    SocketConnectivityProbe,
    StaticConnectivityProbe,
)
from core.services.rate_limiter import RateLimiter
from core.services.validation_service import ValidationService, validation_service

__all__ = [
    "AppContext",
    "BackgroundRefresher",
    "CacheCoordinator",
    "CafeService",
    "GoogleSheetsService",
    "RateLimiter",
    "SocketConnectivityProbe",
    "StaticConnectivityProbe",
    "ValidationService",
    "build_app_context",
    "get_app_context",
    "validation_service",
]
