"""Base client for downstream HTTP APIs.

Every call takes a slot from the rate limiter and passes a connectivity
check before it is sent. The probe and the blocking ``requests`` call run in
worker threads so the event loop stays free; the call is bounded by the
client timeout.
"""

import asyncio
from typing import Any

import requests
import structlog

from core.constants import DEFAULT_REQUEST_TIMEOUT
from core.exceptions import (
    GoogleSheetsError,
    GoogleSheetsUnavailableError,
    NetworkError,
    RateLimitError,
)
from core.services.network_service import ConnectivityProbe, StaticConnectivityProbe
from core.services.rate_limiter import RateLimiter

logger = structlog.get_logger(__name__)


class BaseDownstreamClient:
    """Base class for downstream service HTTP clients."""

    def __init__(
        self,
        service_name: str,
        base_url: str,
        rate_limiter: RateLimiter | None = None,
        connectivity_probe: ConnectivityProbe | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        """Initialize base downstream client.

        Args:
            service_name: Name of the downstream service (for logging/errors)
            base_url: Base URL for the service
            rate_limiter: Admission control shared by every call of this client
            connectivity_probe: Checked before each call; assumes online if None
            timeout: Request timeout in seconds
        """
        self.service_name = service_name
        self.base_url = base_url.rstrip("/")
        self.rate_limiter = rate_limiter or RateLimiter()
        self.connectivity_probe = connectivity_probe or StaticConnectivityProbe()
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        """Get common HTTP headers for requests."""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _make_request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Make HTTP request with admission control and error handling.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Full URL for the request
            params: Query parameters
            json_data: JSON body data

        Returns:
            Response object with a 2xx status

        Raises:
            RateLimitError: If the local request budget is exhausted
            NetworkError: If offline, the transport fails or the call times out
            GoogleSheetsError: For client errors (4xx)
            GoogleSheetsUnavailableError: For server errors (5xx)
        """
        acquired_at = self.rate_limiter.try_acquire()
        if acquired_at is None:
            info = self.rate_limiter.get_rate_limit_info()
            logger.warning(
                "Rate limit exceeded, rejecting request",
                service=self.service_name,
                method=method,
                current_requests=info.current_requests,
                reset_time=info.reset_time,
            )
            raise RateLimitError(info)

        # Slot is taken before the probe and given back when offline
        if not await self._is_online():
            self.rate_limiter.release(acquired_at)
            logger.warning(
                "No network connection, skipping request",
                service=self.service_name,
                method=method,
            )
            raise NetworkError("no network connection")

        logger.info(
            "Making downstream service request",
            service=self.service_name,
            method=method,
            url=url,
        )

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    requests.request,
                    method=method,
                    url=url,
                    headers=self._get_headers(),
                    params=params,
                    json=json_data,
                    timeout=self.timeout,
                ),
                timeout=self.timeout,
            )
        except (requests.Timeout, asyncio.TimeoutError) as e:
            logger.error(
                "Downstream service request timed out",
                service=self.service_name,
                method=method,
                url=url,
                timeout=self.timeout,
            )
            raise NetworkError(f"request timed out after {self.timeout}s", e) from e
        except requests.RequestException as e:
            logger.error(
                "Failed to connect to downstream service",
                service=self.service_name,
                method=method,
                url=url,
                error=str(e),
            )
            raise NetworkError("connection failed", e) from e

        logger.info(
            "Received downstream service response",
            service=self.service_name,
            method=method,
            url=url,
            status_code=response.status_code,
        )

        if response.status_code >= 500:
            logger.error(
                "Downstream service returned server error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            message, _ = self._parse_error_body(response)
            raise GoogleSheetsUnavailableError(
                status_code=response.status_code,
                message=message,
            )

        if response.status_code >= 400:
            logger.error(
                "Downstream service returned client error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            message, code = self._parse_error_body(response)
            raise GoogleSheetsError(
                message=message
                or f"{self.service_name} returned {response.status_code}",
                code=code or "HTTP_ERROR",
                status_code=response.status_code,
                details=response.text,
            )

        return response

    async def _is_online(self) -> bool:
        """Ask the connectivity probe in a worker thread; probes may block."""
        status = await asyncio.to_thread(self.connectivity_probe.get_network_status)
        return status.online

    @staticmethod
    def _parse_error_body(response: requests.Response) -> tuple[str | None, str | None]:
        """Extract message and status from a Google API error body.

        Google APIs answer errors with
        ``{"error": {"code": 400, "message": "...", "status": "INVALID_ARGUMENT"}}``.

        Returns:
            Tuple of (message, status), either may be None
        """
        try:
            body = response.json()
        except ValueError:
            return None, None
        error = body.get("error") if isinstance(body, dict) else None
        if not isinstance(error, dict):
            return None, None
        return error.get("message"), error.get("status")
