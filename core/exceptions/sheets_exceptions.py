"""Custom exceptions for Google Sheets communication."""

from typing import Any

from core.schemas.rate_limit_info import RateLimitInfo


class SheetsConfigurationError(Exception):
    """Required Google Sheets configuration is missing or invalid."""

    def __init__(self, missing: list[str]):
        """Initialize configuration error.

        Args:
            missing: Names of the settings that are missing
        """
        self.missing = missing
        super().__init__(
            f"Missing required Google Sheets configuration: {', '.join(missing)}"
        )


class GoogleSheetsError(Exception):
    """Base exception for Google Sheets errors.

    Raised directly when the Sheets API rejects a call.
    """

    def __init__(
        self,
        message: str,
        code: str = "HTTP_ERROR",
        status_code: int | None = None,
        details: Any = None,
    ):
        """Initialize Google Sheets error.

        Args:
            message: Error message
            code: Machine readable error code (upstream status string when known)
            status_code: HTTP status code if applicable
            details: Extra context about the failure
        """
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        """Whether the upstream rejected the request itself (4xx)."""
        return self.status_code is not None and 400 <= self.status_code < 500


class GoogleSheetsUnavailableError(GoogleSheetsError):
    """Google Sheets API is unavailable (5xx errors)."""

    def __init__(self, status_code: int, message: str | None = None):
        """Initialize service unavailable error.

        Args:
            status_code: HTTP status code (500, 503, etc.)
            message: Optional upstream error message
        """
        default_message = f"Google Sheets is unavailable (status: {status_code})"
        super().__init__(
            message=message or default_message,
            code="UNAVAILABLE",
            status_code=status_code,
        )


class RateLimitError(GoogleSheetsError):
    """Local admission control rejected the request."""

    def __init__(self, rate_limit_info: RateLimitInfo):
        """Initialize rate limit error.

        Args:
            rate_limit_info: Window statistics at the time of rejection
        """
        self.rate_limit_info = rate_limit_info
        super().__init__(
            message="Rate limit exceeded",
            code="RATE_LIMIT_EXCEEDED",
            details={"reset_time": rate_limit_info.reset_time},
        )

    @property
    def reset_time(self) -> float:
        """Epoch seconds at which a slot frees up."""
        return self.rate_limit_info.reset_time


class NetworkError(GoogleSheetsError):
    """No connectivity, transport failure or timeout."""

    def __init__(self, reason: str, original_error: Exception | None = None):
        """Initialize network error.

        Args:
            reason: Short description of the failure
            original_error: Underlying transport exception, if any
        """
        self.original_error = original_error
        super().__init__(
            message=f"Network request failed: {reason}",
            code="NETWORK_ERROR",
            details=str(original_error) if original_error else None,
        )


class CafeNotFoundError(GoogleSheetsError):
    """Cafe not found in the Cafes sheet."""

    def __init__(self, cafe_id: str):
        """Initialize cafe not found error.

        Args:
            cafe_id: ID of the cafe that was not found
        """
        self.cafe_id = cafe_id
        super().__init__(
            message=f"Cafe with ID {cafe_id} not found",
            code="CAFE_NOT_FOUND",
            status_code=404,
        )
