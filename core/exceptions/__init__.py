"""Exception handling utilities for the cafe discovery service."""

from core.exceptions.sheets_exceptions import (
    CafeNotFoundError,
    GoogleSheetsError,
    GoogleSheetsUnavailableError,
    NetworkError,
    RateLimitError,
    SheetsConfigurationError,
)
from core.exceptions.validation_exceptions import (
    DataValidationError,
    MalformedCellError,
    RowTooShortError,
    RowTransformError,
    SchemaValidationError,
)

__all__ = [
    "CafeNotFoundError",
    "DataValidationError",
    "GoogleSheetsError",
    "GoogleSheetsUnavailableError",
    "MalformedCellError",
    "NetworkError",
    "RateLimitError",
    "RowTooShortError",
    "RowTransformError",
    "SchemaValidationError",
    "SheetsConfigurationError",
]
