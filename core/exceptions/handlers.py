"""Global exception handlers for the cafe discovery service."""

import logging
import math
import time
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions.sheets_exceptions import (
    CafeNotFoundError,
    GoogleSheetsError,
    GoogleSheetsUnavailableError,
    NetworkError,
    RateLimitError,
)
from core.exceptions.validation_exceptions import SchemaValidationError
from core.logging.context import get_request_id

logger = logging.getLogger(__name__)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Custom exception handler for Django REST Framework.

    Handles DRF, Django and Google Sheets exceptions, providing:
    - Standard response format for clients: {status, message, request_id, timestamp}
    - Detailed logging for troubleshooting: error type, path, stack trace, request info

    Sheets errors map to HTTP status codes as follows:
    - RateLimitError: 429 with a Retry-After header
    - NetworkError / GoogleSheetsUnavailableError: 503
    - CafeNotFoundError: 404
    - any other GoogleSheetsError: 502
    - SchemaValidationError: 400 with the violated constraints

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        A Response object with the error details, or None for unhandled exceptions.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_request_id()

    # Let DRF handle its own exceptions first
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, RateLimitError):
            retry_after = max(1, math.ceil(exc.reset_time - time.time()))
            response_data = _create_error_response(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                message="Google Sheets request budget exhausted. Try again later.",
                request_id=request_id,
            )
            response_data["retry_after"] = retry_after
            response = Response(
                response_data,
                status=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(retry_after)},
            )
        elif isinstance(exc, CafeNotFoundError):
            response_data = _create_error_response(
                status_code=status.HTTP_404_NOT_FOUND,
                message=str(exc),
                request_id=request_id,
            )
            response = Response(response_data, status=status.HTTP_404_NOT_FOUND)
        elif isinstance(exc, (NetworkError, GoogleSheetsUnavailableError)):
            response_data = _create_error_response(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                message="The cafe data store is currently unreachable.",
                request_id=request_id,
            )
            response = Response(
                response_data, status=status.HTTP_503_SERVICE_UNAVAILABLE
            )
        elif isinstance(exc, GoogleSheetsError):
            response_data = _create_error_response(
                status_code=status.HTTP_502_BAD_GATEWAY,
                message=str(exc),
                request_id=request_id,
            )
            response_data["code"] = exc.code
            response = Response(response_data, status=status.HTTP_502_BAD_GATEWAY)
        elif isinstance(exc, SchemaValidationError):
            response_data = _create_error_response(
                status_code=status.HTTP_400_BAD_REQUEST,
                message=str(exc),
                request_id=request_id,
            )
            response_data["errors"] = exc.errors
            response = Response(response_data, status=status.HTTP_400_BAD_REQUEST)
        elif isinstance(exc, Http404):
            response_data = _create_error_response(
                status_code=status.HTTP_404_NOT_FOUND,
                message="The requested resource was not found.",
                request_id=request_id,
            )
            response = Response(response_data, status=status.HTTP_404_NOT_FOUND)
        elif isinstance(exc, PermissionDenied):
            response_data = _create_error_response(
                status_code=status.HTTP_403_FORBIDDEN,
                message="You do not have permission to perform this action.",
                request_id=request_id,
            )
            response = Response(response_data, status=status.HTTP_403_FORBIDDEN)
        else:
            # Unhandled exception - log as error and return 500
            response_data = _create_error_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message="An internal server error occurred.",
                request_id=request_id,
            )
            response = Response(
                response_data, status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    # Add request ID to response if available
    if request_id and response:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response)

    return response


def _create_error_response(
    status_code: int, message: str, request_id: str | None
) -> dict[str, Any]:
    """Create a standardized error response.

    Args:
        status_code: The HTTP status code.
        message: The error message to return to the client.
        request_id: The request ID for tracing.

    Returns:
        Dictionary with standard error response format.
    """
    return {
        "status": status_code,
        "message": message,
        "request_id": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _log_exception(
    exc: Exception,
    request: Any,
    response: Response | None,
) -> None:
    """Log detailed exception information for troubleshooting.

    Client errors (4xx) are logged as warnings, everything else as errors.
    In DEBUG mode, logs include stack traces and request details.

    Args:
        exc: The exception that was raised.
        request: The HTTP request object.
        response: The response object (if available).
    """
    status_code = response.status_code if response else 500
    if isinstance(exc, APIException) or 400 <= status_code < 500:
        log_level = logging.WARNING if status_code < 500 else logging.ERROR
    else:
        log_level = logging.ERROR

    error_type = type(exc).__name__
    request_path = request.path if request else "unknown"
    request_method = request.method if request else "unknown"

    log_message = (
        f"Exception occurred: {error_type}: {exc} | "
        f"Path: {request_method} {request_path} | "
        f"Status: {status_code}"
    )

    if settings.DEBUG:
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"

    if request and settings.DEBUG:
        log_message += f"\nRequest details: {_get_request_details(request)}"

    logger.log(log_level, log_message)


def _get_request_details(request: Any) -> str:
    """Extract relevant request details for logging.

    Args:
        request: The HTTP request object.

    Returns:
        String with formatted request details.
    """
    details = {
        "method": request.method,
        "path": request.path,
        "ip": request.META.get("REMOTE_ADDR", "unknown"),
    }

    if request.GET:
        details["query_params"] = dict(request.GET)

    return str(details)
