"""Request ID middleware for log correlation."""

import uuid
from collections.abc import Callable

import structlog
from django.http import HttpRequest, HttpResponse

from core.constants import REQUEST_ID_HEADER
from core.logging.context import clear_request_id, set_request_id

logger = structlog.get_logger(__name__)


class RequestIDMiddleware:
    """Tag every request with an ID that appears in its logs and response.

    An incoming ``X-Request-ID`` header is reused so a client can correlate
    its own logs; otherwise a UUID is generated.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            logger.debug(
                "Request completed",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
            )
            return response
        finally:
            clear_request_id()
