"""Retry policy for remote store calls.

The policy is a pair of pure functions mapping ``(attempt, error_kind)`` to
a delay in seconds, or ``None`` when the call must not be retried. Whoever
runs the retries owns the sleeping and the connectivity check.

``attempt`` is the zero-based index of the retry about to be made, so the
first retry of a query waits ``QUERY_RETRY_BASE_DELAY`` seconds.
"""

from core.constants import (
    MUTATION_MAX_RETRIES,
    MUTATION_RETRY_DELAY,
    QUERY_MAX_RETRIES,
    QUERY_RETRY_BASE_DELAY,
    QUERY_RETRY_MAX_DELAY,
)
from core.enums import ErrorKind
from core.exceptions import (
    CafeNotFoundError,
    DataValidationError,
    GoogleSheetsError,
    NetworkError,
    RateLimitError,
)

# Retrying these cannot succeed without the caller changing something
NON_RETRYABLE_KINDS = frozenset(
    {
        ErrorKind.RATE_LIMITED,
        ErrorKind.CLIENT,
        ErrorKind.NOT_FOUND,
        ErrorKind.VALIDATION,
    }
)


def classify_error(error: BaseException) -> ErrorKind:
    """Map an exception onto the kind the policy decides on."""
    if isinstance(error, RateLimitError):
        return ErrorKind.RATE_LIMITED
    if isinstance(error, NetworkError):
        return ErrorKind.NETWORK
    if isinstance(error, CafeNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(error, DataValidationError):
        return ErrorKind.VALIDATION
    if isinstance(error, GoogleSheetsError):
        if error.is_client_error:
            return ErrorKind.CLIENT
        return ErrorKind.SERVER
    return ErrorKind.UNKNOWN


def query_retry_delay(
    attempt: int,
    kind: ErrorKind,
    max_retries: int = QUERY_MAX_RETRIES,
    base_delay: float = QUERY_RETRY_BASE_DELAY,
    max_delay: float = QUERY_RETRY_MAX_DELAY,
) -> float | None:
    """Delay before retrying a read, or None to give up.

    Transient failures are retried up to ``max_retries`` times with
    exponential backoff: ``min(base_delay * 2**attempt, max_delay)``.
    """
    if kind in NON_RETRYABLE_KINDS or attempt >= max_retries:
        return None
    return min(base_delay * 2**attempt, max_delay)


def mutation_retry_delay(
    attempt: int,
    kind: ErrorKind,
    max_retries: int = MUTATION_MAX_RETRIES,
    delay: float = MUTATION_RETRY_DELAY,
) -> float | None:
    """Delay before retrying a write, or None to give up.

    Writes are retried at most ``max_retries`` times with a fixed delay so
    that a duplicated append stays bounded.
    """
    if kind in NON_RETRYABLE_KINDS or attempt >= max_retries:
        return None
    return delay
