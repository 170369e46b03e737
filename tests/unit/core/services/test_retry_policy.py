"""Tests for the retry policy."""

from unittest import TestCase

from core.enums import ErrorKind
from core.exceptions import (
    CafeNotFoundError,
    GoogleSheetsError,
    GoogleSheetsUnavailableError,
    MalformedCellError,
    NetworkError,
    RateLimitError,
    SchemaValidationError,
)
from core.schemas import RateLimitInfo
from core.services.retry_policy import (
    classify_error,
    mutation_retry_delay,
    query_retry_delay,
)


class TestClassifyError(TestCase):
    """Test mapping exceptions onto error kinds."""

    def test_classification(self):
        """Test each exception type maps to its kind."""
        info = RateLimitInfo(requests_per_minute=300, current_requests=300, reset_time=0)
        cases = [
            (RateLimitError(info), ErrorKind.RATE_LIMITED),
            (NetworkError("timeout"), ErrorKind.NETWORK),
            (CafeNotFoundError("abc"), ErrorKind.NOT_FOUND),
            (SchemaValidationError("cafe", []), ErrorKind.VALIDATION),
            (MalformedCellError("images", "bad"), ErrorKind.VALIDATION),
            (GoogleSheetsError("denied", status_code=403), ErrorKind.CLIENT),
            (GoogleSheetsUnavailableError(503), ErrorKind.SERVER),
            (GoogleSheetsError("odd"), ErrorKind.SERVER),
            (RuntimeError("boom"), ErrorKind.UNKNOWN),
        ]
        for error, expected in cases:
            with self.subTest(error=type(error).__name__):
                self.assertEqual(classify_error(error), expected)


class TestQueryRetryDelay(TestCase):
    """Test the read retry policy."""

    def test_exponential_backoff_for_transient_errors(self):
        """Test delays double from one second and stop after three retries."""
        delays = [query_retry_delay(attempt, ErrorKind.NETWORK) for attempt in range(4)]

        self.assertEqual(delays, [1.0, 2.0, 4.0, None])

    def test_delay_is_capped(self):
        """Test the delay never exceeds the maximum."""
        self.assertEqual(
            query_retry_delay(10, ErrorKind.SERVER, max_retries=20), 30.0
        )

    def test_non_retryable_kinds(self):
        """Test rate limit, client, not-found and validation errors are final."""
        for kind in (
            ErrorKind.RATE_LIMITED,
            ErrorKind.CLIENT,
            ErrorKind.NOT_FOUND,
            ErrorKind.VALIDATION,
        ):
            with self.subTest(kind=kind):
                self.assertIsNone(query_retry_delay(0, kind))

    def test_unknown_errors_are_retried(self):
        """Test unclassified failures are treated as transient."""
        self.assertEqual(query_retry_delay(0, ErrorKind.UNKNOWN), 1.0)


class TestMutationRetryDelay(TestCase):
    """Test the write retry policy."""

    def test_single_retry_with_fixed_delay(self):
        """Test writes are retried once after two seconds."""
        self.assertEqual(mutation_retry_delay(0, ErrorKind.SERVER), 2.0)
        self.assertIsNone(mutation_retry_delay(1, ErrorKind.SERVER))

    def test_non_retryable_kinds(self):
        """Test client errors are never retried."""
        self.assertIsNone(mutation_retry_delay(0, ErrorKind.CLIENT))
        self.assertIsNone(mutation_retry_delay(0, ErrorKind.RATE_LIMITED))
