"""Sliding-window rate limiter for Google Sheets API calls.

The Sheets API allows a fixed number of requests per minute per project.
This limiter keeps the timestamp of every request made inside the window
and admits a new request only while the window holds fewer than the
configured maximum.

Behaviour:
- Timestamps form a multiset: requests at the same instant are all counted
- Expired timestamps are purged lazily when the window is inspected
- Waiting for a slot schedules a single wake-up at the computed expiry
- The window is shared by request threads; every access holds a lock so a
  slot can be checked and taken in one step with try_acquire()
"""

import asyncio
import threading
import time
from collections import deque

import structlog

from core.constants import DEFAULT_RATE_LIMIT_REQUESTS, DEFAULT_RATE_LIMIT_WINDOW
from core.schemas.rate_limit_info import RateLimitInfo

logger = structlog.get_logger(__name__)


class RateLimiter:
    """Sliding-window request budget."""

    def __init__(
        self,
        max_requests: int = DEFAULT_RATE_LIMIT_REQUESTS,
        window_seconds: float = DEFAULT_RATE_LIMIT_WINDOW,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            max_requests: Requests allowed inside one window
            window_seconds: Length of the sliding window in seconds
        """
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        # Oldest first
        self._timestamps: deque[float] = deque()
        self._lock = threading.Lock()

    def can_make_request(self) -> bool:
        """Check whether a request would be admitted right now.

        Returns:
            True if fewer than max_requests were recorded inside the window
        """
        with self._lock:
            self._purge_expired(time.time())
            return len(self._timestamps) < self.max_requests

    def record_request(self) -> None:
        """Record a request made now."""
        with self._lock:
            self._timestamps.append(time.time())

    def try_acquire(self) -> float | None:
        """Check for a free slot and take it in one step.

        Returns:
            The recorded timestamp, or None if the window is full
        """
        with self._lock:
            now = time.time()
            self._purge_expired(now)
            if len(self._timestamps) >= self.max_requests:
                return None
            self._timestamps.append(now)
            return now

    def release(self, timestamp: float) -> None:
        """Give back a slot taken by try_acquire() for a request never sent."""
        with self._lock:
            try:
                self._timestamps.remove(timestamp)
            except ValueError:
                # Already aged out of the window
                pass

    def get_rate_limit_info(self) -> RateLimitInfo:
        """Get current window statistics.

        Returns:
            RateLimitInfo with the configured budget, in-window count and the
            time at which the oldest in-window request ages out
        """
        with self._lock:
            now = time.time()
            self._purge_expired(now)
            if self._timestamps:
                reset_time = self._timestamps[0] + self.window_seconds
            else:
                reset_time = now
            current_requests = len(self._timestamps)
        return RateLimitInfo(
            requests_per_minute=self.max_requests,
            current_requests=current_requests,
            reset_time=reset_time,
        )

    async def wait_for_available_slot(self) -> None:
        """Suspend until a request would be admitted.

        Returns immediately when a slot is free. Otherwise sleeps until the
        oldest in-window timestamp expires. The check is repeated after each
        wake-up because other tasks may have consumed the slot meanwhile.
        """
        while not self.can_make_request():
            info = self.get_rate_limit_info()
            wait_seconds = max(info.reset_time - time.time(), 0.0)
            logger.debug(
                "Waiting for rate limit slot",
                wait_seconds=round(wait_seconds, 3),
                current_requests=info.current_requests,
            )
            await asyncio.sleep(wait_seconds)

    def reset(self) -> None:
        """Forget every recorded request."""
        with self._lock:
            self._timestamps.clear()

    def _purge_expired(self, now: float) -> None:
        """Drop timestamps that are no longer strictly inside the window.

        Callers hold the lock.
        """
        cutoff = now - self.window_seconds
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()
