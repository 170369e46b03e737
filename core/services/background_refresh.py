"""Periodic cache revalidation on a dedicated event loop.

Request handlers run the async layer on short-lived loops (one per
``async_to_sync`` call), so a refresh task started from a view would die
with its request. The refresher owns a daemon thread running one loop for
the life of the process and schedules the coordinator's refresh tasks on it.
"""

import asyncio
import threading
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import structlog

from core.services.cache_coordinator import CacheCoordinator

logger = structlog.get_logger(__name__)

RefreshJob = tuple[str, Callable[[], Awaitable[Any]]]


class BackgroundRefresher:
    """Runs background refreshes of selected query keys."""

    def __init__(
        self,
        coordinator: CacheCoordinator,
        jobs: Sequence[RefreshJob],
        interval: float | None = None,
    ) -> None:
        """Initialize the refresher.

        Args:
            coordinator: Coordinator whose entries are refreshed
            jobs: (query key, fetcher) pairs to keep fresh
            interval: Seconds between checks; the coordinator's
                refetch interval if None
        """
        self.coordinator = coordinator
        self.jobs = list(jobs)
        self.interval = interval
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._tasks: list[asyncio.Task] = []
        self._started = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the refresh thread; does nothing if it is already running."""
        if self.is_running:
            return
        self._started.clear()
        self._thread = threading.Thread(
            target=self._run, name="cache-refresh", daemon=True
        )
        self._thread.start()
        self._started.wait()
        logger.info(
            "Background refresh started",
            keys=[key for key, _ in self.jobs],
            interval=self.interval or self.coordinator.refetch_interval,
        )

    def stop(self, timeout: float = 5.0) -> None:
        """Cancel the refresh tasks and wait for the thread to finish."""
        if not self.is_running:
            return
        for task in self._tasks:
            self._loop.call_soon_threadsafe(task.cancel)
        self._thread.join(timeout)
        self._thread = None
        logger.info("Background refresh stopped")

    def _run(self) -> None:
        asyncio.run(self._main())

    async def _main(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._tasks = [
            self.coordinator.start_background_refresh(key, fetcher, self.interval)
            for key, fetcher in self.jobs
        ]
        self._started.set()
        await asyncio.gather(*self._tasks, return_exceptions=True)
