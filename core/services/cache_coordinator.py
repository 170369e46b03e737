"""Query cache with staleness windows, retries and offline fallback.

Entries live in a Django cache backend as ``{"data", "updated_at", "stale"}``.
An entry younger than the stale time is served without touching the remote
store. Older entries are refetched; when the refetch fails the last known
good data is served instead of the error. The cache timeout is the retention
time and is refreshed whenever an entry is read.

Fetches for the same key are shared and shielded: a caller that is
cancelled stops waiting, but an admitted request still completes and still
updates the cache. Sharing is per event loop. Sync views enter through
``async_to_sync``, which gives each request thread its own loop, so
concurrent requests on different threads fetch independently.
"""

import asyncio
import functools
import threading
import time
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

import structlog
from django.core.cache import caches

from core.constants import (
    DEFAULT_CACHE_GC_TIME,
    DEFAULT_CACHE_REFETCH_INTERVAL,
    DEFAULT_CACHE_STALE_TIME,
)
from core.services.network_service import ConnectivityProbe, StaticConnectivityProbe
from core.services.retry_policy import (
    classify_error,
    mutation_retry_delay,
    query_retry_delay,
)

logger = structlog.get_logger(__name__)

ResultT = TypeVar("ResultT")

KEY_NAMESPACE = "cafe-discovery:query:"

# In-flight fetches are shared per (event loop, query key)
FlightKey = tuple[asyncio.AbstractEventLoop, str]


class CacheCoordinator:
    """Decides when cached query data is trusted and when it is refetched."""

    def __init__(
        self,
        cache_alias: str = "default",
        stale_time: float = DEFAULT_CACHE_STALE_TIME,
        gc_time: float = DEFAULT_CACHE_GC_TIME,
        refetch_interval: float = DEFAULT_CACHE_REFETCH_INTERVAL,
        connectivity_probe: ConnectivityProbe | None = None,
    ):
        """Initialize the cache coordinator.

        Args:
            cache_alias: Django cache alias holding the entries
            stale_time: Seconds an entry is served without refetching
            gc_time: Seconds an unread entry is retained
            refetch_interval: Seconds between background refresh checks
            connectivity_probe: Retries only happen while this reports online
        """
        self.cache = caches[cache_alias]
        self.stale_time = stale_time
        self.gc_time = gc_time
        self.refetch_interval = refetch_interval
        self.connectivity_probe = connectivity_probe or StaticConnectivityProbe()
        self._foreground = True
        self._lock = threading.Lock()
        self._keys: set[str] = set()
        self._in_flight: dict[FlightKey, asyncio.Future] = {}

    async def query(
        self, key: str, fetcher: Callable[[], Awaitable[ResultT]]
    ) -> ResultT:
        """Return data for a key, fetching it only when needed.

        Args:
            key: Query key, e.g. ``cafes:list:{}``
            fetcher: Coroutine function producing fresh data

        Returns:
            Cached data while fresh, otherwise the fetched data. If fetching
            fails and the key was cached before, the cached data.

        Raises:
            Exception: The fetch error, when nothing is cached for the key
        """
        entry = self._get_entry(key)
        if entry is not None and not self._entry_is_stale(entry):
            logger.debug("Cache hit", key=key)
            return entry["data"]

        try:
            return await self._fetch(key, fetcher)
        except Exception as e:
            if entry is None:
                raise
            logger.warning(
                "Serving cached data after fetch failure",
                key=key,
                error=str(e),
                error_kind=classify_error(e),
                cached_at=entry["updated_at"],
            )
            return entry["data"]

    async def mutate(
        self,
        mutation: Callable[[], Awaitable[ResultT]],
        invalidate: Iterable[str] = (),
    ) -> ResultT:
        """Run a write, retrying transient failures once.

        Args:
            mutation: Coroutine function performing the write
            invalidate: Key prefixes marked stale after a successful write

        Returns:
            Whatever the mutation returns

        Raises:
            Exception: The last error of the mutation
        """
        attempt = 0
        while True:
            try:
                result = await mutation()
                break
            except Exception as e:
                kind = classify_error(e)
                delay = mutation_retry_delay(attempt, kind)
                if delay is None or not await self._is_online():
                    logger.warning(
                        "Mutation failed",
                        attempt=attempt,
                        error_kind=kind,
                        error=str(e),
                    )
                    raise
                logger.info(
                    "Retrying mutation",
                    attempt=attempt + 1,
                    error_kind=kind,
                    delay=delay,
                )
                await self._sleep(delay)
                attempt += 1

        for prefix in invalidate:
            self.invalidate(prefix)
        return result

    def invalidate(self, prefix: str = "") -> int:
        """Mark every entry whose key starts with prefix as stale.

        Stale entries are refetched on the next query but kept so they can
        still be served while offline.

        Returns:
            Number of entries marked stale
        """
        count = 0
        for key in self._matching_keys(prefix):
            entry = self.cache.get(self._cache_key(key))
            if entry is None:
                self._forget(key)
                continue
            entry["stale"] = True
            self.cache.set(self._cache_key(key), entry, timeout=self.gc_time)
            count += 1
        logger.debug("Invalidated cache entries", prefix=prefix, count=count)
        return count

    def remove(self, key: str) -> None:
        """Drop an entry entirely."""
        self.cache.delete(self._cache_key(key))
        self._forget(key)

    def get_cached(self, key: str) -> Any | None:
        """Return cached data for a key, fresh or stale, without fetching."""
        entry = self._get_entry(key)
        return entry["data"] if entry is not None else None

    def is_stale(self, key: str) -> bool:
        """Whether a query for the key would refetch."""
        entry = self.cache.get(self._cache_key(key))
        return entry is None or self._entry_is_stale(entry)

    def clear(self) -> None:
        """Drop every entry this coordinator has stored."""
        with self._lock:
            keys = list(self._keys)
            self._keys.clear()
        self.cache.delete_many([self._cache_key(key) for key in keys])

    def set_foreground(self, foreground: bool) -> None:
        """Tell the coordinator whether the app is in the foreground."""
        self._foreground = foreground

    def start_background_refresh(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        interval: float | None = None,
    ) -> asyncio.Task:
        """Periodically refresh a stale entry while in the foreground.

        Returns:
            The refresh task; cancel it to stop refreshing
        """
        return asyncio.create_task(
            self._refresh_loop(key, fetcher, interval or self.refetch_interval),
            name=f"refresh:{key}",
        )

    async def _refresh_loop(
        self, key: str, fetcher: Callable[[], Awaitable[Any]], interval: float
    ) -> None:
        while True:
            await self._sleep(interval)
            if not self._foreground:
                logger.debug("Skipping background refresh in background", key=key)
                continue
            if not self.is_stale(key):
                continue
            try:
                await self._fetch(key, fetcher)
                logger.info("Background refresh completed", key=key)
            except Exception as e:
                logger.warning(
                    "Background refresh failed",
                    key=key,
                    error=str(e),
                    error_kind=classify_error(e),
                )

    async def _fetch(self, key: str, fetcher: Callable[[], Awaitable[ResultT]]) -> ResultT:
        # A task can only be awaited from the loop it runs on
        loop = asyncio.get_running_loop()
        flight_key = (loop, key)
        with self._lock:
            task = self._in_flight.get(flight_key)
            if task is None:
                task = loop.create_task(self._fetch_with_retry(key, fetcher))
                self._in_flight[flight_key] = task
                task.add_done_callback(
                    functools.partial(self._fetch_done, flight_key)
                )
        return await asyncio.shield(task)

    def _fetch_done(self, flight_key: FlightKey, task: asyncio.Future) -> None:
        with self._lock:
            if self._in_flight.get(flight_key) is task:
                del self._in_flight[flight_key]
        # Retrieve the error so an abandoned fetch does not warn at exit
        if not task.cancelled():
            task.exception()

    async def _fetch_with_retry(
        self, key: str, fetcher: Callable[[], Awaitable[ResultT]]
    ) -> ResultT:
        attempt = 0
        while True:
            try:
                data = await fetcher()
                break
            except Exception as e:
                kind = classify_error(e)
                delay = query_retry_delay(attempt, kind)
                if delay is None or not await self._is_online():
                    logger.warning(
                        "Query failed",
                        key=key,
                        attempt=attempt,
                        error_kind=kind,
                        error=str(e),
                    )
                    raise
                logger.info(
                    "Retrying query",
                    key=key,
                    attempt=attempt + 1,
                    error_kind=kind,
                    delay=delay,
                )
                await self._sleep(delay)
                attempt += 1

        self._store(key, data)
        return data

    def _store(self, key: str, data: Any) -> None:
        entry = {"data": data, "updated_at": time.time(), "stale": False}
        self.cache.set(self._cache_key(key), entry, timeout=self.gc_time)
        with self._lock:
            self._keys.add(key)

    def _get_entry(self, key: str) -> dict[str, Any] | None:
        cache_key = self._cache_key(key)
        entry = self.cache.get(cache_key)
        if entry is None:
            self._forget(key)
            return None
        self.cache.touch(cache_key, timeout=self.gc_time)
        return entry

    def _entry_is_stale(self, entry: dict[str, Any]) -> bool:
        return entry["stale"] or time.time() - entry["updated_at"] >= self.stale_time

    def _matching_keys(self, prefix: str) -> list[str]:
        with self._lock:
            return [key for key in self._keys if key.startswith(prefix)]

    def _forget(self, key: str) -> None:
        with self._lock:
            self._keys.discard(key)

    async def _is_online(self) -> bool:
        status = await asyncio.to_thread(self.connectivity_probe.get_network_status)
        return status.online

    @staticmethod
    def _cache_key(key: str) -> str:
        return f"{KEY_NAMESPACE}{key}"

    @staticmethod
    async def _sleep(seconds: float) -> None:
        await asyncio.sleep(seconds)
