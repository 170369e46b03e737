"""Connectivity probes for the remote store.

The data access layer only needs to know whether the network is up before
spending a request on it. Probes expose ``get_network_status()`` returning a
:class:`NetworkStatus`.
"""

import socket
import time
from typing import Protocol

import structlog

from core.constants import (
    CONNECTIVITY_CACHE_SECONDS,
    CONNECTIVITY_CHECK_TIMEOUT,
    DEFAULT_CONNECTIVITY_CHECK_PORT,
)
from core.schemas.network_status import NetworkStatus

logger = structlog.get_logger(__name__)


class ConnectivityProbe(Protocol):
    """Anything that can report whether the network is available."""

    def get_network_status(self) -> NetworkStatus:
        """Return the current connectivity status."""
        ...


class StaticConnectivityProbe:
    """Probe whose status is set explicitly.

    Used when connectivity is known from outside (or assumed, on a server),
    and in tests to simulate going offline.
    """

    def __init__(self, online: bool = True) -> None:
        self._online = online

    def get_network_status(self) -> NetworkStatus:
        return NetworkStatus(online=self._online)

    def set_online(self, online: bool) -> None:
        """Change the reported status."""
        if online != self._online:
            logger.info("Connectivity changed", online=online)
        self._online = online


class SocketConnectivityProbe:
    """Probe that opens a TCP connection to the remote store host.

    Results are cached for a few seconds so a burst of calls costs at most
    one connection attempt.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_CONNECTIVITY_CHECK_PORT,
        timeout: float = CONNECTIVITY_CHECK_TIMEOUT,
        cache_seconds: float = CONNECTIVITY_CACHE_SECONDS,
    ) -> None:
        """Initialize the socket probe.

        Args:
            host: Host to connect to
            port: TCP port to connect to
            timeout: Connection timeout in seconds
            cache_seconds: How long a result is reused
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self.cache_seconds = cache_seconds
        self._last_status: NetworkStatus | None = None
        self._last_check_time = 0.0

    def get_network_status(self) -> NetworkStatus:
        now = time.monotonic()
        if (
            self._last_status is not None
            and now - self._last_check_time < self.cache_seconds
        ):
            return self._last_status

        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                online = True
        except OSError as e:
            logger.warning(
                "Connectivity check failed",
                host=self.host,
                port=self.port,
                error=str(e),
            )
            online = False

        self._last_status = NetworkStatus(online=online)
        self._last_check_time = now
        return self._last_status
