"""HTTP connectivity probe - Implements IConnectivityProbe port.

Pings a URL; any HTTP answer below 500 means online. Transport errors
are retried briefly (tenacity) to ride out a flaky radio before
declaring the device offline.
"""

import logging
from typing import Any, Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_fixed

logger = logging.getLogger(__name__)


class HttpConnectivityProbe:
    """
    Connectivity probe implementing IConnectivityProbe port.

    Example:
        >>> async with HttpConnectivityProbe("https://project.supabase.co/rest/v1/") as probe:
        ...     if await probe.is_online():
        ...         ...
    """

    TIMEOUT_S = 3.0

    def __init__(self, url: str, attempts: int = 2, retry_wait_s: float = 0.5) -> None:
        """
        Initialize probe.

        Args:
            url: URL to ping
            attempts: Tries before giving up on transport errors
            retry_wait_s: Pause between tries
        """
        self._url = url
        self._attempts = attempts
        self._retry_wait_s = retry_wait_s
        self._session: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpConnectivityProbe":
        """Async context manager entry."""
        self._session = httpx.AsyncClient(timeout=httpx.Timeout(self.TIMEOUT_S))
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.aclose()
            self._session = None

    async def is_online(self) -> bool:
        """
        Check reachability.

        Returns:
            True if the URL answered with a status below 500
        """
        if not self._session:
            raise RuntimeError("Probe not initialized. Use async context manager.")

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._attempts),
                wait=wait_fixed(self._retry_wait_s),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await self._session.head(self._url)
        except httpx.TransportError as e:
            logger.info("Connectivity check failed", extra={"url": self._url, "error": str(e)})
            return False

        online = response.status_code < 500
        logger.debug(
            "Connectivity checked",
            extra={"url": self._url, "status": response.status_code, "online": online},
        )
        return online
