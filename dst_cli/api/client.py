"""
Async HTTP client for the Kyoto WDC DST archive.
"""

import asyncio
import logging
import time
from typing import Optional

import aiohttp
from yarl import URL

from dst_cli.exceptions import TransportError
from dst_cli.models.config import ArchiveConfig

from .rate_limiter import RequestThrottle

log = logging.getLogger(__name__)


class ArchiveClient:
    """
    Minimal GET client used as the transport for DstFetcher.

    Features:
    - Lazily created session, closed with `close()` or `async with`
    - Query strings sent verbatim (no re-sorting or re-quoting)
    - Fixed minimum delay between requests
    """

    def __init__(self, config: ArchiveConfig | None = None):
        """
        Initializes the client.

        Args:
            config: Archive settings; defaults are used when omitted.
        """
        self.config = config or ArchiveConfig()
        self._session: Optional[aiohttp.ClientSession] = None
        self._throttle = RequestThrottle(self.config.request_interval)

    async def __aenter__(self) -> "ArchiveClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self.config.user_agent},
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch(self, url: str) -> bytes:
        """
        Issues a single GET and returns the whole response body.

        Raises:
            TransportError: On connection errors, timeouts or a non-2xx status.
        """
        await self._initialize_session()
        await self._throttle.acquire()

        start_time = time.monotonic()
        try:
            # encoded=True keeps the archive's field order and '+' literals intact
            async with self._session.get(URL(url, encoded=True)) as r:
                if r.status >= 300:
                    raise TransportError(
                        f"Archive returned HTTP {r.status} {r.reason} for {url}",
                        url=url,
                        status=r.status,
                    )
                body = await r.read()
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request to {url} timed out after {self.config.timeout}s", url=url
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        duration_ms = (time.monotonic() - start_time) * 1000
        log.debug(f"GET {url} -> {len(body)} bytes in {duration_ms:.0f} ms")
        return body
