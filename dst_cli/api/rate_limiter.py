"""
Provides a request throttle that keeps a minimum delay between archive requests.
"""

import asyncio
import logging
import time

log = logging.getLogger(__name__)


class RequestThrottle:
    """
    Spaces out consecutive requests to the archive by a fixed minimum interval.
    """

    def __init__(self, min_interval: float = 1.0):
        """
        Initializes the throttle.

        Args:
            min_interval: Minimum number of seconds between two requests.
                Zero disables throttling.
        """
        if min_interval < 0:
            raise ValueError("min_interval cannot be negative.")
        self._min_interval = min_interval
        self._last_call_time: float | None = None
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        return self._min_interval

    async def acquire(self) -> None:
        """
        Waits if necessary so that at least `min_interval` seconds have passed
        since the previous call.
        """
        async with self._lock:
            now = time.monotonic()
            if self._last_call_time is not None:
                time_since_last = now - self._last_call_time
                if time_since_last < self._min_interval:
                    delay = self._min_interval - time_since_last
                    log.debug(f"Throttling next archive request by {delay:.2f}s")
                    await asyncio.sleep(delay)

            self._last_call_time = time.monotonic()
