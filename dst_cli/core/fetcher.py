"""
Orchestrates a DST download: validates the requested years, partitions them into
archive-sized intervals, fetches each interval in order and joins the results.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from dst_cli.exceptions import InvalidRangeError

from .intervals import SubInterval, partition

log = logging.getLogger(__name__)

# The DST index collection began in 1957.
FIRST_YEAR = 1957
DEFAULT_PERIOD = 25
ARCHIVE_URL = "https://wdc.kugi.kyoto-u.ac.jp/cgi-bin/dstae-cgi"

# Fixed output-format fields appended after the date fields. Order matters.
_FORMAT_FIELDS = [
    ("Image+Type", "GIF"),
    ("COLOR", "COLOR"),
    ("AE+Sensitivity", "0"),
    ("Dst+Sensitivity", "0"),
    ("Output", "DST"),
    ("Out+format", "WDC"),
]

Fetch = Callable[[str], Awaitable[bytes]]


def _wall_clock_year() -> int:
    return datetime.now().year


class DstFetcher:
    """
    Downloads DST index data for arbitrary year ranges.

    The archive rejects queries spanning more than `period` years, so a long
    range is split into several requests that are issued one after another.
    """

    def __init__(
        self,
        fetch: Fetch,
        period: int = DEFAULT_PERIOD,
        current_year: Callable[[], int] = _wall_clock_year,
        base_url: str = ARCHIVE_URL,
    ):
        """
        Args:
            fetch: Coroutine function performing a GET and returning the body.
            period: Maximum number of years the archive accepts per query.
            current_year: Returns the present calendar year.
            base_url: Address of the archive's query endpoint.
        """
        if period < 1:
            raise ValueError(f"period must be at least 1, got {period}")
        self._fetch = fetch
        self._period = period
        self._current_year = current_year
        self._base_url = base_url

    @property
    def period(self) -> int:
        return self._period

    def current_year(self) -> int:
        return self._current_year()

    def build_url(self, interval: SubInterval) -> str:
        """
        Builds the query URL for one interval.

        The archive refuses alphabetically sorted query strings, so the fields
        are concatenated in their fixed order instead of going through urlencode.
        """
        fields = [f"{name}={value}" for name, value in interval.query_fields()]
        fields += [f"{name}={value}" for name, value in _FORMAT_FIELDS]
        return f"{self._base_url}?{'&'.join(fields)}"

    def plan(self, start_year: int, end_year: int) -> list[SubInterval]:
        """Validates the range and returns the intervals that would be fetched."""
        current_year = self._current_year()

        if start_year < FIRST_YEAR:
            raise InvalidRangeError(
                start_year,
                f"expected start year to be {FIRST_YEAR} or later, got {start_year}",
            )
        if end_year > current_year:
            raise InvalidRangeError(
                end_year,
                f"expected end year to be {current_year} or earlier, got {end_year}",
            )
        if start_year > end_year:
            raise InvalidRangeError(
                start_year,
                f"start year {start_year} is after end year {end_year}",
            )

        return partition(start_year, end_year, self._period)

    async def fetch_range(self, start_year: int, end_year: int) -> bytes:
        """
        Returns the DST index data from January of `start_year` through December
        of `end_year`.

        Raises:
            InvalidRangeError: If the range starts before 1957, ends after the
                current year, or is reversed.
            Whatever the fetch callable raises; nothing is returned for
                intervals fetched before the failure.
        """
        intervals = self.plan(start_year, end_year)
        log.debug(
            f"Fetching {start_year}-{end_year} in {len(intervals)} request(s) "
            f"of at most {self._period} years"
        )

        data = bytearray()
        for index, interval in enumerate(intervals, start=1):
            url = self.build_url(interval)
            log.info(
                f"Fetching {interval.start_year}-{interval.end_year} "
                f"({index}/{len(intervals)})"
            )
            try:
                body = await self._fetch(url)
            except Exception as e:
                log.debug(
                    f"Request for {interval.start_year}-{interval.end_year} failed: {e}"
                )
                raise
            data += body

        return bytes(data)

    async def fetch_all(self) -> bytes:
        """Returns the DST index data from 1957 up to the current year."""
        return await self.fetch_range(FIRST_YEAR, self.current_year())
