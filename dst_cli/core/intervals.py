"""
Splits a year range into the bounded sub-intervals the Kyoto WDC archive accepts,
and encodes years into the archive's century/tens/unit date fields.
"""

from dataclasses import dataclass

JANUARY = 1
DECEMBER = 12


@dataclass(frozen=True)
class DateCode:
    """A four-digit year split the way the archive's query form expects it."""

    century: int
    tens: int
    unit: int

    @property
    def year(self) -> int:
        return self.century * 100 + self.tens + self.unit


def to_date_code(year: int) -> DateCode:
    """Encodes a year, e.g. 2013 -> DateCode(century=20, tens=10, unit=3)."""
    unit = year % 10
    tens = (year - unit) % 100
    century = (year - unit - tens) // 100
    return DateCode(century=century, tens=tens, unit=unit)


@dataclass(frozen=True)
class SubInterval:
    """One bounded archive query, January of the first year to December of the last."""

    start: DateCode
    end: DateCode
    start_month: int = JANUARY
    end_month: int = DECEMBER

    @property
    def start_year(self) -> int:
        return self.start.year

    @property
    def end_year(self) -> int:
        return self.end.year

    def query_fields(self) -> list[tuple[str, int]]:
        """Returns the eight positional date fields in the order the archive requires."""
        return [
            ("SCent", self.start.century),
            ("STens", self.start.tens),
            ("SYear", self.start.unit),
            ("SMonth", self.start_month),
            ("ECent", self.end.century),
            ("ETens", self.end.tens),
            ("EYear", self.end.unit),
            ("EMonth", self.end_month),
        ]


def partition(start_year: int, end_year: int, period: int) -> list[SubInterval]:
    """
    Splits [start_year, end_year] into consecutive sub-intervals of at most
    `period` years each.

    A full step nominally ends at `cursor + period`, which is the next step's
    first year, so its end is pulled back by one. The last step is clamped to
    `end_year` and kept inclusive.

    Args:
        start_year: First year to cover.
        end_year: Last year to cover (inclusive).
        period: Maximum number of years in one sub-interval.

    Returns:
        The sub-intervals in chronological order, covering the range exactly once.
    """
    if period < 1:
        raise ValueError(f"period must be at least 1, got {period}")
    if start_year > end_year:
        raise ValueError(
            f"start year {start_year} is after end year {end_year}"
        )

    intervals = []
    cursor = start_year
    while cursor <= end_year:
        step_end = cursor + period
        if step_end > end_year:
            last_year = end_year
        else:
            last_year = step_end - 1

        intervals.append(
            SubInterval(start=to_date_code(cursor), end=to_date_code(last_year))
        )
        cursor = last_year + 1

    return intervals
