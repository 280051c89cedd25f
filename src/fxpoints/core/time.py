"""Dates and tenors for FX valuation.

This module provides the Date class, the Period (tenor) class and the
arithmetic between them:

- ISO 8601 date parsing ("2020-03-11")
- Tenor parsing ("1W", "3M", "1Y") and normalised tenor comparison
- Month arithmetic clamping to the last day of shorter months
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta

from fxpoints.core.types import Tenor, TimeUnit


@dataclass(frozen=True, order=True)
class Date:
    """Immutable calendar date.

    Attributes:
        year: Year (1-9999)
        month: Month (1-12)
        day: Day of month, validated against the month length

    Example:
        >>> d = Date.from_iso("2020-03-11")
        >>> d + Period.parse("3M")
        Date(year=2020, month=6, day=11)
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        """Validate date components."""
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year must be 1-9999, got {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be 1-12, got {self.month}")
        last_day = calendar.monthrange(self.year, self.month)[1]
        if not 1 <= self.day <= last_day:
            raise ValueError(
                f"Day must be 1-{last_day} for {self.year}-{self.month:02d}, got {self.day}"
            )

    @classmethod
    def from_iso(cls, iso_string: str) -> Date:
        """Parse a YYYY-MM-DD string."""
        return parse_iso_date(iso_string)

    @classmethod
    def from_date(cls, value: date) -> Date:
        """Build from a ``datetime.date`` (or ``datetime``)."""
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls) -> Date:
        return cls.from_date(date.today())

    def to_iso(self) -> str:
        """Convert to ISO 8601 string (YYYY-MM-DD)."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_date(self) -> date:
        """Convert to a ``datetime.date``."""
        return date(self.year, self.month, self.day)

    def weekday(self) -> int:
        """Day of week, Monday=0 ... Sunday=6."""
        return self.to_date().weekday()

    def is_end_of_month(self) -> bool:
        """Check if this date is the last day of its month.

        Example:
            >>> Date(2024, 2, 29).is_end_of_month()
            True
        """
        return self.day == calendar.monthrange(self.year, self.month)[1]

    def add_days(self, days: int) -> Date:
        return Date.from_date(self.to_date() + timedelta(days=days))

    def add_period(self, period: Period | Tenor, end_of_month: bool = False) -> Date:
        """Add a tenor to this date.

        Args:
            period: Period or tenor string (e.g. '2W', '3M')
            end_of_month: Keep month-end dates at month end for month/year tenors

        Returns:
            New date after adding the period
        """
        return add_period(self, period, end_of_month)

    def days_between(self, other: Date) -> int:
        """Actual days from this date to ``other`` (negative if other is earlier).

        Example:
            >>> Date(2020, 3, 11).days_between(Date(2020, 3, 16))
            5
        """
        return (other.to_date() - self.to_date()).days

    def __add__(self, other: object) -> Date:
        if isinstance(other, Period):
            return add_period(self, other)
        if isinstance(other, int):
            return self.add_days(other)
        return NotImplemented

    def __sub__(self, other: object) -> Date:
        if isinstance(other, int):
            return self.add_days(-other)
        return NotImplemented

    def __str__(self) -> str:
        return self.to_iso()


@dataclass(frozen=True, eq=False)
class Period:
    """A tenor such as 1 week or 3 months.

    ``Period()`` is the empty tenor: forward rates read off a curve are
    addressed by time rather than by tenor and carry it.

    Comparison normalises units: 1W equals 7D, 1Y equals 12M, and every
    zero-length period equals every other.
    """

    length: int = 0
    unit: TimeUnit = TimeUnit.DAYS

    @classmethod
    def parse(cls, tenor: Tenor) -> Period:
        """Parse a tenor string.

        Example:
            >>> Period.parse("3M")
            Period(length=3, unit=<TimeUnit.MONTHS: 'M'>)
        """
        length, unit = parse_tenor(tenor)
        return cls(length, unit)

    def is_empty(self) -> bool:
        return self.length == 0

    def _normalised(self) -> tuple[str, int]:
        if self.length == 0:
            return ("", 0)
        if self.unit == TimeUnit.DAYS:
            return ("D", self.length)
        if self.unit == TimeUnit.WEEKS:
            return ("D", 7 * self.length)
        if self.unit == TimeUnit.MONTHS:
            return ("M", self.length)
        return ("M", 12 * self.length)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        return self._normalised() == other._normalised()

    def __hash__(self) -> int:
        return hash(self._normalised())

    def __str__(self) -> str:
        return f"{self.length}{self.unit.value}"


def parse_iso_date(iso_string: str) -> Date:
    """Parse an ISO 8601 date string into a Date.

    Accepts YYYY-MM-DD, optionally followed by a time part which is ignored.

    Raises:
        ValueError: If format is invalid

    Example:
        >>> parse_iso_date("2020-03-11")
        Date(year=2020, month=3, day=11)
    """
    match = re.match(r"^(\d{4})-(\d{2})-(\d{2})(?:[T\s]\d{2}:\d{2}:\d{2})?$", iso_string.strip())
    if not match:
        raise ValueError(f"Invalid ISO 8601 date format: {iso_string}. Expected YYYY-MM-DD")
    year, month, day = map(int, match.groups())
    return Date(year, month, day)


def parse_tenor(tenor: Tenor) -> tuple[int, TimeUnit]:
    """Parse tenor notation NU (N = number, U = D/W/M/Y).

    Raises:
        ValueError: If tenor format is invalid

    Example:
        >>> parse_tenor("1W")
        (1, <TimeUnit.WEEKS: 'W'>)
    """
    match = re.match(r"^(\d+)([DWMY])$", tenor.strip().upper())
    if not match:
        raise ValueError(
            f"Invalid tenor format: {tenor}. Expected format: NU where N=number, U=D/W/M/Y"
        )
    number_str, unit = match.groups()
    return int(number_str), TimeUnit(unit)


def add_period(d: Date, period: Period | Tenor, end_of_month: bool = False) -> Date:
    """Add a period to a date.

    Month and year tenors land on the same day number, clamped to the last day
    of shorter months (Jan 31 + 1M = Feb 28/29). With ``end_of_month`` a date
    at month end stays at month end.

    Example:
        >>> add_period(Date(2024, 1, 31), "1M")
        Date(year=2024, month=2, day=29)
    """
    if isinstance(period, str):
        period = Period.parse(period)

    if period.unit == TimeUnit.DAYS:
        return d.add_days(period.length)
    if period.unit == TimeUnit.WEEKS:
        return d.add_days(7 * period.length)

    months_to_add = period.length * (12 if period.unit == TimeUnit.YEARS else 1)
    total_months = (d.year * 12 + d.month - 1) + months_to_add
    new_year, new_month = total_months // 12, total_months % 12 + 1
    last_day = calendar.monthrange(new_year, new_month)[1]

    if end_of_month and d.is_end_of_month():
        return Date(new_year, new_month, last_day)
    return Date(new_year, new_month, min(d.day, last_day))
