"""Day count conventions.

Year fractions turn date pairs into the times that term structures are
parameterised on. ``year_fraction(end, start) == -year_fraction(start, end)``
for every convention.

References:
    ISDA 2006 Definitions, Section 4.16
"""

from __future__ import annotations

import calendar

from fxpoints.core.time import Date
from fxpoints.core.types import DayCountConvention
from fxpoints.exceptions import ConventionError


def year_fraction(start: Date, end: Date, convention: DayCountConvention | str) -> float:
    """Calculate the year fraction between two dates.

    Args:
        start: Start date
        end: End date (may precede start, giving a negative fraction)
        convention: Day count convention or its code (e.g. "A365")

    Returns:
        Year fraction as a float

    Raises:
        ConventionError: If the convention is unknown

    Example:
        >>> year_fraction(Date(2020, 3, 11), Date(2020, 3, 16), DayCountConvention.A360) * 360
        5.0
    """
    convention = _as_convention(convention)
    if end < start:
        return -year_fraction(end, start, convention)

    if convention == DayCountConvention.AA:
        return _year_fraction_aa(start, end)
    if convention == DayCountConvention.A365:
        return day_count(start, end, convention) / 365.0
    if convention in (
        DayCountConvention.A360,
        DayCountConvention.E30360,
        DayCountConvention.B30360,
    ):
        return day_count(start, end, convention) / 360.0
    raise ConventionError(
        "Unsupported day count convention",
        context={"convention": str(convention), "supported": [c.value for c in DayCountConvention]},
    )


def day_count(start: Date, end: Date, convention: DayCountConvention | str) -> int:
    """Number of days between two dates as the convention counts them."""
    convention = _as_convention(convention)
    if convention == DayCountConvention.E30360:
        return _days_30e360(start, end) if start <= end else -_days_30e360(end, start)
    if convention == DayCountConvention.B30360:
        return _days_30360(start, end) if start <= end else -_days_30360(end, start)
    return start.days_between(end)


def _as_convention(convention: DayCountConvention | str) -> DayCountConvention:
    if isinstance(convention, DayCountConvention):
        return convention
    try:
        return DayCountConvention(convention)
    except ValueError as e:
        raise ConventionError(
            "Unsupported day count convention",
            context={"convention": convention, "supported": [c.value for c in DayCountConvention]},
        ) from e


def _year_fraction_aa(start: Date, end: Date) -> float:
    """Actual/Actual ISDA: days in each calendar year over that year's length."""
    total_fraction = 0.0
    current = start

    while current.year < end.year:
        next_year = Date(current.year + 1, 1, 1)
        days_in_year = 366 if calendar.isleap(current.year) else 365
        total_fraction += current.days_between(next_year) / days_in_year
        current = next_year

    if current < end:
        days_in_year = 366 if calendar.isleap(end.year) else 365
        total_fraction += current.days_between(end) / days_in_year

    return total_fraction


def _days_30e360(start: Date, end: Date) -> int:
    """30E/360 (Eurobond basis): day 31 becomes 30 on both ends."""
    d1 = min(start.day, 30)
    d2 = min(end.day, 30)
    return (end.year - start.year) * 360 + (end.month - start.month) * 30 + (d2 - d1)


def _days_30360(start: Date, end: Date) -> int:
    """30/360 US (Bond Basis): end day 31 becomes 30 only if start day is 30 or 31."""
    d1 = min(start.day, 30)
    d2 = end.day
    if d1 >= 30 and d2 == 31:
        d2 = 30
    return (end.year - start.year) * 360 + (end.month - start.month) * 30 + (d2 - d1)
