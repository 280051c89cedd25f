"""Calendars, day count conventions and numerical helpers."""

from fxpoints.utilities.calendars import (
    HolidayCalendar,
    MondayToFridayCalendar,
    NoHolidayCalendar,
)
from fxpoints.utilities.conventions import day_count, year_fraction
from fxpoints.utilities.math import (
    all_in_forward_rate,
    continuous_discount_factor,
    interpolate_linear,
    interpolate_linear_vectorized,
    zero_rate_from_discount,
)

__all__ = [
    # Calendars
    "HolidayCalendar",
    "NoHolidayCalendar",
    "MondayToFridayCalendar",
    # Conventions
    "year_fraction",
    "day_count",
    # Math
    "interpolate_linear",
    "interpolate_linear_vectorized",
    "all_in_forward_rate",
    "continuous_discount_factor",
    "zero_rate_from_discount",
]
