"""Common behaviour of term structures.

A term structure is anchored at a reference date and measures time as the year
fraction from that date under its own day count convention.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fxpoints.core.time import Date
from fxpoints.core.types import DayCountConvention, Time
from fxpoints.observers.observable import Observable
from fxpoints.utilities.calendars import HolidayCalendar, NoHolidayCalendar
from fxpoints.utilities.conventions import year_fraction


class TermStructure(Observable, ABC):
    """Base class for curves parameterised on time from a reference date.

    Attributes:
        reference_date: Date at which time is zero
        day_count_convention: Convention turning dates into times
        calendar: Calendar used when curve dates are derived from tenors
        allows_extrapolation: Whether times past ``max_time`` are accepted
            without an explicit ``extrapolate`` request
    """

    def __init__(
        self,
        reference_date: Date,
        day_count_convention: DayCountConvention = DayCountConvention.A365,
        calendar: HolidayCalendar | None = None,
        allows_extrapolation: bool = False,
    ) -> None:
        super().__init__()
        self.reference_date = reference_date
        self.day_count_convention = DayCountConvention(day_count_convention)
        self.calendar = calendar or NoHolidayCalendar()
        self.allows_extrapolation = allows_extrapolation

    def time_from_reference(self, date: Date) -> Time:
        return year_fraction(self.reference_date, date, self.day_count_convention)

    def _to_time(self, when: Date | Time) -> Time:
        if isinstance(when, Date):
            return self.time_from_reference(when)
        return float(when)

    @abstractmethod
    def max_date(self) -> Date:
        """Latest date the curve is built for."""

    def max_time(self) -> Time:
        return self.time_from_reference(self.max_date())

    def enable_extrapolation(self, enabled: bool = True) -> None:
        self.allows_extrapolation = enabled
        self.notify_observers()

    def check_range(self, t: Time, extrapolate: bool = False) -> None:
        """Validate a time against the curve's range.

        Raises:
            ValueError: For negative times unless ``extrapolate``, and for times
                past ``max_time`` unless extrapolation is requested or enabled
        """
        if t < 0.0 and not extrapolate:
            raise ValueError(f"negative time ({t}) given")
        if t > self.max_time() and not (extrapolate or self.allows_extrapolation):
            raise ValueError(
                f"time ({t}) is past max curve time ({self.max_time()}, {self.max_date()})"
            )
