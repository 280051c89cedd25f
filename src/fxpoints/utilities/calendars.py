"""Business day calendars.

A calendar decides which dates are business days and moves dates onto business
days according to a business day convention. FX spot and delivery dates are
rolled with these calendars.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fxpoints.core.time import Date, Period, add_period
from fxpoints.core.types import BusinessDayConvention, TimeUnit
from fxpoints.exceptions import ConventionError


class HolidayCalendar(ABC):
    """Abstract base class for holiday calendars.

    Subclasses only decide ``is_business_day``; adjustment and advancing are
    shared.
    """

    @abstractmethod
    def is_business_day(self, date: Date) -> bool:
        """Check if a date is a business day.

        Example:
            >>> MondayToFridayCalendar().is_business_day(Date(2020, 3, 16))  # Monday
            True
        """

    def next_business_day(self, date: Date) -> Date:
        """First business day on or after ``date``."""
        current = date
        while not self.is_business_day(current):
            current = current.add_days(1)
        return current

    def previous_business_day(self, date: Date) -> Date:
        """Last business day on or before ``date``."""
        current = date
        while not self.is_business_day(current):
            current = current.add_days(-1)
        return current

    def adjust(
        self,
        date: Date,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
    ) -> Date:
        """Move a date onto a business day.

        Modified conventions fall back to the other direction when the
        adjustment would leave the month.

        Raises:
            ConventionError: If the convention is not supported

        Example:
            >>> cal = MondayToFridayCalendar()
            >>> cal.adjust(Date(2020, 2, 29), BusinessDayConvention.MODIFIED_FOLLOWING)
            Date(year=2020, month=2, day=28)
        """
        if convention == BusinessDayConvention.UNADJUSTED or self.is_business_day(date):
            return date

        if convention == BusinessDayConvention.FOLLOWING:
            return self.next_business_day(date)
        if convention == BusinessDayConvention.PRECEDING:
            return self.previous_business_day(date)
        if convention == BusinessDayConvention.MODIFIED_FOLLOWING:
            adjusted = self.next_business_day(date)
            if adjusted.month != date.month:
                adjusted = self.previous_business_day(date)
            return adjusted
        if convention == BusinessDayConvention.MODIFIED_PRECEDING:
            adjusted = self.previous_business_day(date)
            if adjusted.month != date.month:
                adjusted = self.next_business_day(date)
            return adjusted
        raise ConventionError(
            "Unsupported business day convention", context={"convention": str(convention)}
        )

    def add_business_days(self, date: Date, days: int) -> Date:
        """Add a number of business days (negative moves backward).

        Example:
            >>> MondayToFridayCalendar().add_business_days(Date(2020, 3, 12), 2)
            Date(year=2020, month=3, day=16)
        """
        current = date
        step = 1 if days > 0 else -1
        remaining = abs(days)
        while remaining > 0:
            current = current.add_days(step)
            if self.is_business_day(current):
                remaining -= 1
        return current

    def advance(
        self,
        date: Date,
        period: Period | str,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
        end_of_month: bool = False,
    ) -> Date:
        """Move a date by a period.

        Day periods count business days. Week, month and year periods are added
        on the calendar and the result is then adjusted with ``convention``.

        Args:
            date: Starting date
            period: Period or tenor string such as "2D" or "3M"
            convention: Adjustment applied to week/month/year results
            end_of_month: Keep month-end dates at month end
        """
        if isinstance(period, str):
            period = Period.parse(period)
        if period.unit == TimeUnit.DAYS:
            if period.length == 0:
                return self.adjust(date, convention)
            return self.add_business_days(date, period.length)
        return self.adjust(add_period(date, period, end_of_month), convention)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class NoHolidayCalendar(HolidayCalendar):
    """Every day is a business day."""

    def is_business_day(self, date: Date) -> bool:  # noqa: ARG002
        return True


class MondayToFridayCalendar(HolidayCalendar):
    """Weekends are holidays; no public holidays."""

    def is_business_day(self, date: Date) -> bool:
        # Monday=0, Friday=4, Saturday=5, Sunday=6
        return date.weekday() < 5
