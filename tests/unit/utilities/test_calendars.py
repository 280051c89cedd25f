"""Unit tests for business day calendars."""

import pytest

from fxpoints.core.time import Date, Period
from fxpoints.core.types import BusinessDayConvention
from fxpoints.exceptions import ConventionError
from fxpoints.utilities.calendars import MondayToFridayCalendar, NoHolidayCalendar

SATURDAY = Date(2020, 3, 14)
MONDAY = Date(2020, 3, 16)


class TestNoHolidayCalendar:
    """Test the calendar without holidays."""

    def test_every_day_is_business_day(self):
        cal = NoHolidayCalendar()
        assert cal.is_business_day(SATURDAY)
        assert cal.adjust(SATURDAY, BusinessDayConvention.PRECEDING) == SATURDAY

    def test_adjust_is_identity(self):
        assert NoHolidayCalendar().adjust(SATURDAY) == SATURDAY


class TestMondayToFridayCalendar:
    """Test weekend handling and adjustment conventions."""

    def test_weekends(self):
        cal = MondayToFridayCalendar()
        assert not cal.is_business_day(SATURDAY)
        assert not cal.is_business_day(Date(2020, 3, 15))
        assert cal.is_business_day(MONDAY)

    def test_following(self):
        assert MondayToFridayCalendar().adjust(SATURDAY) == MONDAY

    def test_preceding(self):
        cal = MondayToFridayCalendar()
        assert cal.adjust(SATURDAY, BusinessDayConvention.PRECEDING) == Date(2020, 3, 13)

    def test_unadjusted(self):
        cal = MondayToFridayCalendar()
        assert cal.adjust(SATURDAY, BusinessDayConvention.UNADJUSTED) == SATURDAY

    def test_modified_following_stays_in_month(self):
        """2020-02-29 is a Saturday; following would cross into March."""
        cal = MondayToFridayCalendar()
        adjusted = cal.adjust(Date(2020, 2, 29), BusinessDayConvention.MODIFIED_FOLLOWING)
        assert adjusted == Date(2020, 2, 28)

    def test_modified_preceding_stays_in_month(self):
        """2020-03-01 is a Sunday; preceding would cross into February."""
        cal = MondayToFridayCalendar()
        adjusted = cal.adjust(Date(2020, 3, 1), BusinessDayConvention.MODIFIED_PRECEDING)
        assert adjusted == Date(2020, 3, 2)

    def test_unknown_convention(self):
        with pytest.raises(ConventionError):
            MondayToFridayCalendar().adjust(SATURDAY, "END_OF_WEEK")

    def test_business_day_unchanged(self):
        cal = MondayToFridayCalendar()
        assert cal.adjust(MONDAY, BusinessDayConvention.PRECEDING) == MONDAY

    def test_add_business_days(self):
        cal = MondayToFridayCalendar()
        assert cal.add_business_days(Date(2020, 3, 12), 2) == MONDAY
        assert cal.add_business_days(MONDAY, -1) == Date(2020, 3, 13)
        assert cal.add_business_days(MONDAY, 0) == MONDAY

    def test_advance_days_counts_business_days(self):
        cal = MondayToFridayCalendar()
        assert cal.advance(Date(2020, 3, 12), "2D") == MONDAY

    def test_advance_zero_days_adjusts(self):
        cal = MondayToFridayCalendar()
        assert cal.advance(SATURDAY, Period()) == MONDAY

    def test_advance_months_then_adjusts(self):
        """2020-03-13 + 3M is Saturday 2020-06-13, rolled to Monday."""
        cal = MondayToFridayCalendar()
        assert cal.advance(Date(2020, 3, 13), "3M") == Date(2020, 6, 15)

    def test_advance_end_of_month(self):
        cal = MondayToFridayCalendar()
        advanced = cal.advance(
            Date(2020, 4, 30),
            "1M",
            BusinessDayConvention.MODIFIED_FOLLOWING,
            end_of_month=True,
        )
        # 2020-05-31 is a Sunday
        assert advanced == Date(2020, 5, 29)
