"""Unit tests for dates, tenors and date arithmetic."""

from datetime import date

import pytest

from fxpoints.core.time import Date, Period, add_period, parse_iso_date, parse_tenor
from fxpoints.core.types import TimeUnit


class TestDate:
    """Test the Date class."""

    def test_init_valid(self):
        d = Date(2020, 3, 11)
        assert (d.year, d.month, d.day) == (2020, 3, 11)

    def test_init_invalid_ranges(self):
        """Components are validated, including the month length."""
        with pytest.raises(ValueError):
            Date(0, 1, 1)
        with pytest.raises(ValueError):
            Date(2020, 13, 1)
        with pytest.raises(ValueError):
            Date(2021, 2, 29)

    def test_leap_day(self):
        assert Date(2020, 2, 29).is_end_of_month()

    def test_ordering(self):
        assert Date(2020, 3, 11) < Date(2020, 3, 12) < Date(2020, 4, 1)
        assert Date(2020, 3, 11) == Date(2020, 3, 11)

    def test_hashable(self):
        assert len({Date(2020, 3, 11), Date(2020, 3, 11), Date(2020, 3, 12)}) == 2

    def test_iso_round_trip(self):
        d = Date.from_iso("2020-03-11")
        assert d.to_iso() == "2020-03-11"
        assert str(d) == "2020-03-11"

    def test_datetime_conversion(self):
        assert Date.from_date(date(2020, 3, 11)).to_date() == date(2020, 3, 11)

    def test_weekday(self):
        """2020-03-11 is a Wednesday."""
        assert Date(2020, 3, 11).weekday() == 2

    def test_add_days(self):
        assert Date(2020, 2, 28) + 2 == Date(2020, 3, 1)
        assert Date(2020, 3, 1) - 1 == Date(2020, 2, 29)

    def test_add_period_operator(self):
        assert Date(2020, 3, 11) + Period(1, TimeUnit.WEEKS) == Date(2020, 3, 18)

    def test_days_between(self):
        assert Date(2020, 3, 11).days_between(Date(2020, 3, 16)) == 5
        assert Date(2020, 3, 16).days_between(Date(2020, 3, 11)) == -5


class TestPeriod:
    """Test tenor parsing and comparison."""

    def test_parse(self):
        assert Period.parse("3M") == Period(3, TimeUnit.MONTHS)
        assert Period.parse(" 1w ") == Period(1, TimeUnit.WEEKS)

    def test_str(self):
        assert str(Period.parse("1Y")) == "1Y"

    def test_default_is_empty(self):
        assert Period().is_empty()
        assert not Period.parse("1D").is_empty()

    def test_normalised_equality(self):
        """1W equals 7D and 1Y equals 12M."""
        assert Period(1, TimeUnit.WEEKS) == Period(7, TimeUnit.DAYS)
        assert Period(1, TimeUnit.YEARS) == Period(12, TimeUnit.MONTHS)
        assert Period(1, TimeUnit.MONTHS) != Period(30, TimeUnit.DAYS)

    def test_zero_periods_equal(self):
        assert Period(0, TimeUnit.MONTHS) == Period()

    def test_hash_consistent_with_equality(self):
        assert hash(Period(2, TimeUnit.WEEKS)) == hash(Period(14, TimeUnit.DAYS))


class TestParsing:
    """Test module-level parsers."""

    def test_parse_iso_date_with_time(self):
        """A time part is accepted and ignored."""
        assert parse_iso_date("2020-03-11T10:30:00") == Date(2020, 3, 11)

    def test_parse_iso_date_invalid(self):
        with pytest.raises(ValueError, match="Invalid ISO 8601"):
            parse_iso_date("11/03/2020")

    def test_parse_tenor(self):
        assert parse_tenor("18M") == (18, TimeUnit.MONTHS)

    def test_parse_tenor_invalid(self):
        with pytest.raises(ValueError, match="Invalid tenor"):
            parse_tenor("3Q")


class TestAddPeriod:
    """Test calendar-free period arithmetic."""

    def test_days_and_weeks(self):
        assert add_period(Date(2020, 3, 11), "5D") == Date(2020, 3, 16)
        assert add_period(Date(2020, 3, 11), "2W") == Date(2020, 3, 25)

    def test_months(self):
        assert add_period(Date(2020, 3, 11), "3M") == Date(2020, 6, 11)

    def test_month_clamping(self):
        """Jan 31 + 1M lands on the last day of February."""
        assert add_period(Date(2020, 1, 31), "1M") == Date(2020, 2, 29)
        assert add_period(Date(2021, 1, 31), "1M") == Date(2021, 2, 28)

    def test_year_rollover(self):
        assert add_period(Date(2020, 11, 15), "3M") == Date(2021, 2, 15)
        assert add_period(Date(2020, 2, 29), "1Y") == Date(2021, 2, 28)

    def test_end_of_month(self):
        """With end_of_month a month-end date stays at month end."""
        assert add_period(Date(2020, 4, 30), "1M") == Date(2020, 5, 30)
        assert add_period(Date(2020, 4, 30), "1M", end_of_month=True) == Date(2020, 5, 31)
