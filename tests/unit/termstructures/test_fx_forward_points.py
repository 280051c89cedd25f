"""Unit tests for forward points term structures."""

import numpy as np
import pytest

from fxpoints.core.exchange_rate import ExchangeRate
from fxpoints.core.forward_exchange_rate import ForwardExchangeRate
from fxpoints.core.money import EUR, GBP, USD
from fxpoints.core.time import Date, Period
from fxpoints.core.types import BusinessDayConvention, DayCountConvention
from fxpoints.exceptions import InvalidCurveConstructionError
from fxpoints.termstructures.fx_forward_points import InterpolatedFxForwardPointTermStructure
from fxpoints.utilities.calendars import MondayToFridayCalendar

REFERENCE = Date(2020, 3, 11)
ONE_WEEK = Date(2020, 3, 18)
ONE_WEEK_POINTS = -4.051701


class TestInterpolatedFxForwardPointTermStructure:
    """Test reading forward points off the curve."""

    def test_pair(self, usd_eur_curve, usd_eur_spot):
        assert usd_eur_curve.source == USD
        assert usd_eur_curve.target == EUR
        assert usd_eur_curve.spot_exchange_rate == usd_eur_spot

    def test_zero_points_at_reference(self, usd_eur_curve):
        assert usd_eur_curve.forward_points(REFERENCE) == 0.0
        assert usd_eur_curve.forward_points(0.0) == 0.0

    def test_node_value(self, usd_eur_curve):
        assert usd_eur_curve.forward_points(ONE_WEEK) == pytest.approx(ONE_WEEK_POINTS)

    def test_linear_between_anchor_and_node(self, usd_eur_curve):
        points = usd_eur_curve.forward_points(Date(2020, 3, 16))
        assert points == pytest.approx(ONE_WEEK_POINTS * 5 / 7)

    def test_flat_past_last_node(self, usd_eur_curve):
        """Points stay at the last quote without asking for extrapolation."""
        assert usd_eur_curve.forward_points(Date(2020, 12, 31)) == pytest.approx(ONE_WEEK_POINTS)
        assert usd_eur_curve.forward_points(5.0, extrapolate=True) == pytest.approx(
            ONE_WEEK_POINTS
        )

    def test_negative_time_rejected(self, usd_eur_curve):
        with pytest.raises(ValueError, match="negative time"):
            usd_eur_curve.forward_points(Date(2020, 3, 4))

    def test_negative_time_extrapolated_along_first_segment(self, usd_eur_curve):
        points = usd_eur_curve.forward_points(Date(2020, 3, 4), extrapolate=True)
        assert points == pytest.approx(-ONE_WEEK_POINTS)

    def test_multi_node_interpolation(self, multi_node_curve):
        t1, t2 = 7 / 365, 31 / 365
        t = (t1 + t2) / 2
        assert multi_node_curve.forward_points(t) == pytest.approx((-4.051701 - 17.6) / 2)
        assert multi_node_curve.forward_points(Date(2020, 6, 11)) == pytest.approx(-52.3)

    def test_forward_exchange_rate(self, usd_eur_curve, usd_eur_spot):
        fwd = usd_eur_curve.forward_exchange_rate(ONE_WEEK)
        assert isinstance(fwd, ForwardExchangeRate)
        assert fwd.spot_exchange_rate == usd_eur_spot
        assert fwd.tenor.is_empty()
        assert fwd.forward_rate == pytest.approx(0.9103736341 + ONE_WEEK_POINTS / 10000)

    def test_forward_exchange_rate_range_checked(self, usd_eur_curve):
        with pytest.raises(ValueError):
            usd_eur_curve.forward_exchange_rate(-0.01)

    def test_inspectors(self, usd_eur_curve):
        np.testing.assert_allclose(usd_eur_curve.times, [0.0, 7 / 365])
        np.testing.assert_allclose(usd_eur_curve.data, [0.0, ONE_WEEK_POINTS])
        assert usd_eur_curve.dates == [ONE_WEEK]
        assert usd_eur_curve.forward_points_vector == [ONE_WEEK_POINTS]
        assert usd_eur_curve.nodes() == [(ONE_WEEK, ONE_WEEK_POINTS)]
        assert usd_eur_curve.max_date() == ONE_WEEK
        assert usd_eur_curve.max_time() == pytest.approx(7 / 365)

    def test_forward_points_at_matches_scalar(self, multi_node_curve, tolerance):
        times = [0.0, 0.01, 7 / 365, 0.05, 0.2, 1.0]
        vectorized = multi_node_curve.forward_points_at(times)
        expected = [multi_node_curve.forward_points(t) for t in times]
        np.testing.assert_allclose(
            np.asarray(vectorized), expected, rtol=tolerance["rtol"], atol=1e-6
        )

    def test_forward_points_at_negative(self, multi_node_curve):
        with pytest.raises(ValueError, match="negative time"):
            multi_node_curve.forward_points_at([0.1, -0.1])


class TestCurveConstruction:
    """Test node validation."""

    def test_no_dates(self, usd_eur_spot):
        with pytest.raises(InvalidCurveConstructionError, match="not enough"):
            InterpolatedFxForwardPointTermStructure(REFERENCE, usd_eur_spot, [], [])

    def test_count_mismatch(self, usd_eur_spot):
        with pytest.raises(InvalidCurveConstructionError, match="count mismatch"):
            InterpolatedFxForwardPointTermStructure(
                REFERENCE, usd_eur_spot, [ONE_WEEK], [1.0, 2.0]
            )

    def test_node_on_reference_date(self, usd_eur_spot):
        with pytest.raises(InvalidCurveConstructionError, match="invalid date"):
            InterpolatedFxForwardPointTermStructure(REFERENCE, usd_eur_spot, [REFERENCE], [1.0])

    def test_unsorted_dates(self, usd_eur_spot):
        with pytest.raises(InvalidCurveConstructionError) as exc_info:
            InterpolatedFxForwardPointTermStructure(
                REFERENCE, usd_eur_spot, [Date(2020, 4, 11), ONE_WEEK], [1.0, 2.0]
            )
        assert exc_info.value.context == {"date": "2020-03-18", "previous": "2020-04-11"}

    def test_dates_with_same_time(self, usd_eur_spot):
        """Under 30E/360 the 30th and 31st of a month are the same time."""
        with pytest.raises(InvalidCurveConstructionError, match="same time"):
            InterpolatedFxForwardPointTermStructure(
                REFERENCE,
                usd_eur_spot,
                [Date(2020, 3, 30), Date(2020, 3, 31)],
                [1.0, 2.0],
                DayCountConvention.E30360,
            )


class TestFromForwardRates:
    """Test building the curve from tenor quotes."""

    def test_node_dates_from_tenors(self, usd_eur_spot):
        quotes = [
            ForwardExchangeRate(usd_eur_spot, -4.05, Period.parse("1W")),
            ForwardExchangeRate(usd_eur_spot, -17.6, Period.parse("1M")),
        ]
        curve = InterpolatedFxForwardPointTermStructure.from_forward_rates(REFERENCE, quotes)
        assert curve.dates == [ONE_WEEK, Date(2020, 4, 11)]
        assert curve.forward_points_vector == [-4.05, -17.6]
        assert curve.spot_exchange_rate == usd_eur_spot

    def test_node_dates_adjusted(self, usd_eur_spot):
        """2020-04-11 is a Saturday and rolls to Monday."""
        quotes = [ForwardExchangeRate(usd_eur_spot, -17.6, Period.parse("1M"))]
        curve = InterpolatedFxForwardPointTermStructure.from_forward_rates(
            REFERENCE,
            quotes,
            calendar=MondayToFridayCalendar(),
            business_day_convention=BusinessDayConvention.FOLLOWING,
        )
        assert curve.dates == [Date(2020, 4, 13)]

    def test_mixed_pairs(self, usd_eur_spot):
        quotes = [
            ForwardExchangeRate(usd_eur_spot, -4.05, Period.parse("1W")),
            ForwardExchangeRate(ExchangeRate(USD, GBP, 0.8), 3.0, Period.parse("1M")),
        ]
        with pytest.raises(InvalidCurveConstructionError, match="different currency pairs"):
            InterpolatedFxForwardPointTermStructure.from_forward_rates(REFERENCE, quotes)

    def test_no_quotes(self):
        with pytest.raises(InvalidCurveConstructionError):
            InterpolatedFxForwardPointTermStructure.from_forward_rates(REFERENCE, [])
