"""Term structures of FX forward points.

Forward points quoted for a set of tenors are turned into a continuous curve of
time: linear between nodes, anchored at zero points at the reference date, and
held at the last quoted value beyond the last node. Any point of the curve can
be read as a ForwardExchangeRate off the curve's spot rate.

Example:
    >>> spot = ExchangeRate(USD, EUR, 0.9103736341)
    >>> curve = InterpolatedFxForwardPointTermStructure(
    ...     Date(2020, 3, 11), spot, [Date(2020, 3, 18)], [-4.051701]
    ... )
    >>> curve.forward_points(Date(2020, 3, 25)) == curve.forward_points(Date(2020, 3, 18))
    True
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence

import jax.numpy as jnp
import numpy as np

from fxpoints.core.exchange_rate import ExchangeRate
from fxpoints.core.forward_exchange_rate import ForwardExchangeRate
from fxpoints.core.money import Currency
from fxpoints.core.time import Date, Period
from fxpoints.core.types import BusinessDayConvention, DayCountConvention, ForwardPoints, Time
from fxpoints.exceptions import InvalidCurveConstructionError
from fxpoints.logging_config import get_logger
from fxpoints.termstructures.base import TermStructure
from fxpoints.utilities.calendars import HolidayCalendar
from fxpoints.utilities.math import interpolate_linear, interpolate_linear_vectorized

logger = get_logger(__name__)


class FxForwardPointTermStructure(TermStructure, ABC):
    """Forward points for a currency pair as a function of time.

    Subclasses provide ``_forward_points_impl``. Beyond the last node the
    points stay flat whether or not extrapolation was requested; only negative
    times are rejected without ``extrapolate``.
    """

    def __init__(
        self,
        reference_date: Date,
        spot_exchange_rate: ExchangeRate,
        day_count_convention: DayCountConvention = DayCountConvention.A365,
        calendar: HolidayCalendar | None = None,
    ) -> None:
        super().__init__(reference_date, day_count_convention, calendar)
        self._spot_exchange_rate = spot_exchange_rate

    @property
    def spot_exchange_rate(self) -> ExchangeRate:
        return self._spot_exchange_rate

    @property
    def source(self) -> Currency:
        return self._spot_exchange_rate.source

    @property
    def target(self) -> Currency:
        return self._spot_exchange_rate.target

    def check_range(self, t: Time, extrapolate: bool = False) -> None:
        if t < 0.0 and not extrapolate:
            raise ValueError(f"negative time ({t}) given")

    def forward_points(self, when: Date | Time, extrapolate: bool = False) -> ForwardPoints:
        """Forward points at a date or at a time from the reference date.

        Raises:
            ValueError: If the time is negative and ``extrapolate`` is False
        """
        t = self._to_time(when)
        self.check_range(t, extrapolate)
        return self._forward_points_impl(t)

    def forward_exchange_rate(
        self, when: Date | Time, extrapolate: bool = False
    ) -> ForwardExchangeRate:
        """Forward rate at a date or time, with the curve's spot and an empty tenor."""
        return ForwardExchangeRate(
            self._spot_exchange_rate, self.forward_points(when, extrapolate), Period()
        )

    @abstractmethod
    def _forward_points_impl(self, t: Time) -> ForwardPoints:
        """Forward points at a time already checked against the range."""


class InterpolatedFxForwardPointTermStructure(FxForwardPointTermStructure):
    """Forward points interpolated linearly between quoted nodes.

    Args:
        reference_date: Date of zero time and zero forward points
        spot_exchange_rate: Spot rate the points are quoted against
        dates: Node dates, strictly increasing and after the reference date
        forward_points: Quoted points at the node dates
        day_count_convention: Convention turning dates into times
        calendar: Curve calendar

    Raises:
        InvalidCurveConstructionError: If the nodes are missing, inconsistent
            or collapse to the same time
    """

    def __init__(
        self,
        reference_date: Date,
        spot_exchange_rate: ExchangeRate,
        dates: Sequence[Date],
        forward_points: Sequence[ForwardPoints],
        day_count_convention: DayCountConvention = DayCountConvention.A365,
        calendar: HolidayCalendar | None = None,
    ) -> None:
        super().__init__(reference_date, spot_exchange_rate, day_count_convention, calendar)
        self._dates = list(dates)
        self._forward_points = [float(p) for p in forward_points]
        self._initialize()

    @classmethod
    def from_forward_rates(
        cls,
        reference_date: Date,
        forward_rates: Sequence[ForwardExchangeRate],
        day_count_convention: DayCountConvention = DayCountConvention.A365,
        calendar: HolidayCalendar | None = None,
        business_day_convention: BusinessDayConvention | None = None,
    ) -> InterpolatedFxForwardPointTermStructure:
        """Build the curve from tenor-quoted forward rates.

        Node dates are ``reference_date + tenor``, adjusted on ``calendar``
        when a business day convention is given. The spot rate is taken from
        the first quote; every quote must be on the same currency pair.

        Example:
            >>> quotes = [ForwardExchangeRate(spot, -4.05, Period.parse("1W")),
            ...           ForwardExchangeRate(spot, -17.6, Period.parse("1M"))]
            >>> curve = InterpolatedFxForwardPointTermStructure.from_forward_rates(
            ...     Date(2020, 3, 11), quotes
            ... )
        """
        if not forward_rates:
            raise InvalidCurveConstructionError("not enough input dates given")

        spot = forward_rates[0].spot_exchange_rate
        for quote in forward_rates:
            if (quote.source, quote.target) != (spot.source, spot.target):
                raise InvalidCurveConstructionError(
                    "forward rates quoted on different currency pairs",
                    context={
                        "expected": f"{spot.source}/{spot.target}",
                        "got": f"{quote.source}/{quote.target}",
                    },
                )

        dates = []
        for quote in forward_rates:
            node_date = reference_date + quote.tenor
            if business_day_convention is not None and calendar is not None:
                node_date = calendar.adjust(node_date, business_day_convention)
            dates.append(node_date)

        return cls(
            reference_date,
            spot,
            dates,
            [quote.forward_points for quote in forward_rates],
            day_count_convention,
            calendar,
        )

    def _initialize(self) -> None:
        if not self._dates:
            raise InvalidCurveConstructionError("not enough input dates given")
        if len(self._dates) != len(self._forward_points):
            raise InvalidCurveConstructionError(
                "data count mismatch",
                context={"dates": len(self._dates), "forward_points": len(self._forward_points)},
            )

        times = [0.0]
        previous = self.reference_date
        for node_date in self._dates:
            if not node_date > previous:
                raise InvalidCurveConstructionError(
                    "invalid date", context={"date": str(node_date), "previous": str(previous)}
                )
            t = self.time_from_reference(node_date)
            if math.isclose(t, times[-1], rel_tol=1e-12, abs_tol=1e-15):
                raise InvalidCurveConstructionError(
                    "two dates correspond to the same time "
                    "under this curve's day count convention",
                    context={"date": str(node_date), "previous": str(previous)},
                )
            times.append(t)
            previous = node_date

        # (0, 0) anchor: no forward points at the reference date
        self._times = np.array(times, dtype=np.float64)
        self._data = np.array([0.0, *self._forward_points], dtype=np.float64)

        logger.debug(
            "Forward points curve built",
            extra={
                "pair": f"{self.source}/{self.target}",
                "reference_date": str(self.reference_date),
                "nodes": len(self._dates),
                "max_time": float(self._times[-1]),
            },
        )

    @property
    def times(self) -> np.ndarray:
        """Node times including the zero-time anchor."""
        return self._times.copy()

    @property
    def dates(self) -> list[Date]:
        return list(self._dates)

    @property
    def data(self) -> np.ndarray:
        """Node values including the zero-points anchor."""
        return self._data.copy()

    @property
    def forward_points_vector(self) -> list[ForwardPoints]:
        """Quoted points, without the anchor."""
        return list(self._forward_points)

    def nodes(self) -> list[tuple[Date, ForwardPoints]]:
        return list(zip(self._dates, self._forward_points))

    def max_date(self) -> Date:
        return self._dates[-1]

    def max_time(self) -> Time:
        return float(self._times[-1])

    def _forward_points_impl(self, t: Time) -> ForwardPoints:
        if t <= self._times[-1]:
            return interpolate_linear(t, self._times, self._data)
        # constant extrapolation
        return float(self._data[-1])

    def forward_points_at(
        self, times: Sequence[Time] | np.ndarray, extrapolate: bool = False
    ) -> jnp.ndarray:
        """Evaluate the curve on an array of times in one JIT-compiled call.

        Same rules as ``forward_points``: linear inside, flat past the last
        node, negative times only with ``extrapolate``.
        """
        t = np.asarray(times, dtype=np.float64)
        if not extrapolate and np.any(t < 0.0):
            raise ValueError(f"negative time ({float(t.min())}) given")
        return interpolate_linear_vectorized(
            jnp.asarray(t), jnp.asarray(self._times), jnp.asarray(self._data)
        )

    def __repr__(self) -> str:
        return (
            f"InterpolatedFxForwardPointTermStructure({self.source}/{self.target}, "
            f"{self.reference_date}, nodes={len(self._dates)})"
        )
