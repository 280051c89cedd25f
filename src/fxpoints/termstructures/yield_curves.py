"""Discount curves used to present-value forward cash flows.

Two curves are provided: a flat continuously compounded rate, and a curve
interpolating discount factors log-linearly between dated nodes. Curve
bootstrapping from market instruments is not part of this package.
"""

from __future__ import annotations

import math
from abc import abstractmethod
from collections.abc import Sequence

import numpy as np

from fxpoints.core.time import Date
from fxpoints.core.types import DayCountConvention, Rate, Time
from fxpoints.exceptions import InvalidCurveConstructionError
from fxpoints.logging_config import get_logger
from fxpoints.termstructures.base import TermStructure
from fxpoints.utilities.calendars import HolidayCalendar
from fxpoints.utilities.math import continuous_discount_factor, zero_rate_from_discount

logger = get_logger(__name__)

# Time step used for the zero rate at t = 0.
_ZERO_TIME_STEP = 0.0001


class YieldTermStructure(TermStructure):
    """Curve of discount factors.

    ``discount(t)`` is 1 at the reference date, positive, and at most 1 for
    non-negative rates.
    """

    def discount(self, when: Date | Time, extrapolate: bool = False) -> float:
        """Discount factor for a date or a time from the reference date."""
        t = self._to_time(when)
        self.check_range(t, extrapolate)
        return self._discount_impl(t)

    def zero_rate(self, when: Date | Time, extrapolate: bool = False) -> Rate:
        """Continuously compounded zero rate to a date or time.

        Example:
            >>> round(FlatForward(Date(2020, 3, 11), 0.02).zero_rate(1.0), 10)
            0.02
        """
        t = self._to_time(when)
        if t == 0.0:
            t = _ZERO_TIME_STEP
        return zero_rate_from_discount(self.discount(t, extrapolate), t)

    @abstractmethod
    def _discount_impl(self, t: Time) -> float:
        """Discount factor at a time already checked against the range."""


class FlatForward(YieldTermStructure):
    """Discount curve with a single continuously compounded rate.

    Example:
        >>> curve = FlatForward(Date(2020, 3, 11), 0.0)
        >>> curve.discount(Date(2020, 6, 11))
        1.0
    """

    def __init__(
        self,
        reference_date: Date,
        rate: Rate,
        day_count_convention: DayCountConvention = DayCountConvention.A365,
        calendar: HolidayCalendar | None = None,
    ) -> None:
        super().__init__(reference_date, day_count_convention, calendar)
        self._rate = float(rate)

    @property
    def rate(self) -> Rate:
        return self._rate

    def set_rate(self, rate: Rate) -> None:
        """Move the curve; observers are notified."""
        self._rate = float(rate)
        self.notify_observers()

    def max_date(self) -> Date:
        return Date(9999, 12, 31)

    def _discount_impl(self, t: Time) -> float:
        return continuous_discount_factor(self._rate, t)

    def __repr__(self) -> str:
        return (
            f"FlatForward({self.reference_date}, {self._rate}, "
            f"{self.day_count_convention.value})"
        )


class InterpolatedDiscountCurve(YieldTermStructure):
    """Discount factors at given dates, interpolated log-linearly.

    The first node must be the reference date with a discount factor of 1.
    Past the last node the curve continues with the last segment's
    instantaneous forward rate when extrapolation is allowed.

    Args:
        dates: Node dates, first one being the reference date
        discounts: Discount factors at the node dates
        day_count_convention: Convention turning dates into times
        calendar: Curve calendar

    Raises:
        InvalidCurveConstructionError: For fewer than two nodes, count
            mismatches, non-increasing dates, dates at the same time, a first
            discount other than 1 or non-positive discounts
    """

    def __init__(
        self,
        dates: Sequence[Date],
        discounts: Sequence[float],
        day_count_convention: DayCountConvention = DayCountConvention.A365,
        calendar: HolidayCalendar | None = None,
    ) -> None:
        if len(dates) < 2:
            raise InvalidCurveConstructionError(
                "not enough input dates given", context={"dates": len(dates), "required": 2}
            )
        if len(dates) != len(discounts):
            raise InvalidCurveConstructionError(
                "dates/discount factors count mismatch",
                context={"dates": len(dates), "discounts": len(discounts)},
            )
        if not np.isclose(discounts[0], 1.0):
            raise InvalidCurveConstructionError(
                "the first discount factor must be 1.0", context={"discount": discounts[0]}
            )
        super().__init__(dates[0], day_count_convention, calendar)

        self._dates = list(dates)
        self._discounts = np.asarray(discounts, dtype=np.float64)
        if np.any(self._discounts <= 0.0):
            raise InvalidCurveConstructionError(
                "discount factors must be positive", context={"discounts": list(discounts)}
            )
        times = [0.0]
        for previous, current in zip(self._dates, self._dates[1:]):
            if not current > previous:
                raise InvalidCurveConstructionError(
                    "invalid date", context={"date": str(current), "previous": str(previous)}
                )
            t = self.time_from_reference(current)
            if math.isclose(t, times[-1], rel_tol=1e-12, abs_tol=1e-15):
                raise InvalidCurveConstructionError(
                    "two dates correspond to the same time "
                    "under this curve's day count convention",
                    context={"date": str(current), "previous": str(previous)},
                )
            times.append(t)

        self._times = np.array(times)
        self._log_discounts = np.log(self._discounts)
        logger.debug(
            "Discount curve built",
            extra={"reference_date": str(self.reference_date), "nodes": len(self._dates)},
        )

    @property
    def dates(self) -> list[Date]:
        return list(self._dates)

    @property
    def times(self) -> np.ndarray:
        return self._times.copy()

    @property
    def discounts(self) -> np.ndarray:
        return self._discounts.copy()

    def nodes(self) -> list[tuple[Date, float]]:
        return [(d, float(df)) for d, df in zip(self._dates, self._discounts)]

    def max_date(self) -> Date:
        return self._dates[-1]

    def _discount_impl(self, t: Time) -> float:
        times, logs = self._times, self._log_discounts
        if t <= times[-1] and t >= times[0]:
            return float(np.exp(np.interp(t, times, logs)))
        # log-linear extrapolation on the nearest segment
        i = 0 if t < times[0] else len(times) - 2
        slope = (logs[i + 1] - logs[i]) / (times[i + 1] - times[i])
        anchor = i if t < times[0] else i + 1
        return float(np.exp(logs[anchor] + slope * (t - times[anchor])))
