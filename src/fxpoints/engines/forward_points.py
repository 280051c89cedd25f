"""Forward points engines for FX forwards.

Two ways of getting the market forward rate at delivery:

- ``FlatForwardPointsEngine``: a single spot level and a single forward points
  quote, discounted on one curve.
- ``ForwardPointsEngine``: a forward points term structure read at the time to
  delivery, with each leg discounted on its own currency's curve.

Both compute every result into locals first and publish them together, so a
failing calculation never leaves a partial result set behind.
"""

from __future__ import annotations

from dataclasses import dataclass

from fxpoints.core.exchange_rate import ExchangeRate
from fxpoints.core.money import Currency, Money
from fxpoints.core.time import Date
from fxpoints.core.types import (
    BusinessDayConvention,
    DayCountConvention,
    ForwardPoints,
    ForwardType,
    Rate,
)
from fxpoints.engines.base import ForwardResults, GenericEngine, PricingEngineArguments
from fxpoints.exceptions import InvalidEngineSetupError
from fxpoints.logging_config import get_logger
from fxpoints.observers.observable import Handle
from fxpoints.termstructures.fx_forward_points import FxForwardPointTermStructure
from fxpoints.termstructures.yield_curves import YieldTermStructure
from fxpoints.utilities.calendars import HolidayCalendar
from fxpoints.utilities.conventions import year_fraction
from fxpoints.utilities.math import all_in_forward_rate

logger = get_logger(__name__)


class ForeignExchangeForwardArguments(PricingEngineArguments):
    """Contract data handed to forward engines."""

    def __init__(self) -> None:
        self.delivery_date: Date | None = None
        self.base_notional_amount: Money | None = None
        self.contract_all_in_rate: ExchangeRate | None = None
        self.forward_type: ForwardType | None = None
        self.day_count_convention: DayCountConvention | None = None
        self.calendar: HolidayCalendar | None = None
        self.business_day_convention: BusinessDayConvention | None = None
        self.settlement_days: int | None = None

    def base_sign(self) -> float:
        if self.forward_type is None:
            raise ValueError("forward type not set")
        return self.forward_type.get_sign()

    def validate(self) -> None:
        missing = [
            name
            for name in (
                "delivery_date",
                "base_notional_amount",
                "contract_all_in_rate",
                "forward_type",
                "day_count_convention",
            )
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(f"forward arguments not set: {', '.join(missing)}")
        rate, notional = self.contract_all_in_rate, self.base_notional_amount
        if rate.source != notional.currency:  # type: ignore[union-attr]
            raise ValueError("contract all-in rate must be quoted from the base currency")


@dataclass
class ForeignExchangeForwardResults(ForwardResults):
    """Results of a forward valuation, each in its leg's currency."""

    fair_forward_points: ForwardPoints | None = None
    forward_net_value_base: Money | None = None
    forward_net_value_term: Money | None = None
    present_net_value_base: Money | None = None
    present_net_value_term: Money | None = None

    def reset(self) -> None:
        super().reset()
        self.fair_forward_points = None
        self.forward_net_value_base = None
        self.forward_net_value_term = None
        self.present_net_value_base = None
        self.present_net_value_term = None


class ForeignExchangeForwardEngine(
    GenericEngine[ForeignExchangeForwardArguments, ForeignExchangeForwardResults]
):
    """Base class of engines able to value a ForeignExchangeForward."""

    def __init__(self) -> None:
        super().__init__(ForeignExchangeForwardArguments(), ForeignExchangeForwardResults())


def _as_handle(curve: Handle | YieldTermStructure | FxForwardPointTermStructure | None) -> Handle:
    if isinstance(curve, Handle):
        return curve
    return Handle(curve)


class FlatForwardPointsEngine(ForeignExchangeForwardEngine):
    """Values a forward off a flat spot level and forward points quote.

    Args:
        valuation_currency: Currency reported with the results
        spot_exchange_rate: Spot level of the contract's pair
        forward_points: Forward points in pips
        discount_curve: Discount curve (or handle to one)

    Example:
        >>> engine = FlatForwardPointsEngine(EUR, 1.1351, 45.0, FlatForward(today, 0.0))
        >>> fwd.set_pricing_engine(engine)
        >>> round(fwd.npv(), 6)
        7.0
    """

    def __init__(
        self,
        valuation_currency: Currency,
        spot_exchange_rate: Rate,
        forward_points: ForwardPoints,
        discount_curve: Handle[YieldTermStructure] | YieldTermStructure | None = None,
    ) -> None:
        super().__init__()
        self.valuation_currency = valuation_currency
        self.spot_exchange_rate = float(spot_exchange_rate)
        self.forward_points = float(forward_points)
        self.discount_curve = _as_handle(discount_curve)
        self.register_with(self.discount_curve)

    def calculate(self) -> None:
        if self.discount_curve.empty():
            raise InvalidEngineSetupError(
                "discounting term structure handle is empty",
                context={"engine": type(self).__name__},
            )

        args = self.arguments
        curve = self.discount_curve.current_link()
        valuation_date = curve.reference_date
        time_to_delivery = year_fraction(
            valuation_date, args.delivery_date, args.day_count_convention
        )
        all_in_rate: ExchangeRate = args.contract_all_in_rate
        notional: Money = args.base_notional_amount

        forward_rate = all_in_forward_rate(self.spot_exchange_rate, self.forward_points)
        discount = curve.discount(time_to_delivery)
        forward_value = Money(
            notional.value * (forward_rate - all_in_rate.rate), all_in_rate.target
        )
        present_value = forward_value * discount

        logger.debug(
            "Flat forward points valuation",
            extra={
                "pair": f"{all_in_rate.source}/{all_in_rate.target}",
                "time_to_delivery": time_to_delivery,
                "forward_rate": forward_rate,
                "discount": discount,
            },
        )

        results = self.results
        results.fair_forward_points = self.forward_points
        results.forward_value = forward_value
        results.forward_net_value_term = forward_value
        results.present_net_value_term = present_value
        results.value = present_value.value
        results.valuation_currency = self.valuation_currency
        results.valuation_date = valuation_date
        results.error_estimate = 0.0


class ForwardPointsEngine(ForeignExchangeForwardEngine):
    """Values a forward off a forward points curve and two discount curves.

    The forward rate at delivery is read off the curve at the contract's year
    fraction from the base discount curve's reference date. The term leg value
    is ``sign * N * (fwd - K)`` in the term currency, the base leg value is
    ``K(sign * N) * (1/fwd - 1/K)`` in the base currency, and each is
    discounted on its own currency's curve. The NPV is the term leg present
    value.

    Args:
        spot_exchange_rate: Spot rate; its pair must match curve and contract
        forward_points_curve: Forward points curve (or handle)
        base_discount_curve: Base currency discount curve (or handle)
        term_discount_curve: Term currency discount curve (or handle)
    """

    def __init__(
        self,
        spot_exchange_rate: ExchangeRate,
        forward_points_curve: (
            Handle[FxForwardPointTermStructure] | FxForwardPointTermStructure | None
        ) = None,
        base_discount_curve: Handle[YieldTermStructure] | YieldTermStructure | None = None,
        term_discount_curve: Handle[YieldTermStructure] | YieldTermStructure | None = None,
    ) -> None:
        super().__init__()
        self.spot_exchange_rate = spot_exchange_rate
        self.forward_points_curve = _as_handle(forward_points_curve)
        self.base_discount_curve = _as_handle(base_discount_curve)
        self.term_discount_curve = _as_handle(term_discount_curve)
        self.register_with(self.forward_points_curve)
        self.register_with(self.base_discount_curve)
        self.register_with(self.term_discount_curve)

    def _check_setup(self) -> None:
        empty = [
            name
            for name, handle in (
                ("forward points curve", self.forward_points_curve),
                ("base discount curve", self.base_discount_curve),
                ("term discount curve", self.term_discount_curve),
            )
            if handle.empty()
        ]
        if empty:
            raise InvalidEngineSetupError(
                "curve handle is empty", context={"engine": type(self).__name__, "empty": empty}
            )

        spot_pair = (self.spot_exchange_rate.source, self.spot_exchange_rate.target)
        curve = self.forward_points_curve.current_link()
        all_in_rate: ExchangeRate = self.arguments.contract_all_in_rate
        if (curve.source, curve.target) != spot_pair:
            raise InvalidEngineSetupError(
                "forward points curve currency pair does not match the spot exchange rate",
                context={
                    "spot": f"{spot_pair[0]}/{spot_pair[1]}",
                    "curve": f"{curve.source}/{curve.target}",
                },
            )
        if (all_in_rate.source, all_in_rate.target) != spot_pair:
            raise InvalidEngineSetupError(
                "contract currency pair does not match the spot exchange rate",
                context={
                    "spot": f"{spot_pair[0]}/{spot_pair[1]}",
                    "contract": f"{all_in_rate.source}/{all_in_rate.target}",
                },
            )

    def calculate(self) -> None:
        self._check_setup()

        args = self.arguments
        curve = self.forward_points_curve.current_link()
        base_curve = self.base_discount_curve.current_link()
        term_curve = self.term_discount_curve.current_link()
        all_in_rate: ExchangeRate = args.contract_all_in_rate
        notional: Money = args.base_notional_amount

        sign = args.base_sign()
        time_to_delivery = year_fraction(
            base_curve.reference_date, args.delivery_date, args.day_count_convention
        )
        if time_to_delivery < 0.0:
            raise ValueError(
                f"delivery date {args.delivery_date} is before the curve reference date "
                f"{base_curve.reference_date}"
            )
        forward_rate = curve.forward_exchange_rate(time_to_delivery).forward_rate

        term_forward_value = Money(
            sign * notional.value * (forward_rate - all_in_rate.rate), all_in_rate.target
        )
        base_forward_value = Money(
            all_in_rate.exchange(notional * sign).value
            * (1.0 / forward_rate - 1.0 / all_in_rate.rate),
            all_in_rate.source,
        )
        base_discount = base_curve.discount(time_to_delivery)
        term_discount = term_curve.discount(time_to_delivery)
        base_present_value = base_forward_value * base_discount
        term_present_value = term_forward_value * term_discount
        fair_forward_points = curve.forward_points(time_to_delivery)

        logger.debug(
            "Forward points curve valuation",
            extra={
                "pair": f"{all_in_rate.source}/{all_in_rate.target}",
                "time_to_delivery": time_to_delivery,
                "forward_rate": forward_rate,
                "fair_forward_points": fair_forward_points,
            },
        )

        results = self.results
        results.fair_forward_points = fair_forward_points
        results.forward_net_value_base = base_forward_value
        results.forward_net_value_term = term_forward_value
        results.present_net_value_base = base_present_value
        results.present_net_value_term = term_present_value
        results.forward_value = term_forward_value
        results.value = term_present_value.value
        results.valuation_currency = all_in_rate.target
        results.valuation_date = base_curve.reference_date
        results.error_estimate = 0.0
        results.additional_results = {
            "time_to_delivery": time_to_delivery,
            "forward_rate": forward_rate,
            "base_discount": base_discount,
            "term_discount": term_discount,
        }
