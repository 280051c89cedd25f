"""Foreign exchange forward contracts.

A forward exchanges a base-currency notional for a term-currency amount at a
contracted all-in rate on the delivery date. The contract is stored with the
all-in rate quoted from the base currency, whatever direction the caller gave.

Net values include the exchange of notionals; gross values exclude it:

    base_gross = base_net - base_notional * sign
    term_gross = term_net + term_notional * sign

with ``sign`` -1 when the base currency is sold and +1 when it is bought.

Example:
    >>> fwd = ForeignExchangeForward(
    ...     Date(2020, 6, 11), Money(10000.0, EUR), ExchangeRate(EUR, USD, 1.1389)
    ... )
    >>> str(fwd)
    'EURUSD 2020-06-11 10000.00 EUR - EUR/USD 1.1389'
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, Field

from fxpoints.core.exchange_rate import ExchangeRate
from fxpoints.core.money import EUR, USD, Currency, Money
from fxpoints.core.settings import Settings
from fxpoints.core.time import Date, Period
from fxpoints.core.types import (
    BusinessDayConvention,
    DayCountConvention,
    ForwardPoints,
    ForwardType,
    TimeUnit,
)
from fxpoints.engines.base import InstrumentResults, PricingEngineArguments
from fxpoints.engines.forward_points import (
    ForeignExchangeForwardArguments,
    ForeignExchangeForwardResults,
)
from fxpoints.exceptions import IncompatibleCurrencyError, ResultNotAvailableError
from fxpoints.instruments.base import Instrument
from fxpoints.utilities.calendars import (
    HolidayCalendar,
    MondayToFridayCalendar,
    NoHolidayCalendar,
)

_T = TypeVar("_T")


class FxTerms(BaseModel):
    """Market conventions of a currency pair.

    Example:
        >>> terms = FxTerms.for_currency_pair(EUR, USD)
        >>> terms.day_count_convention
        <DayCountConvention.A365: 'A365'>
    """

    day_count_convention: DayCountConvention = Field(
        default=DayCountConvention.A360, description="Day count for time to delivery"
    )
    calendar: HolidayCalendar = Field(
        default_factory=NoHolidayCalendar, description="Settlement calendar"
    )
    business_day_convention: BusinessDayConvention = Field(
        default=BusinessDayConvention.FOLLOWING, description="Settlement date adjustment"
    )
    settlement_days: int = Field(default=2, ge=0, description="Business days from trade to spot")

    model_config = {
        "arbitrary_types_allowed": True,  # Allow HolidayCalendar
        "validate_assignment": True,
    }

    @classmethod
    def for_currency_pair(cls, base: Currency, term: Currency) -> FxTerms:
        """Default terms for a pair: Actual/360, no holidays, Following, T+2.

        EUR/USD uses Actual/365 Fixed and a Monday-to-Friday calendar.
        """
        if base == EUR and term == USD:
            return cls(
                day_count_convention=DayCountConvention.A365,
                calendar=MondayToFridayCalendar(),
            )
        return cls()

    def spot_date(self, trade_date: Date) -> Date:
        """Trade date plus the settlement days, counted in business days."""
        return self.calendar.advance(
            trade_date, Period(self.settlement_days, TimeUnit.DAYS), self.business_day_convention
        )

    def delivery_date_for_tenor(self, trade_date: Date, tenor: Period | str) -> Date:
        """Delivery date of a forward traded today for a tenor, counted from spot.

        Example:
            >>> FxTerms().delivery_date_for_tenor(Date(2020, 3, 11), "3M")
            Date(year=2020, month=6, day=13)
        """
        return self.calendar.advance(
            self.spot_date(trade_date), tenor, self.business_day_convention
        )


class ForeignExchangeForward(Instrument):
    """Outright FX forward.

    Args:
        delivery_date: Date the notionals are exchanged
        base_notional_amount: Notional in the base currency (positive)
        contract_all_in_rate: Contracted rate, quoted either way round
        forward_type: Whether the base currency is sold or bought
        terms: Pair conventions; defaults to ``FxTerms.for_currency_pair``

    Raises:
        IncompatibleCurrencyError: If the notional's currency is on neither
            side of the contract rate
    """

    def __init__(
        self,
        delivery_date: Date,
        base_notional_amount: Money,
        contract_all_in_rate: ExchangeRate,
        forward_type: ForwardType = ForwardType.SELL_BASE_BUY_TERM,
        terms: FxTerms | None = None,
    ) -> None:
        super().__init__()
        base_currency = base_notional_amount.currency
        if contract_all_in_rate.source == base_currency:
            rate = contract_all_in_rate
        elif contract_all_in_rate.target == base_currency:
            rate = ExchangeRate.inverse(contract_all_in_rate)
        else:
            raise IncompatibleCurrencyError(
                "base notional currency is not a currency of the contract rate",
                context={
                    "base_currency": base_currency.code,
                    "rate": f"{contract_all_in_rate.source}/{contract_all_in_rate.target}",
                },
            )

        self._delivery_date = delivery_date
        self._base_notional_amount = base_notional_amount
        self._contract_all_in_rate = rate
        self._forward_type = ForwardType(forward_type)
        self._term_currency = rate.target
        self._term_notional_amount = rate.exchange(base_notional_amount)
        self._terms = terms or FxTerms.for_currency_pair(base_currency, self._term_currency)

        self._fair_forward_points: ForwardPoints | None = None
        self._forward_net_value_base: Money | None = None
        self._forward_net_value_term: Money | None = None
        self._present_net_value_base: Money | None = None
        self._present_net_value_term: Money | None = None

    # ========== CONTRACT TERMS ==========

    @property
    def delivery_date(self) -> Date:
        return self._delivery_date

    @property
    def forward_type(self) -> ForwardType:
        return self._forward_type

    @property
    def base_currency(self) -> Currency:
        return self._base_notional_amount.currency

    @property
    def term_currency(self) -> Currency:
        return self._term_currency

    @property
    def contract_all_in_rate(self) -> ExchangeRate:
        """The contract rate, always quoted from the base currency."""
        return self._contract_all_in_rate

    @property
    def contract_notional_amount_base(self) -> Money:
        return self._base_notional_amount

    @property
    def contract_notional_amount_term(self) -> Money:
        return self._term_notional_amount

    @property
    def foreign_exchange_terms(self) -> FxTerms:
        return self._terms

    def base_sign(self) -> float:
        return self._forward_type.get_sign()

    def is_expired(self) -> bool:
        return self._delivery_date < Settings.instance().evaluation_date

    # ========== ENGINE INTERFACE ==========

    def setup_arguments(self, arguments: PricingEngineArguments) -> None:
        if not isinstance(arguments, ForeignExchangeForwardArguments):
            raise TypeError(f"wrong argument type: {type(arguments).__name__}")
        arguments.delivery_date = self._delivery_date
        arguments.base_notional_amount = self._base_notional_amount
        arguments.contract_all_in_rate = self._contract_all_in_rate
        arguments.forward_type = self._forward_type
        arguments.day_count_convention = self._terms.day_count_convention
        arguments.calendar = self._terms.calendar
        arguments.business_day_convention = self._terms.business_day_convention
        arguments.settlement_days = self._terms.settlement_days

    def fetch_results(self, results: InstrumentResults) -> None:
        super().fetch_results(results)
        if not isinstance(results, ForeignExchangeForwardResults):
            raise TypeError(f"wrong result type: {type(results).__name__}")
        self._fair_forward_points = results.fair_forward_points
        self._forward_net_value_base = results.forward_net_value_base
        self._forward_net_value_term = results.forward_net_value_term
        self._present_net_value_base = results.present_net_value_base
        self._present_net_value_term = results.present_net_value_term

    def setup_expired(self) -> None:
        super().setup_expired()
        self._fair_forward_points = None
        self._forward_net_value_base = None
        self._forward_net_value_term = None
        self._present_net_value_base = None
        self._present_net_value_term = None

    # ========== RESULTS ==========

    def _require(self, value: _T | None, name: str) -> _T:
        if value is None:
            raise ResultNotAvailableError(f"{name} not provided", context=self._result_context())
        return value

    def fair_forward_points(self) -> ForwardPoints:
        self.calculate()
        return self._require(self._fair_forward_points, "fair forward points")

    def forward_net_value_base(self) -> Money:
        self.calculate()
        return self._require(self._forward_net_value_base, "forward net value base")

    def forward_net_value_term(self) -> Money:
        self.calculate()
        return self._require(self._forward_net_value_term, "forward net value term")

    def present_net_value_base(self) -> Money:
        self.calculate()
        return self._require(self._present_net_value_base, "present net value base")

    def present_net_value_term(self) -> Money:
        self.calculate()
        return self._require(self._present_net_value_term, "present net value term")

    def forward_gross_value_base(self) -> Money:
        """Base leg value excluding the base notional itself."""
        return self.forward_net_value_base() - self._base_notional_amount * self.base_sign()

    def forward_gross_value_term(self) -> Money:
        """Term leg value excluding the term notional itself."""
        return self.forward_net_value_term() + self._term_notional_amount * self.base_sign()

    def __str__(self) -> str:
        return (
            f"{self.base_currency}{self.term_currency} {self._delivery_date} "
            f"{self._base_notional_amount} - {self._contract_all_in_rate}"
        )

    def __repr__(self) -> str:
        return (
            f"ForeignExchangeForward({self._delivery_date!r}, {self._base_notional_amount!r}, "
            f"{self._contract_all_in_rate!r}, {self._forward_type})"
        )
