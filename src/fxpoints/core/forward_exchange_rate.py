"""Forward exchange rates: a spot rate plus forward points for a tenor.

The all-in forward rate is ``spot + forward_points / 10000``. Chaining and
inverting recompute the forward points so the all-in forward rate of the result
is consistent with the all-in forward rates of the inputs.

Example:
    >>> spot = ExchangeRate(EUR, USD, 1.1351)
    >>> fwd = ForwardExchangeRate(spot, 45.0, Period.parse("3M"))
    >>> round(fwd.forward_rate, 4)
    1.1396
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fxpoints.core.exchange_rate import ExchangeRate
from fxpoints.core.money import Currency, Money
from fxpoints.core.time import Period
from fxpoints.core.types import PIP_FACTOR, ExchangeRateType, ForwardPoints, Rate
from fxpoints.exceptions import IncompatibleCurrencyError, NotChainableError, TenorMismatchError


@dataclass(frozen=True)
class ForwardExchangeRate:
    """Forward exchange rate between two currencies.

    Attributes:
        spot_exchange_rate: Spot rate defining the currency pair
        forward_points: Forward premium/discount in pips
        tenor: Quoted tenor; empty when the rate was read off a curve by time
        type: DIRECT or DERIVED
        rate_chain: The two forward rates a DERIVED rate was chained from
    """

    spot_exchange_rate: ExchangeRate
    forward_points: ForwardPoints
    tenor: Period = field(default_factory=Period)
    type: ExchangeRateType = ExchangeRateType.DIRECT
    rate_chain: tuple[ForwardExchangeRate, ForwardExchangeRate] | None = field(
        default=None, repr=False
    )

    def __post_init__(self) -> None:
        if self.type == ExchangeRateType.DERIVED and (
            self.rate_chain is None or len(self.rate_chain) != 2
        ):
            raise ValueError("A derived forward exchange rate needs exactly two chained rates")

    @property
    def source(self) -> Currency:
        return self.spot_exchange_rate.source

    @property
    def target(self) -> Currency:
        return self.spot_exchange_rate.target

    @property
    def spot_rate(self) -> Rate:
        return self.spot_exchange_rate.rate

    @property
    def forward_rate(self) -> Rate:
        """All-in forward rate: spot plus forward points in rate units."""
        return self.spot_exchange_rate.rate + self.forward_points / PIP_FACTOR

    def involves(self, currency: Currency) -> bool:
        return self.spot_exchange_rate.involves(currency)

    def exchange(self, amount: Money) -> Money:
        """Apply the all-in forward rate to a cash amount.

        Raises:
            IncompatibleCurrencyError: If the amount's currency is not handled
        """
        if self.type == ExchangeRateType.DIRECT:
            if amount.currency == self.source:
                return Money(amount.value * self.forward_rate, self.target)
            if amount.currency == self.target:
                return Money(amount.value / self.forward_rate, self.source)
        else:
            first, second = self.rate_chain  # type: ignore[misc]
            if first.involves(amount.currency):
                return second.exchange(first.exchange(amount))
            if second.involves(amount.currency):
                return first.exchange(second.exchange(amount))
        raise IncompatibleCurrencyError(
            "forward exchange rate not applicable",
            context={
                "amount_currency": amount.currency.code,
                "rate": f"{self.source}/{self.target}",
            },
        )

    @staticmethod
    def chain(r1: ForwardExchangeRate, r2: ForwardExchangeRate) -> ForwardExchangeRate:
        """Compose two forward rates of the same tenor.

        The spot leg is chained with ExchangeRate.chain; the forward points are
        the difference between the chained all-in forward rate and the chained
        spot rate, in pips.

        Raises:
            TenorMismatchError: If the tenors differ
            NotChainableError: If the rates share no currency
        """
        if r1.tenor != r2.tenor:
            raise TenorMismatchError(
                "forward exchange rates must have same tenor in order to chain",
                context={"first": str(r1.tenor), "second": str(r2.tenor)},
            )

        if r1.source == r2.source:
            points = (r2.forward_rate / r1.forward_rate - r2.spot_rate / r1.spot_rate) * PIP_FACTOR
        elif r1.source == r2.target:
            points = (
                1.0 / (r1.forward_rate * r2.forward_rate) - 1.0 / (r1.spot_rate * r2.spot_rate)
            ) * PIP_FACTOR
        elif r1.target == r2.source:
            points = (
                r1.spot_rate * r2.forward_points
                + r2.spot_rate * r1.forward_points
                + r1.forward_points * r2.forward_points / PIP_FACTOR
            )
        elif r1.target == r2.target:
            points = (r1.forward_rate / r2.forward_rate - r1.spot_rate / r2.spot_rate) * PIP_FACTOR
        else:
            raise NotChainableError(
                "forward exchange rates not chainable",
                context={"first": f"{r1.source}/{r1.target}", "second": f"{r2.source}/{r2.target}"},
            )

        chained_spot = ExchangeRate.chain(r1.spot_exchange_rate, r2.spot_exchange_rate)
        return ForwardExchangeRate(
            chained_spot, points, r1.tenor, ExchangeRateType.DERIVED, (r1, r2)
        )

    @staticmethod
    def inverse(r: ForwardExchangeRate) -> ForwardExchangeRate:
        """Invert the pair; forward points are re-expressed against the inverse spot."""
        inverse_spot = ExchangeRate.inverse(r.spot_exchange_rate)
        points = (1.0 / r.forward_rate - inverse_spot.rate) * PIP_FACTOR
        return ForwardExchangeRate(inverse_spot, points, r.tenor)

    def __str__(self) -> str:
        tenor = f" {self.tenor}" if not self.tenor.is_empty() else ""
        return f"{self.spot_exchange_rate} {self.forward_points:+.4f}{tenor}"
