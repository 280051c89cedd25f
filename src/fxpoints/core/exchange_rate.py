"""Exchange rates between two currencies.

A rate is either DIRECT (a quoted number) or DERIVED (the composition of two
other rates, kept by value). Operations dispatch on that tag.

Example:
    >>> eur_usd = ExchangeRate(EUR, USD, 1.1389)
    >>> eur_usd.exchange(Money(100.0, EUR))
    Money(value=113.89, currency=Currency(code='USD'))
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fxpoints.core.money import Currency, Money
from fxpoints.core.types import ExchangeRateType, Rate
from fxpoints.exceptions import IncompatibleCurrencyError, NotChainableError


@dataclass(frozen=True)
class ExchangeRate:
    """Rate between a source and a target currency.

    ``rate`` is the number of target units per source unit.

    Attributes:
        source: Currency converted from
        target: Currency converted to
        rate: Units of target per unit of source
        type: DIRECT for quoted rates, DERIVED for chained ones
        rate_chain: The two rates a DERIVED rate was composed from
    """

    source: Currency
    target: Currency
    rate: Rate
    type: ExchangeRateType = ExchangeRateType.DIRECT
    rate_chain: tuple[ExchangeRate, ExchangeRate] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate the rate against its type."""
        if self.type == ExchangeRateType.DIRECT:
            if not self.rate > 0.0:
                raise ValueError(f"Exchange rate must be positive, got {self.rate}")
            if self.rate_chain is not None:
                raise ValueError("A direct exchange rate cannot carry a rate chain")
        elif self.rate_chain is None or len(self.rate_chain) != 2:
            raise ValueError("A derived exchange rate needs exactly two chained rates")

    @property
    def pair(self) -> tuple[Currency, Currency]:
        return (self.source, self.target)

    def involves(self, currency: Currency) -> bool:
        """True when ``currency`` is either side of this rate."""
        return currency == self.source or currency == self.target

    def exchange(self, amount: Money) -> Money:
        """Apply the rate to a cash amount.

        Direct rates multiply source amounts by ``rate`` and divide target
        amounts by it. Derived rates first apply the chained rate that involves
        the amount's currency, then the other one.

        Raises:
            IncompatibleCurrencyError: If the amount's currency is not handled
        """
        if self.type == ExchangeRateType.DIRECT:
            if amount.currency == self.source:
                return Money(amount.value * self.rate, self.target)
            if amount.currency == self.target:
                return Money(amount.value / self.rate, self.source)
        else:
            first, second = self.rate_chain  # type: ignore[misc]
            if first.involves(amount.currency):
                return second.exchange(first.exchange(amount))
            if second.involves(amount.currency):
                return first.exchange(second.exchange(amount))
        raise IncompatibleCurrencyError(
            "exchange rate not applicable",
            context={
                "amount_currency": amount.currency.code,
                "rate": f"{self.source}/{self.target}",
            },
        )

    @staticmethod
    def chain(r1: ExchangeRate, r2: ExchangeRate) -> ExchangeRate:
        """Compose two rates sharing one currency into a rate between the others.

        Pairings are tried in the order source/source, source/target,
        target/source, target/target; the first match decides.

        Raises:
            NotChainableError: If the rates share no currency

        Example:
            >>> eur_usd = ExchangeRate(EUR, USD, 1.10)
            >>> usd_jpy = ExchangeRate(USD, JPY, 150.0)
            >>> ExchangeRate.chain(eur_usd, usd_jpy).rate
            165.00000000000003
        """
        if r1.source == r2.source:
            source, target, rate = r1.target, r2.target, r2.rate / r1.rate
        elif r1.source == r2.target:
            source, target, rate = r1.target, r2.source, 1.0 / (r1.rate * r2.rate)
        elif r1.target == r2.source:
            source, target, rate = r1.source, r2.target, r1.rate * r2.rate
        elif r1.target == r2.target:
            source, target, rate = r1.source, r2.source, r1.rate / r2.rate
        else:
            raise NotChainableError(
                "exchange rates not chainable",
                context={"first": f"{r1.source}/{r1.target}", "second": f"{r2.source}/{r2.target}"},
            )
        return ExchangeRate(source, target, rate, ExchangeRateType.DERIVED, (r1, r2))

    @staticmethod
    def inverse(r: ExchangeRate) -> ExchangeRate:
        """Swap source and target. A derived rate keeps its chain."""
        return ExchangeRate(r.target, r.source, 1.0 / r.rate, r.type, r.rate_chain)

    def __str__(self) -> str:
        return f"{self.source}/{self.target} {self.rate:.{_display_decimals(self.rate)}f}"


def _display_decimals(rate: Rate) -> int:
    """Quote rates with 4 decimals, small rates with more significant digits."""
    return 4 if rate >= 0.01 else 8
