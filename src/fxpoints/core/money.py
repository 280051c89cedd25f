"""Currencies and currency-tagged amounts.

Money arithmetic never converts implicitly: adding or comparing amounts in
different currencies raises IncompatibleCurrencyError. Conversion is the job of
an exchange rate.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fxpoints.core.types import Amount
from fxpoints.exceptions import IncompatibleCurrencyError


@dataclass(frozen=True)
class Currency:
    """Currency identity. Equality and hashing use the ISO code only.

    Attributes:
        code: ISO 4217 code, e.g. "EUR"
        name: Display name
        numeric_code: ISO 4217 numeric code (0 when unknown)
        precision: Number of decimals used by ``Money.rounded``
    """

    code: str
    name: str = field(default="", compare=False, repr=False)
    numeric_code: int = field(default=0, compare=False, repr=False)
    precision: int = field(default=2, compare=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.code) != 3 or not self.code.isalpha():
            raise ValueError(f"Currency code must be 3 letters, got {self.code!r}")
        object.__setattr__(self, "code", self.code.upper())

    @classmethod
    def from_code(cls, code: str) -> Currency:
        """Look up a known currency, or build a bare one for other codes.

        Example:
            >>> Currency.from_code("jpy").precision
            0
        """
        return KNOWN_CURRENCIES.get(code.upper(), cls(code))

    def __str__(self) -> str:
        return self.code


EUR = Currency("EUR", "European Euro", 978, 2)
USD = Currency("USD", "U.S. dollar", 840, 2)
GBP = Currency("GBP", "British pound sterling", 826, 2)
JPY = Currency("JPY", "Japanese yen", 392, 0)
CHF = Currency("CHF", "Swiss franc", 756, 2)
DKK = Currency("DKK", "Danish krone", 208, 2)
SEK = Currency("SEK", "Swedish krona", 752, 2)
NOK = Currency("NOK", "Norwegian krone", 578, 2)

KNOWN_CURRENCIES: dict[str, Currency] = {
    c.code: c for c in (EUR, USD, GBP, JPY, CHF, DKK, SEK, NOK)
}


@dataclass(frozen=True)
class Money:
    """An amount tagged with its currency.

    Example:
        >>> Money(10000.0, EUR) * 1.5
        Money(value=15000.0, currency=Currency(code='EUR'))
    """

    value: Amount
    currency: Currency

    def _check_same_currency(self, other: Money, operation: str) -> None:
        if self.currency != other.currency:
            raise IncompatibleCurrencyError(
                f"cannot {operation} amounts in different currencies",
                context={"left": self.currency.code, "right": other.currency.code},
            )

    def rounded(self) -> Money:
        """Round to the currency's number of decimals."""
        return Money(round(self.value, self.currency.precision), self.currency)

    def __add__(self, other: object) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "add")
        return Money(self.value + other.value, self.currency)

    def __sub__(self, other: object) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "subtract")
        return Money(self.value - other.value, self.currency)

    def __mul__(self, factor: object) -> Money:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Money(self.value * factor, self.currency)

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> Money:
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return Money(self.value / divisor, self.currency)

    def __neg__(self) -> Money:
        return Money(-self.value, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._check_same_currency(other, "compare")
        return self.value < other.value

    def __le__(self, other: Money) -> bool:
        self._check_same_currency(other, "compare")
        return self.value <= other.value

    def __gt__(self, other: Money) -> bool:
        self._check_same_currency(other, "compare")
        return self.value > other.value

    def __ge__(self, other: Money) -> bool:
        self._check_same_currency(other, "compare")
        return self.value >= other.value

    def __str__(self) -> str:
        return f"{self.value:.{self.currency.precision}f} {self.currency.code}"
