"""Unit tests for currencies and money arithmetic."""

import pytest

from fxpoints.core.money import EUR, JPY, USD, Currency, Money
from fxpoints.exceptions import IncompatibleCurrencyError


class TestCurrency:
    """Test Currency identity."""

    def test_equality_by_code(self):
        """Only the code takes part in equality."""
        assert Currency("EUR") == EUR
        assert hash(Currency("EUR")) == hash(EUR)

    def test_code_uppercased(self):
        assert Currency("usd").code == "USD"

    def test_invalid_code(self):
        with pytest.raises(ValueError):
            Currency("EURO")

    def test_from_code_known(self):
        assert Currency.from_code("jpy").precision == 0
        assert Currency.from_code("USD").numeric_code == 840

    def test_from_code_unknown(self):
        """Unknown codes give a bare currency with default precision."""
        pln = Currency.from_code("PLN")
        assert pln.code == "PLN"
        assert pln.precision == 2

    def test_str(self):
        assert str(EUR) == "EUR"


class TestMoney:
    """Test Money arithmetic and comparison."""

    def test_add_same_currency(self):
        assert Money(10.0, EUR) + Money(5.0, EUR) == Money(15.0, EUR)

    def test_sub_same_currency(self):
        assert Money(10.0, EUR) - Money(4.0, EUR) == Money(6.0, EUR)

    def test_add_different_currency(self):
        with pytest.raises(IncompatibleCurrencyError) as exc_info:
            Money(10.0, EUR) + Money(5.0, USD)
        assert exc_info.value.context == {"left": "EUR", "right": "USD"}

    def test_scalar_multiplication(self):
        assert Money(10.0, EUR) * 2 == Money(20.0, EUR)
        assert 2 * Money(10.0, EUR) == Money(20.0, EUR)
        assert Money(10.0, EUR) * -1.0 == Money(-10.0, EUR)

    def test_division(self):
        assert Money(10.0, EUR) / 4 == Money(2.5, EUR)

    def test_negation(self):
        assert -Money(10.0, USD) == Money(-10.0, USD)

    def test_comparison(self):
        assert Money(1.0, EUR) < Money(2.0, EUR)
        assert Money(2.0, EUR) >= Money(2.0, EUR)

    def test_comparison_different_currency(self):
        with pytest.raises(IncompatibleCurrencyError):
            _ = Money(1.0, EUR) < Money(2.0, USD)

    def test_rounded(self):
        assert Money(1.23456, EUR).rounded() == Money(1.23, EUR)
        assert Money(1234.56, JPY).rounded() == Money(1235.0, JPY)

    def test_str(self):
        assert str(Money(10000.0, EUR)) == "10000.00 EUR"
        assert str(Money(1500.0, JPY)) == "1500 JPY"
