"""Core types and value objects for FX forward valuation.

This module provides the enumerations, dates and tenors, currencies and money,
exchange rates and forward exchange rates, and the global valuation settings
used throughout the fxpoints package.
"""

from fxpoints.core.exchange_rate import ExchangeRate
from fxpoints.core.forward_exchange_rate import ForwardExchangeRate
from fxpoints.core.money import (
    CHF,
    DKK,
    EUR,
    GBP,
    JPY,
    KNOWN_CURRENCIES,
    NOK,
    SEK,
    USD,
    Currency,
    Money,
)
from fxpoints.core.settings import Settings, saved_settings
from fxpoints.core.time import Date, Period, add_period, parse_iso_date, parse_tenor
from fxpoints.core.types import (
    # Type aliases
    PIP_FACTOR,
    Amount,
    # Enumerations
    BusinessDayConvention,
    DayCountConvention,
    ExchangeRateType,
    ForwardPoints,
    ForwardType,
    Rate,
    Tenor,
    Time,
    TimeUnit,
)

__all__ = [
    # Type aliases
    "Amount",
    "Rate",
    "ForwardPoints",
    "Time",
    "Tenor",
    "PIP_FACTOR",
    # Enumerations
    "ExchangeRateType",
    "ForwardType",
    "DayCountConvention",
    "BusinessDayConvention",
    "TimeUnit",
    # Date/Time
    "Date",
    "Period",
    "parse_iso_date",
    "parse_tenor",
    "add_period",
    # Money
    "Currency",
    "Money",
    "EUR",
    "USD",
    "GBP",
    "JPY",
    "CHF",
    "DKK",
    "SEK",
    "NOK",
    "KNOWN_CURRENCIES",
    # Rates
    "ExchangeRate",
    "ForwardExchangeRate",
    # Settings
    "Settings",
    "saved_settings",
]
