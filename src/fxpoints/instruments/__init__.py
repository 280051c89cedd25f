"""Instruments valued by pricing engines."""

from fxpoints.instruments.base import Instrument
from fxpoints.instruments.fx_forward import ForeignExchangeForward, FxTerms

__all__ = [
    "Instrument",
    "ForeignExchangeForward",
    "FxTerms",
]
