"""Pricing engines for FX forwards."""

from fxpoints.engines.base import (
    ForwardResults,
    GenericEngine,
    InstrumentResults,
    PricingEngine,
    PricingEngineArguments,
)
from fxpoints.engines.forward_points import (
    FlatForwardPointsEngine,
    ForeignExchangeForwardArguments,
    ForeignExchangeForwardEngine,
    ForeignExchangeForwardResults,
    ForwardPointsEngine,
)

__all__ = [
    "PricingEngine",
    "GenericEngine",
    "PricingEngineArguments",
    "InstrumentResults",
    "ForwardResults",
    "ForeignExchangeForwardArguments",
    "ForeignExchangeForwardResults",
    "ForeignExchangeForwardEngine",
    "FlatForwardPointsEngine",
    "ForwardPointsEngine",
]
