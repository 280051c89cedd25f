"""Forward points curves and discount curves."""

from fxpoints.termstructures.base import TermStructure
from fxpoints.termstructures.fx_forward_points import (
    FxForwardPointTermStructure,
    InterpolatedFxForwardPointTermStructure,
)
from fxpoints.termstructures.yield_curves import (
    FlatForward,
    InterpolatedDiscountCurve,
    YieldTermStructure,
)

__all__ = [
    "TermStructure",
    "FxForwardPointTermStructure",
    "InterpolatedFxForwardPointTermStructure",
    "YieldTermStructure",
    "FlatForward",
    "InterpolatedDiscountCurve",
]
