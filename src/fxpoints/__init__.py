"""fxpoints: valuation of FX forwards from forward points curves.

This package provides exchange rate algebra (direct, chained and inverted spot
and forward rates), interpolated forward points term structures, discount
curves, and pricing engines valuing FX forward contracts off flat quotes or
curves.

Basic usage:
    >>> import fxpoints
    >>> print(fxpoints.__version__)
    0.1.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

# Import core exceptions for convenient access
from fxpoints.exceptions import (
    ConfigurationError,
    ConventionError,
    FxPointsException,
    IncompatibleCurrencyError,
    InvalidCurveConstructionError,
    InvalidEngineSetupError,
    NotChainableError,
    ResultNotAvailableError,
    TenorMismatchError,
)
from fxpoints.logging_config import configure_logging, get_logger

# Public API
__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Exceptions
    "FxPointsException",
    "IncompatibleCurrencyError",
    "NotChainableError",
    "TenorMismatchError",
    "InvalidCurveConstructionError",
    "InvalidEngineSetupError",
    "ResultNotAvailableError",
    "ConventionError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
]
