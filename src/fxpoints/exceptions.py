"""Custom exception classes for FX forward valuation errors.

This module defines the hierarchy of exceptions raised throughout the fxpoints
package. All exceptions inherit from FxPointsException, which keeps a context
dictionary describing the inputs that triggered the failure.
"""

from typing import Any


class FxPointsException(Exception):
    """Base exception for all fxpoints errors.

    Attributes:
        message: Human-readable error description
        context: Additional context information about the error
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description
            context: Optional dictionary with additional error context
                    (e.g., currency codes, dates, curve names)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class IncompatibleCurrencyError(FxPointsException):
    """Exception raised when an amount's currency does not fit the operation.

    This exception should be raised when:
    - An exchange rate is applied to an amount in neither of its currencies
    - Two Money values in different currencies are added or compared
    - A contract notional is in neither currency of the contract rate

    Example:
        >>> raise IncompatibleCurrencyError(
        ...     "exchange rate not applicable",
        ...     context={"amount_currency": "GBP", "rate": "EUR/USD"}
        ... )
    """


class NotChainableError(FxPointsException):
    """Exception raised when two exchange rates share no currency.

    Example:
        >>> raise NotChainableError(
        ...     "exchange rates not chainable",
        ...     context={"first": "EUR/USD", "second": "GBP/JPY"}
        ... )
    """


class TenorMismatchError(FxPointsException):
    """Exception raised when chaining forward rates quoted for different tenors.

    Example:
        >>> raise TenorMismatchError(
        ...     "forward exchange rates must have same tenor in order to chain",
        ...     context={"first": "1M", "second": "3M"}
        ... )
    """


class InvalidCurveConstructionError(FxPointsException):
    """Exception raised for invalid term structure input data.

    This exception should be raised when:
    - No node dates are given
    - Node dates and node values differ in count
    - Node dates are not strictly increasing or not after the reference date
    - Two node dates collapse to the same time under the day count convention

    Example:
        >>> raise InvalidCurveConstructionError(
        ...     "two dates correspond to the same time "
        ...     "under this curve's day count convention",
        ...     context={"date": "2020-03-18", "previous": "2020-03-18"}
        ... )
    """


class InvalidEngineSetupError(FxPointsException):
    """Exception raised when a pricing engine cannot price with its inputs.

    This exception should be raised when:
    - A required curve handle is empty
    - The engine's currency pair does not match the curve or the contract

    Example:
        >>> raise InvalidEngineSetupError(
        ...     "forward points curve handle is empty",
        ...     context={"engine": "ForwardPointsEngine"}
        ... )
    """


class ResultNotAvailableError(FxPointsException):
    """Exception raised when a result is requested that was never calculated.

    Example:
        >>> raise ResultNotAvailableError(
        ...     "fair forward points not provided",
        ...     context={"instrument": "ForeignExchangeForward"}
        ... )
    """


class ConventionError(FxPointsException):
    """Exception raised for day count or business day convention errors.

    This exception should be raised when:
    - Unknown day count convention specified
    - Unknown business day convention specified

    Example:
        >>> raise ConventionError(
        ...     "Unsupported day count convention",
        ...     context={"convention": "ACT/999", "supported": ["A360", "A365"]}
        ... )
    """


class ConfigurationError(FxPointsException):
    """Exception raised for configuration and initialization errors.

    This exception should be raised when:
    - A configuration environment variable holds an invalid value
    - Global settings are given values of the wrong kind

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid evaluation date",
        ...     context={"FXPOINTS_EVALUATION_DATE": "2020-13-45"}
        ... )
    """
