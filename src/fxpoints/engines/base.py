"""Pricing engine framework.

An instrument copies its terms into the engine's ``arguments``, asks the engine
to ``calculate``, and reads the engine's ``results`` back. Engines observe the
market data they price with and forward its notifications to the instruments
they are attached to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from fxpoints.core.money import Currency, Money
from fxpoints.core.time import Date
from fxpoints.observers.observable import Observable, ObserverBase


class PricingEngineArguments:
    """Inputs an instrument hands to its engine."""

    def validate(self) -> None:
        """Check the arguments are complete; subclasses raise ValueError."""


@dataclass
class InstrumentResults:
    """Outputs every engine can provide.

    Attributes:
        value: Net present value, in ``valuation_currency`` when set
        error_estimate: Numerical error estimate of ``value``
        valuation_date: Date the value refers to
        valuation_currency: Currency of ``value``
        additional_results: Engine-specific extras keyed by name
    """

    value: float | None = None
    error_estimate: float | None = None
    valuation_date: Date | None = None
    valuation_currency: Currency | None = None
    additional_results: dict[str, Any] = field(default_factory=dict)

    def reset(self) -> None:
        self.value = None
        self.error_estimate = None
        self.valuation_date = None
        self.valuation_currency = None
        self.additional_results = {}


@dataclass
class ForwardResults(InstrumentResults):
    """Results shared by forward-style instruments.

    Attributes:
        forward_value: Undiscounted value at delivery
    """

    forward_value: Money | None = None

    def reset(self) -> None:
        super().reset()
        self.forward_value = None


class PricingEngine(Observable, ObserverBase, ABC):
    """Strategy computing an instrument's results from its arguments."""

    def __init__(self) -> None:
        Observable.__init__(self)
        ObserverBase.__init__(self)

    @property
    @abstractmethod
    def arguments(self) -> PricingEngineArguments:
        """Mutable argument container filled by the instrument."""

    @property
    @abstractmethod
    def results(self) -> InstrumentResults:
        """Result container read back by the instrument."""

    @abstractmethod
    def reset(self) -> None:
        """Clear previous results before a new calculation."""

    @abstractmethod
    def calculate(self) -> None:
        """Populate ``results`` from ``arguments``."""

    def update(self) -> None:
        self.notify_observers()


ArgumentsT = TypeVar("ArgumentsT", bound=PricingEngineArguments)
ResultsT = TypeVar("ResultsT", bound=InstrumentResults)


class GenericEngine(PricingEngine, Generic[ArgumentsT, ResultsT]):
    """Engine owning one argument and one result container of given types."""

    def __init__(self, arguments: ArgumentsT, results: ResultsT) -> None:
        super().__init__()
        self._arguments = arguments
        self._results = results

    @property
    def arguments(self) -> ArgumentsT:
        return self._arguments

    @property
    def results(self) -> ResultsT:
        return self._results

    def reset(self) -> None:
        self._results.reset()
