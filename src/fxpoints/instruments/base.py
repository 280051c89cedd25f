"""Base class for instruments with lazily calculated, cached results.

An instrument is valued by the pricing engine attached to it. Results are
computed on the first request and cached; any notification from the engine,
its market data, or the global evaluation date marks them stale, and the next
request recalculates. Expired instruments skip the engine and report zero.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any

from fxpoints.core.settings import Settings
from fxpoints.core.time import Date
from fxpoints.engines.base import InstrumentResults, PricingEngine, PricingEngineArguments
from fxpoints.exceptions import ResultNotAvailableError
from fxpoints.logging_config import get_logger, get_performance_logger
from fxpoints.observers.observable import Observable, ObserverBase

logger = get_logger(__name__)
perf_logger = get_performance_logger("instruments")


class Instrument(Observable, ObserverBase, ABC):
    """Lazily valued financial instrument.

    Subclasses implement ``is_expired``, ``setup_arguments`` and extend
    ``fetch_results`` / ``setup_expired`` for their own result fields.
    """

    def __init__(self) -> None:
        Observable.__init__(self)
        ObserverBase.__init__(self)
        self._engine: PricingEngine | None = None
        self._calculated = False
        self._frozen = False
        self._npv: float | None = None
        self._error_estimate: float | None = None
        self._valuation_date: Date | None = None
        self.additional_results: dict[str, Any] = {}
        self.register_with(Settings.instance())

    # ========== ENGINE ==========

    @property
    def pricing_engine(self) -> PricingEngine | None:
        return self._engine

    def set_pricing_engine(self, engine: PricingEngine | None) -> None:
        """Attach an engine; cached results are invalidated."""
        if self._engine is not None:
            self.unregister_with(self._engine)
        self._engine = engine
        if engine is not None:
            self.register_with(engine)
        self.update()

    # ========== LAZY CALCULATION ==========

    @property
    def is_calculated(self) -> bool:
        return self._calculated

    def update(self) -> None:
        """Mark results stale and pass the notification on."""
        self._calculated = False
        if not self._frozen:
            self.notify_observers()

    def freeze(self) -> None:
        """Keep serving cached results whatever the inputs do."""
        self._frozen = True

    def unfreeze(self) -> None:
        self._frozen = False
        self.update()

    def recalculate(self) -> None:
        """Calculate now, even if cached results are current."""
        self._calculated = False
        was_frozen, self._frozen = self._frozen, False
        try:
            self.calculate()
        finally:
            self._frozen = was_frozen

    def calculate(self) -> None:
        if self._calculated or self._frozen:
            return
        self._calculated = True
        try:
            if self.is_expired():
                self.setup_expired()
            else:
                self.perform_calculations()
        except Exception:
            self._calculated = False
            raise

    def perform_calculations(self) -> None:
        """Run the attached engine and copy its results.

        Raises:
            ResultNotAvailableError: If no engine is attached
        """
        if self._engine is None:
            raise ResultNotAvailableError(
                "no pricing engine attached", context={"instrument": type(self).__name__}
            )
        self._engine.reset()
        self.setup_arguments(self._engine.arguments)
        self._engine.arguments.validate()
        logger.debug(
            "Running pricing engine",
            extra={"instrument": type(self).__name__, "engine": type(self._engine).__name__},
        )
        start = time.perf_counter()
        self._engine.calculate()
        perf_logger.debug(
            "Pricing engine finished",
            extra={
                "engine": type(self._engine).__name__,
                "duration_ms": (time.perf_counter() - start) * 1000.0,
            },
        )
        self.fetch_results(self._engine.results)

    @abstractmethod
    def is_expired(self) -> bool:
        """True when the instrument has no remaining cash flows."""

    @abstractmethod
    def setup_arguments(self, arguments: PricingEngineArguments) -> None:
        """Copy the instrument's terms into the engine's arguments."""

    def setup_expired(self) -> None:
        self._npv = 0.0
        self._error_estimate = 0.0
        self._valuation_date = None
        self.additional_results = {}

    def fetch_results(self, results: InstrumentResults) -> None:
        self._npv = results.value
        self._error_estimate = results.error_estimate
        self._valuation_date = results.valuation_date
        self.additional_results = dict(results.additional_results)

    # ========== RESULTS ==========

    def npv(self) -> float:
        self.calculate()
        if self._npv is None:
            raise ResultNotAvailableError("NPV not provided", context=self._result_context())
        return self._npv

    def error_estimate(self) -> float:
        self.calculate()
        if self._error_estimate is None:
            raise ResultNotAvailableError(
                "error estimate not provided", context=self._result_context()
            )
        return self._error_estimate

    def valuation_date(self) -> Date:
        self.calculate()
        if self._valuation_date is None:
            raise ResultNotAvailableError(
                "valuation date not provided", context=self._result_context()
            )
        return self._valuation_date

    def result(self, tag: str) -> Any:
        """Look up an engine-specific additional result."""
        self.calculate()
        if tag not in self.additional_results:
            raise ResultNotAvailableError(
                f"{tag} not provided", context=self._result_context()
            )
        return self.additional_results[tag]

    def _result_context(self) -> dict[str, Any]:
        return {
            "instrument": type(self).__name__,
            "engine": type(self._engine).__name__ if self._engine else None,
        }
