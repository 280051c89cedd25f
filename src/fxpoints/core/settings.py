"""Process-wide valuation settings.

The evaluation date decides which contracts are expired and is the date
instruments are valued as of. It is read once from ``FXPOINTS_EVALUATION_DATE``
(ISO 8601) and falls back to today. Setting a new date notifies every
registered instrument.

Example:
    >>> settings = Settings.instance()
    >>> settings.evaluation_date = Date(2020, 3, 11)
    >>> with saved_settings():
    ...     settings.evaluation_date = Date(2020, 6, 1)
    >>> settings.evaluation_date
    Date(year=2020, month=3, day=11)
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from fxpoints.core.time import Date, parse_iso_date
from fxpoints.exceptions import ConfigurationError
from fxpoints.logging_config import get_logger
from fxpoints.observers.observable import Observable

logger = get_logger(__name__)

EVALUATION_DATE_ENV = "FXPOINTS_EVALUATION_DATE"


def _evaluation_date_from_env() -> Date | None:
    raw = os.getenv(EVALUATION_DATE_ENV)
    if raw is None or not raw.strip():
        return None
    try:
        return parse_iso_date(raw)
    except ValueError as e:
        raise ConfigurationError(
            "Invalid evaluation date", context={EVALUATION_DATE_ENV: raw}
        ) from e


class Settings(Observable):
    """Global settings singleton. Use ``Settings.instance()``."""

    _instance: Settings | None = None

    def __init__(self) -> None:
        super().__init__()
        self._evaluation_date: Date | None = _evaluation_date_from_env()

    @classmethod
    def instance(cls) -> Settings:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def evaluation_date(self) -> Date:
        """Current evaluation date; today's date unless one was set."""
        if self._evaluation_date is None:
            return Date.today()
        return self._evaluation_date

    @evaluation_date.setter
    def evaluation_date(self, value: Date) -> None:
        if not isinstance(value, Date):
            raise ConfigurationError(
                "Evaluation date must be a Date", context={"value": repr(value)}
            )
        if value == self._evaluation_date:
            return
        logger.debug("Evaluation date set", extra={"evaluation_date": value.to_iso()})
        self._evaluation_date = value
        self.notify_observers()

    def reset_evaluation_date(self) -> None:
        """Forget any explicitly set date and fall back to the environment or today."""
        self._evaluation_date = _evaluation_date_from_env()
        self.notify_observers()


@contextmanager
def saved_settings() -> Iterator[Settings]:
    """Restore the evaluation date on exit.

    Example:
        >>> with saved_settings() as settings:
        ...     settings.evaluation_date = Date(2021, 1, 4)
    """
    settings = Settings.instance()
    saved = settings._evaluation_date
    try:
        yield settings
    finally:
        if settings._evaluation_date != saved:
            settings._evaluation_date = saved
            settings.notify_observers()
