"""Centralized logging configuration for fxpoints.

Loggers live under the ``fxpoints`` namespace. Configuration comes from
keyword arguments or, when those are omitted, from environment variables:

- ``FXPOINTS_LOG_LEVEL``: DEBUG, INFO, WARNING, ERROR or CRITICAL
- ``FXPOINTS_LOG_FILE``: path of a rotating log file
- ``FXPOINTS_LOG_FORMAT``: ``logging.Formatter`` format string
- ``FXPOINTS_STRUCTURED_LOGS``: "true"/"1"/"yes" switches to JSON records
- ``FXPOINTS_PERF_LOG_LEVEL``: level of the performance loggers
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

LOGGER_NAMESPACE = "fxpoints"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ENV_LOG_LEVEL = "FXPOINTS_LOG_LEVEL"
ENV_LOG_FILE = "FXPOINTS_LOG_FILE"
ENV_LOG_FORMAT = "FXPOINTS_LOG_FORMAT"
ENV_STRUCTURED_LOGS = "FXPOINTS_STRUCTURED_LOGS"
ENV_PERF_LOG_LEVEL = "FXPOINTS_PERF_LOG_LEVEL"

# LogRecord attributes that are not user-supplied ``extra`` fields.
_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def _resolve_level(level: str | None, env_var: str = ENV_LOG_LEVEL) -> int:
    """Turn a level name (or the environment default) into a logging level."""
    level_name = level or os.getenv(env_var) or DEFAULT_LOG_LEVEL
    return getattr(logging, level_name.upper(), logging.INFO)


class StructuredFormatter(logging.Formatter):
    """Formatter that renders each record as a single JSON object.

    Fields passed through ``extra=`` (curve names, currency pairs, times to
    delivery, ...) are copied into the JSON payload next to the standard ones.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string representation of the log record
        """
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                payload[key] = value

        return json.dumps(payload, default=str)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Get a logger for a module of the package.

    Module loggers carry no handlers of their own: records propagate to the
    ``fxpoints`` logger configured by :func:`configure_logging`. An explicit
    ``level`` sets the module logger's own threshold.

    Args:
        name: Name of the logger (typically ``__name__`` of the calling module)
        level: Optional log level override

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Curve built", extra={"nodes": 5, "pair": "EUR/USD"})
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(_resolve_level(level))
    return logger


def configure_logging(
    level: str | None = None,
    log_file: str | None = None,
    console: bool = True,
    structured: bool = False,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Configure handlers and formatting for the whole fxpoints package.

    Args:
        level: Logging level name. Defaults to ``FXPOINTS_LOG_LEVEL`` or INFO.
        log_file: Path to a rotating log file. Defaults to ``FXPOINTS_LOG_FILE``;
                  no file handler when neither is set.
        console: Whether to log to stdout
        structured: Emit JSON records. Also enabled by ``FXPOINTS_STRUCTURED_LOGS``.
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files to keep

    Example:
        >>> configure_logging(level="DEBUG")
        >>> configure_logging(level="INFO", log_file="/var/log/fxpoints.log",
        ...                   structured=True)
    """
    root = logging.getLogger(LOGGER_NAMESPACE)
    root.handlers.clear()

    log_level = _resolve_level(level)
    root.setLevel(log_level)

    use_structured = structured or os.getenv(ENV_STRUCTURED_LOGS, "").lower() in (
        "true",
        "1",
        "yes",
    )
    if use_structured:
        formatter: logging.Formatter = StructuredFormatter(datefmt=DEFAULT_DATE_FORMAT)
    else:
        formatter = logging.Formatter(
            os.getenv(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT), datefmt=DEFAULT_DATE_FORMAT
        )

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    log_file_path = log_file or os.getenv(ENV_LOG_FILE)
    if log_file_path:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.propagate = False


def get_performance_logger(name: str) -> logging.Logger:
    """Get a logger for timing information.

    Performance loggers sit under ``fxpoints.performance`` and default to
    DEBUG so they can be silenced independently of the module loggers.

    Args:
        name: Suffix of the performance logger name

    Returns:
        Logger configured for performance monitoring

    Example:
        >>> perf_logger = get_performance_logger("engines")
        >>> perf_logger.debug("Forward points engine ran",
        ...                   extra={"duration_ms": 0.12})
    """
    logger = logging.getLogger(f"{LOGGER_NAMESPACE}.performance.{name}")
    perf_level = os.getenv(ENV_PERF_LOG_LEVEL, "DEBUG")
    logger.setLevel(getattr(logging, perf_level.upper(), logging.DEBUG))
    return logger


def disable_logging() -> None:
    """Silence all fxpoints logging (useful in tests and embedding apps)."""
    root = logging.getLogger(LOGGER_NAMESPACE)
    root.handlers.clear()
    root.addHandler(logging.NullHandler())
    root.propagate = False


if not logging.getLogger(LOGGER_NAMESPACE).handlers:
    configure_logging()
