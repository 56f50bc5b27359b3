"""Structured logging helpers for model loading.

Loggers carry the loading stage (``component``) and an optional correlation
ID in every record's ``extra`` so that log lines from one load can be grouped.
The combinator and grammar layers never log; only the loader and the CLI do.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(component)s] %(message)s"


class CorrelationLogger:
    """Logger that stamps records with component and correlation ID."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None,
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional ID shared by all records of one load
            component: Stage name; defaults to the last segment of ``name``
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _extra(self, extra: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        combined: Dict[str, Any] = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined.update(extra)
        return combined

    def bind(self, component: str) -> "CorrelationLogger":
        """Return a logger for another stage of the same load."""
        return CorrelationLogger(self.logger.name, self.correlation_id, component)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.logger.debug(message, extra=self._extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.logger.info(message, extra=self._extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.logger.warning(message, extra=self._extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ) -> None:
        self.logger.error(message, extra=self._extra(extra), exc_info=exc_info)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log at ERROR with the active traceback."""
        self.logger.exception(message, extra=self._extra(extra))

    @contextmanager
    def timed(self, stage: str) -> Iterator[Dict[str, Any]]:
        """Log how long the enclosed block took at DEBUG level.

        Yields a dict the block may fill with extra fields for the record.
        """
        fields: Dict[str, Any] = {}
        start = time.perf_counter()
        try:
            yield fields
        finally:
            fields["elapsed_ms"] = (time.perf_counter() - start) * 1000
            self.debug(f"{stage} finished", extra=fields)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None,
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


class _ComponentDefaults(logging.Filter):
    """Fill ``component`` for records from loggers outside this package."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name
        return True


def configure_logging(level: str = "INFO") -> None:
    """Install a stderr handler on the package logger at ``level``."""
    package_logger = logging.getLogger("collada_lite")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(_ComponentDefaults())
    package_logger.handlers = [handler]
    package_logger.setLevel(level)
