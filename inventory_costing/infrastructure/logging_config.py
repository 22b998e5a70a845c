"""Structured logging setup."""

import logging
import sys

import structlog

from inventory_costing.domain.shared.errors import ConfigurationError


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structlog for console output.

    Events below ``level`` are dropped before rendering. Output goes to
    stderr so command-line reports on stdout stay clean.

    Args:
        level: Standard level name ("DEBUG", "INFO", "WARNING", ...)

    Example:
        >>> configure_logging("WARNING")
        >>> structlog.get_logger(__name__).info("dropped")
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f"Unknown log level: {level!r}")

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )
