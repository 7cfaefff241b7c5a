"""Utility functions for Gmail Metadata Archiver."""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog to drop events below ``level``.

    Args:
        level: Standard logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
    )
