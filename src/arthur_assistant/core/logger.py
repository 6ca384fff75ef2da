"""Logging utilities for the Arthur assistant."""

import logging
import sys

_LOGGER_NAME = "arthur_assistant"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance for the package.

    Args:
        name: Optional sub-logger name. Module names that already start with the
            package name are used as-is.

    Returns:
        The requested logger.
    """
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def setup_logging(
    level: int = logging.INFO, format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
) -> None:
    """Setup default logging configuration for the package.

    This adds a StreamHandler to the package's root logger.
    Should typically be called by the hosting application, not the package itself,
    unless running as a standalone script.

    Args:
        level: Logging level.
        format_str: Log format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)

    # Avoid adding multiple handlers if called multiple times
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)
    logger.setLevel(level)


# Set default NullHandler to avoid "No handler found" warnings
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
