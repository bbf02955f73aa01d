"""Logging utilities for the codex bridge server."""

import logging
import sys

_LOGGER_NAME = "codex_bridge"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance for the bridge.

    Args:
        name: Optional sub-logger name. If None, returns the root bridge logger.

    Returns:
        The requested logger.
    """
    if name:
        if name.startswith(f"{_LOGGER_NAME}."):
            return logging.getLogger(name)
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def setup_logging(
    level: int | str = logging.WARNING, format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
) -> None:
    """Setup default logging configuration for the server process.

    The handler writes to stderr, because stdout carries the MCP stdio transport
    and must only ever contain protocol messages.

    Args:
        level: Logging level, either numeric or a level name such as "INFO".
        format_str: Log format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    # Avoid adding multiple handlers if called multiple times
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(format_str)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)


# Set default NullHandler to avoid "No handler found" warnings
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
