"""Logging setup for the command line."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"

# stderr handler installed by setup_logging
_handler: logging.Handler | None = None


def setup_logging(component_name: str = "b64img", log_level: int = logging.WARNING) -> logging.Logger:
    """
    Configure a logger that writes to stderr with a consistent format.

    stdout is reserved for converted documents and generated paths.

    Args:
        component_name: Logger name to configure
        log_level: Level for the logger and its handler

    Returns:
        The configured logger
    """
    global _handler

    logger = logging.getLogger(component_name)
    logger.setLevel(log_level)
    logger.propagate = False

    # only add the handler if a previous one does not exist
    if _handler is not None and _handler in logger.handlers:
        _handler.setLevel(log_level)
        return logger

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    _handler.setLevel(log_level)
    logger.addHandler(_handler)
    return logger
