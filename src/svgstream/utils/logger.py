"""Minimal logging utilities for svgstream.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from svgstream.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Dropped patch line")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "svgstream." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'svgstream.mymodule'
    """
    if not (name == "svgstream" or name.startswith("svgstream.")):
        name = f"svgstream.{name}"
    return logging.getLogger(name)
