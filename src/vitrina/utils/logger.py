"""Minimal logging utilities for Vitrina.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; hosts configure output.

Example:
    >>> from vitrina.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Resolving image paths")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "vitrina." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("images")
        >>> logger.name
        'vitrina.images'
    """
    if not (name == "vitrina" or name.startswith("vitrina.")):
        name = f"vitrina.{name}"
    return logging.getLogger(name)
