"""Minimal logging utilities for sangria.

Provides a get_logger function that wraps the standard library logging and
keeps every sangria logger under one namespace. The library never installs
handlers; applications configure ``logging`` as they see fit.

Example:
    >>> from sangria.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendering module")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance under the "sangria." namespace

    Example:
        >>> get_logger("styles").name
        'sangria.styles'
    """
    if not (name == "sangria" or name.startswith("sangria.")):
        name = f"sangria.{name}"
    return logging.getLogger(name)
