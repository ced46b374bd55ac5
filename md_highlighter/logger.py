"""Logging helpers for md-highlighter.

Example:
    >>> from md_highlighter.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Drained %d blocks", 3)
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "md_highlighter"


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``md_highlighter``.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        logging.Logger: Standard library logger with the package prefix.

    Examples:
        get_logger("scheduler").name  # "md_highlighter.scheduler"
    """
    if not (name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}.")):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
