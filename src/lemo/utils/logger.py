"""Minimal logging utilities for lemo.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from lemo.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Lexed %d tokens", 12)
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "lemo"
_CLI_HANDLER_NAME = "lemo-cli"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "lemo." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'lemo.mymodule'
    """
    if not (name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}.")):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int = logging.WARNING) -> logging.Handler:
    """Attach a stderr handler to the root lemo logger.

    Library code never calls this; it is meant for the command-line driver.
    Calling it again replaces the handler installed by a previous call.

    Args:
        level: Logging level for the lemo namespace

    Returns:
        The installed handler
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(root.handlers):
        if existing.get_name() == _CLI_HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))
    handler.set_name(_CLI_HANDLER_NAME)
    root.addHandler(handler)
    root.setLevel(level)
    return handler
