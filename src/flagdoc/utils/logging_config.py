"""Logging setup shared by the flagdoc library and CLI."""

from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_ROOT_LOGGER = "flagdoc"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``flagdoc`` namespace."""
    return logging.getLogger(name)


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Install a single stderr handler on the ``flagdoc`` logger.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
