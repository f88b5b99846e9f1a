"""Logging setup helpers for breakclock."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "breakclock"
LOG_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s %(message)s"


def configure_logging(debug: bool = False, stream=None) -> logging.Handler:
    """
    Attach one handler to the ``breakclock`` logger and return it.

    Records never go to stdout: that stream carries the status line, which
    the terminal redraws in place.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or LOGGER_NAME)
