"""Logging helpers for the sudokulink package.

Every module logs through ``get_logger(__name__)``, so all records end up
under the ``sudokulink`` logger. ``configure_logging`` attaches a single
handler there and leaves handlers installed by the host application alone.
"""

from __future__ import annotations

import logging
from typing import IO, Optional


PACKAGE_LOGGER = "sudokulink"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

_handler: Optional[logging.Handler] = None


def configure_logging(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Send package records at ``level`` and above to ``stream`` (stderr by default).

    Calling it again swaps the previously installed handler, so the CLI and
    tests can reconfigure freely.
    """
    global _handler

    package = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package.removeHandler(_handler)

    _handler = logging.StreamHandler(stream)
    _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    package.addHandler(_handler)
    package.setLevel(level)
    return package


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if _handler is None:
        configure_logging(logging.WARNING)
    return logging.getLogger(name or PACKAGE_LOGGER)
