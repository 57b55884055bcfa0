"""Logging configuration helpers for trc20_sender."""

from __future__ import annotations

import logging
import os

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_PACKAGE_LOGGER = "trc20_sender"


def _coerce_level(level: int | str | None) -> int:
    """Translate a human readable level into the logging module's numeric level."""
    if isinstance(level, int):
        return level
    if level is None:
        level = os.environ.get("TRC20_LOG_LEVEL", "INFO")
    numeric = getattr(logging, level.strip().upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO


def configure(level: int | str | None = None, fmt: str | None = None) -> logging.Logger:
    """Attach a console handler to the package logger.

    Third-party loggers (httpx, httpcore) are left alone. Calling this
    again replaces the previous handler instead of stacking a second one.
    """
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(_coerce_level(level))

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt or os.environ.get("TRC20_LOG_FORMAT", _DEFAULT_FORMAT),
            _DEFAULT_DATEFMT,
        )
    )
    package_logger.addHandler(handler)
    package_logger.propagate = False
    return package_logger
