"""Logging setup for the medialib service."""

import logging
import sys

from medialib.core.config import get_settings
from medialib.shared.context import get_request_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

# Package logger; modules log through logging.getLogger(__name__) beneath it.
PACKAGE_LOGGER = "medialib"


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current request id ('-' outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


class _RequestFormatter(logging.Formatter):
    """Formatter used by the package handler (marks it for setup_logging)."""


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a stdout handler to the package logger and set its level.

    The level is ``level`` when given, DEBUG when settings.debug is on, and
    settings.log_level otherwise. Calling it again (one app per test) only
    updates the level; the handler is added once.

    Returns:
        The configured package logger.
    """
    settings = get_settings()
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, _RequestFormatter) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_RequestFormatter(LOG_FORMAT))
        handler.addFilter(RequestIdFilter())
        logger.addHandler(handler)
    return logger
