"""Logging for ngram-search.

Modules log through get_logger(__name__), so every record lands under the
"ngram_search" logger. setup_logging() attaches a stdout handler to that
logger only; the host application's root logging config is left alone.
"""

import logging
import sys

from ngram_search.core.config import get_settings

PACKAGE_LOGGER = "ngram_search"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | str | None = None) -> logging.Logger:
    """Configure the package logger and return it.

    Level defaults to DEBUG when settings.debug is True, otherwise INFO.
    Calling it again only updates the level (no duplicate handlers).
    """
    if level is None:
        level = logging.DEBUG if get_settings().debug else logging.INFO
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if not any(getattr(h, "_ngram_search", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._ngram_search = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.
    """
    return logging.getLogger(name)
