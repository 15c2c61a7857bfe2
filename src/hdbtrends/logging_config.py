"""
Logging for HDB Resale Trends

Every module logs through a child of the ``hdbtrends`` logger. Records go to
stderr (stdout is reserved for CLI reports and JSON) and, when
HDBTRENDS_LOG_FILE is set, to a UTF-8 log file as well.

Usage:
    from hdbtrends.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Fetched %d records", count)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from hdbtrends.config import get_config

PACKAGE_LOGGER = "hdbtrends"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty dependencies: connection pool and dev server request lines
QUIET_LOGGERS = ("urllib3", "werkzeug")

_configured = False


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """Install the stderr (and optional file) handlers on the package logger.

    Later calls are ignored unless ``force`` is set, so library modules can
    call ``get_logger`` freely before a CLI picks the level.

    Args:
        level: Level name; defaults to HDBTRENDS_LOG_LEVEL.
        log_file: Extra log file; defaults to HDBTRENDS_LOG_FILE.
        force: Replace handlers installed by an earlier call.
    """
    global _configured
    if _configured and not force:
        return

    settings = get_config().logging
    numeric_level = getattr(logging, (level or settings.level).upper(), logging.INFO)
    log_file = log_file or settings.log_file

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    _attach(package_logger, logging.StreamHandler(sys.stderr), numeric_level)
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _attach(package_logger, logging.FileHandler(path, encoding="utf-8"), numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, always under the ``hdbtrends`` hierarchy."""
    if not _configured:
        setup_logging()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def reset_logging() -> None:
    """Drop the package handlers so the next call reconfigures (tests)."""
    global _configured
    _configured = False
    logging.getLogger(PACKAGE_LOGGER).handlers.clear()
