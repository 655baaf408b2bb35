"""Logging setup for the Cloud Functions (stdout is captured as Cloud Logging)."""

import logging
import sys
from typing import Optional

from .config import LOG_LEVEL

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger with a single stdout handler.

    Safe to call more than once: existing handlers are replaced.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...). Defaults to LOG_LEVEL.
    """
    log_level = level or LOG_LEVEL

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger('urllib3').setLevel(logging.WARNING)
