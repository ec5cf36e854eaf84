"""Logging setup for the API process."""

import logging
import sys
from typing import Optional

from learnfolio.config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# Chatty third-party loggers, held at WARNING unless running at DEBUG
_QUIET_LOGGERS = ("sqlalchemy.engine", "urllib3", "yfinance")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging from settings, or from an explicit level name."""
    numeric = logging.getLevelName((level or get_settings().log_level).upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    quiet_level = logging.DEBUG if numeric <= logging.DEBUG else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
