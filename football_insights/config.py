"""
Configuration constants for the Football Insights service
Centralizes timeouts, retry counts and logger setup
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from .constants import (
    DEFAULT_LIMIT_PER_LEAGUE,
    DEFAULT_TOP_TEAM_LEAGUES,
    RECENT_FIXTURES_LIMIT,
    SEASON_START_MONTH,
)


API_TIMEOUT = int(os.getenv("API_TIMEOUT", 10))
"""Default timeout (seconds) for outbound API calls."""

API_MAX_RETRIES = int(os.getenv("API_MAX_RETRIES", 3))
"""Maximum transport attempts for outbound API calls."""

API_BACKOFF_FACTOR = float(os.getenv("API_BACKOFF_FACTOR", 0.5))

RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


PACKAGE_LOGGER = "football_insights"

# Transport libraries stay quiet unless something is actually wrong
QUIET_LOGGERS = ("urllib3", "requests")


def setup_logger(name: str) -> logging.Logger:
    """Create or retrieve a configured logger for the application.

    Handlers (console plus a rotating ``football_insights.log``) are attached
    once, to the package logger, and only when the host application has not
    configured the root logger itself. Module loggers propagate to it.
    """

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    for noisy in QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if logging.getLogger().handlers or package_logger.handlers:
        return logger

    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    log_file = os.path.join(os.path.dirname(os.path.dirname(__file__)), "football_insights.log")
    for handler in (
        logging.StreamHandler(),
        RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3),
    ):
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        package_logger.addHandler(handler)
    package_logger.setLevel(log_level)

    return logger
