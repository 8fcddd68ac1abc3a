"""
Logging Package
Structured logging with security features

Provides drop-in replacement for standard logging that uses
structured JSON logging with sensitive data filtering.
"""
from larapipe.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
    SensitiveDataFilter
)
import logging
from typing import Optional

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'SensitiveDataFilter',
    'getLogger',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
    'CRITICAL',
]

INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Only allows logger names that are:
    - None (root logger)
    - Listed in logging.ALLOWED_LOGGERS (e.g., 'application', 'security')
    - Module-based names (containing '.') like 'larapipe.routing.executor'

    Any other name falls back to the root logger.

    Example:
        from larapipe.logging import getLogger
        logger = getLogger(__name__)
        logger.debug("Dispatching route", extra={'uri': route.get_uri()})
    """
    if name and name.startswith('sanic.'):
        return logging.getLogger(name)

    if name is not None and '.' not in name:
        from larapipe.support import Config
        allowed_names = Config.get('logging.ALLOWED_LOGGERS', [])

        if name not in allowed_names:
            name = None

    return logging.getLogger(name)
