"""
Logging Package
Structured logging with security features

Provides drop-in replacement for standard logging that keeps every
framework logger under the ``cosy`` namespace.
"""
from cosy.logging.logger_config import (
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
    'ROOT_LOGGER',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
    'CRITICAL',
]

ROOT_LOGGER = 'cosy'

# Export logging levels for convenience
INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Bare names ('dispatch', 'app') are placed under the framework namespace
    so that LoggingServiceProvider's configuration applies to them;
    dotted names are used as given.

    Args:
        name: Logger name (framework root logger if None)

    Returns:
        Logger instance

    Example:
        from cosy.logging import getLogger
        logger = getLogger(__name__)

        logger.info("Something happened")
        logger.warning("Warning message", extra={'channel': 'ping'})
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if '.' not in name and name != ROOT_LOGGER:
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
