"""
Logging Middleware
Logs every dispatch with its outcome and duration
"""
import logging
import time
from typing import Any, Optional

from cosy.logging import getLogger
from cosy.middleware.base_middleware import Middleware


class LoggingMiddleware(Middleware):
    """
    Dispatch logging middleware

    Logs the start of each call, its duration on success, and the error
    on failure. Errors are re-raised unchanged.

    Usage:
        router.use(LoggingMiddleware())
        router.use(LoggingMiddleware(channel='ipc', log_args=True))
    """

    CONFIG_MAPPING = {
        'channel': ('logging.dispatch_channel', 'dispatch'),
        'log_args': ('logging.log_args', False),
    }

    def __init__(self, channel: str = 'dispatch', log_args: bool = False, logger: Optional[logging.Logger] = None):
        self.logger = logger or getLogger(channel)
        self.log_args = log_args

    async def handle(self, context: Any, next, channel: str, *args) -> Any:
        extra = {'channel': channel, 'sender_id': getattr(context, 'sender_id', None)}
        if self.log_args:
            extra['call_args'] = list(args)

        self.logger.debug(f"Dispatch started: {channel}", extra=extra)
        started = time.perf_counter()

        try:
            result = await next()
        except Exception as e:
            duration = (time.perf_counter() - started) * 1000
            self.logger.warning(
                f"Dispatch failed: {channel} ({duration:.2f}ms): {e}",
                extra={**extra, 'duration_ms': round(duration, 2), 'error': e.__class__.__name__},
            )
            raise

        duration = (time.perf_counter() - started) * 1000
        self.logger.info(
            f"Dispatch completed: {channel} ({duration:.2f}ms)",
            extra={**extra, 'duration_ms': round(duration, 2)},
        )
        return result
