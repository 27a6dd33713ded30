"""
Deadline Middleware
Bounds how long the rest of the chain may take
"""
import asyncio
from typing import Any

from cosy.defaults import DEFAULT_DEADLINE
from cosy.exceptions import DeadlineExceededError
from cosy.middleware.base_middleware import Middleware


class DeadlineMiddleware(Middleware):
    """
    Cancel calls that do not finish in time

    Usage:
        router.get('files:scan', scan).middleware(DeadlineMiddleware(5))
    """

    CONFIG_MAPPING = {
        'seconds': ('dispatch.deadline', DEFAULT_DEADLINE),
    }

    def __init__(self, seconds: float = DEFAULT_DEADLINE):
        if seconds <= 0:
            raise ValueError("Deadline must be positive")
        self.seconds = seconds

    async def handle(self, context: Any, next, channel: str, *args) -> Any:
        try:
            return await asyncio.wait_for(next(), timeout=self.seconds)
        except asyncio.TimeoutError:
            raise DeadlineExceededError(channel, self.seconds) from None
