"""
Rate Limiting Middleware
Prevents abuse by limiting calls per caller and time window
"""
import asyncio
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from cosy.defaults import DEFAULT_RATE_LIMIT, DEFAULT_RATE_LIMIT_WINDOW
from cosy.exceptions import TooManyRequestsException
from cosy.logging import getLogger
from cosy.middleware.base_middleware import Middleware

logger = getLogger('cosy.middleware')


@dataclass
class RateLimitRecord:
    count: int
    reset_at: float


def default_key(context: Any) -> str:
    """Key calls by the sender id of the dispatch context"""
    return f"sender:{getattr(context, 'sender_id', None)}"


class RateLimitMiddleware(Middleware):
    """
    Rate limiting middleware using a fixed window per key

    The first call for a key opens a window of ``window`` seconds; at most
    ``max_requests`` calls are let through until the window ends.

    Usage:
        router.use(RateLimitMiddleware(max_requests=10, window=1))

        # Per channel instead of per sender
        RateLimitMiddleware(key_generator=lambda context: 'global')
    """

    ENABLED_CONFIG_KEY = 'rate_limit.enabled'
    CONFIG_MAPPING = {
        'max_requests': ('rate_limit.max_requests', DEFAULT_RATE_LIMIT),
        'window': ('rate_limit.window', DEFAULT_RATE_LIMIT_WINDOW),
    }

    def __init__(
        self,
        max_requests: int = DEFAULT_RATE_LIMIT,
        window: float = DEFAULT_RATE_LIMIT_WINDOW,
        key_generator: Optional[Callable[[Any], str]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window <= 0:
            raise ValueError("window must be positive")

        self.max_requests = max_requests
        self.window = window
        self.key_generator = key_generator or default_key
        self.clock = clock
        self.records: Dict[str, RateLimitRecord] = {}
        self._lock = asyncio.Lock()

    async def before_dispatch(self, context: Any, channel: str, args):
        key = self.key_generator(context)

        async with self._lock:
            now = self.clock()
            record = self.records.get(key)
            if record is None or now >= record.reset_at:
                record = RateLimitRecord(count=0, reset_at=now + self.window)
                self.records[key] = record

            if record.count >= self.max_requests:
                retry_after = max(1, math.ceil(record.reset_at - now))
                logger.warning(f"Rate limit exceeded for {key} on [{channel}]")
                raise TooManyRequestsException(
                    f"Too many requests, retry in {retry_after} seconds"
                )

            record.count += 1
            self._cleanup(now)

    def _cleanup(self, now: float):
        """Drop records whose window has ended"""
        expired = [key for key, record in self.records.items() if now >= record.reset_at]
        for key in expired:
            del self.records[key]

    def remaining(self, key: str) -> int:
        """Calls left in the current window for a key"""
        record = self.records.get(key)
        if record is None or self.clock() >= record.reset_at:
            return self.max_requests
        return max(0, self.max_requests - record.count)

    def reset(self, key: Optional[str] = None):
        if key is None:
            self.records.clear()
        else:
            self.records.pop(key, None)
