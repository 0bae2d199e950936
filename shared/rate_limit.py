"""
In-memory fixed-window rate limiting, keyed by client IP.

Counters live in the worker process, so each Function host instance
enforces its own budget.
"""

import time
import logging
from typing import Callable, Dict, Optional, Tuple

from .config import load_settings
from .permissions import RateLimitError

logger = logging.getLogger(__name__)

GENERAL = "general"
AUTH = "auth"


class RateLimiter:
    """Allows `max_requests` per key within each `window_seconds` window."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_prune = clock()

    def hit(self, key: str) -> bool:
        """Record one request for `key`. Returns False once the budget is spent."""
        now = self._clock()
        if now - self._last_prune >= self.window_seconds:
            self._prune(now)

        started, count = self._windows.get(key, (now, 0))

        if now - started >= self.window_seconds:
            started, count = now, 0

        count += 1
        self._windows[key] = (started, count)
        return count <= self.max_requests

    def _prune(self, now: float) -> None:
        """Drop keys whose window has already ended."""
        expired = [
            key for key, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        self._last_prune = now

    def reset(self) -> None:
        self._windows.clear()


_limiters: Dict[str, RateLimiter] = {}


def get_rate_limiter(bucket: str) -> RateLimiter:
    """Get (or lazily build from settings) the limiter for a bucket."""
    limiter = _limiters.get(bucket)
    if limiter is None:
        settings = load_settings()
        max_requests = settings.auth_rate_limit_max if bucket == AUTH else settings.rate_limit_max
        limiter = RateLimiter(max_requests, settings.rate_limit_window)
        _limiters[bucket] = limiter
    return limiter


def check_rate_limit(bucket: Optional[str], client_ip: str) -> None:
    """
    Count a request against a bucket.

    Raises:
        RateLimitError: If the client has exceeded the bucket's budget
    """
    if not bucket:
        return

    if not get_rate_limiter(bucket).hit(client_ip):
        logger.warning(f"Rate limit exceeded for {client_ip} ({bucket})")
        raise RateLimitError("Too many requests, please try again later.")


def reset_rate_limits() -> None:
    """Drop every limiter so the next request rebuilds them from settings."""
    _limiters.clear()
