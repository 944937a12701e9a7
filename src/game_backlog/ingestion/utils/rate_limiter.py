"""
Rate limiter for enrichment source requests.

Token bucket shared by every request a client makes, keeping
library syncs within what Steam and HowLongToBeat tolerate.
"""

import asyncio
import time
from dataclasses import dataclass, field

from game_backlog.logger import get_logger


@dataclass
class RateLimiterConfig:
    """Configuration for rate limiter."""

    requests_per_minute: int = 40
    burst_size: int = 10


@dataclass
class RateLimiter:
    """
    Token bucket rate limiter.

    Allows bursts up to ``burst_size`` requests, then throttles to
    ``requests_per_minute``.

    Example:
        >>> limiter = RateLimiter(RateLimiterConfig(requests_per_minute=40))
        >>> await limiter.acquire()
    """

    config: RateLimiterConfig
    name: str = "default"
    _tokens: float = field(init=False)
    _last_refill: float = field(init=False)
    _lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock)

    def __post_init__(self) -> None:
        self._tokens = float(self.config.burst_size)
        self._last_refill = time.monotonic()
        self._logger = get_logger(__name__, component="rate_limiter", limiter=self.name)

    @property
    def _refill_rate(self) -> float:
        """Tokens added per second."""
        return self.config.requests_per_minute / 60.0

    def _refill(self) -> None:
        now = time.monotonic()
        self._tokens = min(
            float(self.config.burst_size),
            self._tokens + (now - self._last_refill) * self._refill_rate,
        )
        self._last_refill = now

    async def acquire(self) -> None:
        """Take one token, sleeping until one is available."""
        async with self._lock:
            self._refill()

            if self._tokens < 1:
                wait_time = (1 - self._tokens) / self._refill_rate
                self._logger.debug(
                    "Rate limit reached, waiting",
                    wait_seconds=round(wait_time, 2),
                )
                await asyncio.sleep(wait_time)
                self._refill()

            self._tokens -= 1

    @property
    def available_tokens(self) -> float:
        """Current available tokens (for monitoring)."""
        self._refill()
        return self._tokens
