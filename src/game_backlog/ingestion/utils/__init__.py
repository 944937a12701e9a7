"""
Utility modules for ingestion.
"""

from game_backlog.ingestion.utils.rate_limiter import RateLimiter, RateLimiterConfig

__all__ = [
    "RateLimiter",
    "RateLimiterConfig",
]
