"""
Game Backlog.

Tracks a game library, enriches titles with Steam and HowLongToBeat
metadata, scores them by review quality and manages play status.
"""

from game_backlog.config import Settings, get_settings
from game_backlog.logger import get_logger, log_context, setup_logging

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "get_logger",
    "log_context",
    "setup_logging",
    "__version__",
]
