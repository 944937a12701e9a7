"""
Enrichment source clients.

Steam Store, Steam Reviews and HowLongToBeat extractors built on a
common base with retry logic, rate limiting and structured logging.
"""

from game_backlog.ingestion.extractors.base import (
    APIError,
    BaseExtractor,
    ExtractionError,
    ExtractionResult,
    RateLimitError,
    ResponseValidationError,
)
from game_backlog.ingestion.extractors.hltb import HowLongToBeatExtractor
from game_backlog.ingestion.extractors.steam_reviews import SteamReviewsExtractor
from game_backlog.ingestion.extractors.steam_store import SteamStoreExtractor

__all__ = [
    # Base classes and errors
    "APIError",
    "BaseExtractor",
    "ExtractionError",
    "ExtractionResult",
    "RateLimitError",
    "ResponseValidationError",
    # Extractors
    "HowLongToBeatExtractor",
    "SteamReviewsExtractor",
    "SteamStoreExtractor",
]
