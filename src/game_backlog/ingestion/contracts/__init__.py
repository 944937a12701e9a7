"""
Data contracts for enrichment source responses.

Pydantic models describing the Steam Store, Steam Reviews and
HowLongToBeat payloads the library consumes.
"""

from game_backlog.ingestion.contracts.hltb import HLTBGame, HLTBSearchResponse, normalize_title
from game_backlog.ingestion.contracts.steam_reviews import (
    ReviewQuerySummary,
    SteamReviewsResponse,
)
from game_backlog.ingestion.contracts.steam_store import (
    Category,
    Genre,
    Metacritic,
    SteamStoreGame,
)

__all__ = [
    "Category",
    "Genre",
    "HLTBGame",
    "HLTBSearchResponse",
    "Metacritic",
    "ReviewQuerySummary",
    "SteamReviewsResponse",
    "SteamStoreGame",
    "normalize_title",
]
