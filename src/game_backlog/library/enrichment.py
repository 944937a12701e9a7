"""
Enrichment policy.

Decides from an item's type which external enrichment sources
apply. Only real games get time-to-beat and review data; DLC,
software and anything unrecognized are left unenriched.
"""

from dataclasses import dataclass

from game_backlog.library.models import CatalogItemType


@dataclass(frozen=True)
class EnrichmentStrategy:
    """Which enrichment sources to query for an item."""

    fetch_primary_playtime_source: bool
    fetch_secondary_review_source: bool

    @property
    def enabled(self) -> bool:
        return self.fetch_primary_playtime_source or self.fetch_secondary_review_source


_FULL = EnrichmentStrategy(fetch_primary_playtime_source=True, fetch_secondary_review_source=True)
_NONE = EnrichmentStrategy(fetch_primary_playtime_source=False, fetch_secondary_review_source=False)

# Must cover every CatalogItemType member
_STRATEGIES: dict[CatalogItemType, EnrichmentStrategy] = {
    CatalogItemType.GAME: _FULL,
    CatalogItemType.DLC: _NONE,
    CatalogItemType.SOFTWARE: _NONE,
    CatalogItemType.UNKNOWN: _NONE,
}


def get_enrichment_strategy(item_type: str | CatalogItemType | None) -> EnrichmentStrategy:
    """
    Get the enrichment strategy for an item type.

    Args:
        item_type: Raw type label, enum member or None

    Returns:
        EnrichmentStrategy with both flags set only for games
    """
    return _STRATEGIES[CatalogItemType.parse(item_type)]


def should_skip_enrichment(item_type: str | CatalogItemType | None) -> bool:
    """Return True unless the item is a game."""
    return not get_enrichment_strategy(item_type).enabled
