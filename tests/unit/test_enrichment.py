"""Tests for the enrichment policy."""

import pytest

from game_backlog.library.enrichment import (
    EnrichmentStrategy,
    get_enrichment_strategy,
    should_skip_enrichment,
)
from game_backlog.library.models import CatalogItemType


class TestEnrichmentPolicy:
    """Only games are enriched."""

    def test_game_gets_full_strategy(self) -> None:
        strategy = get_enrichment_strategy("game")

        assert strategy == EnrichmentStrategy(
            fetch_primary_playtime_source=True,
            fetch_secondary_review_source=True,
        )
        assert strategy.enabled is True
        assert should_skip_enrichment("game") is False

    def test_enum_member_accepted(self) -> None:
        assert should_skip_enrichment(CatalogItemType.GAME) is False
        assert should_skip_enrichment(CatalogItemType.DLC) is True

    @pytest.mark.parametrize("item_type", ["dlc", "software", "unknown", None, "Game", "demo", ""])
    def test_everything_else_skipped(self, item_type: str | None) -> None:
        strategy = get_enrichment_strategy(item_type)

        assert strategy.fetch_primary_playtime_source is False
        assert strategy.fetch_secondary_review_source is False
        assert should_skip_enrichment(item_type) is True

    def test_every_type_has_a_strategy(self) -> None:
        for item_type in CatalogItemType:
            assert isinstance(get_enrichment_strategy(item_type), EnrichmentStrategy)


class TestCatalogItemTypeParse:
    """Tests for the total type mapping."""

    def test_known_labels(self) -> None:
        assert CatalogItemType.parse("dlc") is CatalogItemType.DLC
        assert CatalogItemType.parse("software") is CatalogItemType.SOFTWARE

    def test_unknown_labels(self) -> None:
        assert CatalogItemType.parse(None) is CatalogItemType.UNKNOWN
        assert CatalogItemType.parse("music") is CatalogItemType.UNKNOWN
