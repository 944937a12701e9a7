"""Tests for data contracts."""

import pytest

from game_backlog.ingestion.contracts import (
    HLTBGame,
    HLTBSearchResponse,
    Metacritic,
    ReviewQuerySummary,
    SteamReviewsResponse,
    SteamStoreGame,
    normalize_title,
)
from game_backlog.library.models import CatalogItemType, CatalogMetadata


class TestSteamStoreGame:
    """Tests for SteamStoreGame contract."""

    def test_minimal_valid_game(self) -> None:
        """Test creation with minimal required fields."""
        game = SteamStoreGame(
            steam_appid=123456,
            name="Test Game",
            type="game",
        )

        assert game.steam_appid == 123456
        assert game.name == "Test Game"
        assert game.is_free is False
        assert game.categories == []

    def test_required_age_coercion(self) -> None:
        """Test that required_age string is converted to int."""
        game = SteamStoreGame(
            steam_appid=123456,
            name="Test Game",
            type="game",
            required_age="18",
        )

        assert game.required_age == 18
        assert isinstance(game.required_age, int)

    def test_category_names_property(self) -> None:
        game = SteamStoreGame(
            steam_appid=123456,
            name="Test Game",
            categories=[
                {"id": 2, "description": "Single-player"},
                {"id": 1, "description": "Multi-player"},
            ],
        )

        assert game.category_names == ["Single-player", "Multi-player"]

    def test_to_catalog_metadata(self) -> None:
        game = SteamStoreGame(
            steam_appid=620,
            name="Portal 2",
            type="game",
            header_image="https://example.com/620.jpg",
            metacritic=Metacritic(score=95),
            categories=[{"id": 2, "description": "Single-player"}],
        )

        assert game.to_catalog_metadata() == CatalogMetadata(
            app_id=620,
            name="Portal 2",
            type=CatalogItemType.GAME,
            categories=["Single-player"],
            header_image="https://example.com/620.jpg",
            metacritic=95,
        )

    def test_unrecognized_type_maps_to_unknown(self) -> None:
        game = SteamStoreGame(steam_appid=1, name="Soundtrack", type="music")

        metadata = game.to_catalog_metadata()

        assert metadata.type is CatalogItemType.UNKNOWN
        assert metadata.header_image is None
        assert metadata.metacritic is None


class TestSteamReviewsResponse:
    """Tests for SteamReviewsResponse contract."""

    def test_positive_ratio_calculation(self) -> None:
        """Test positive review ratio calculation."""
        response = SteamReviewsResponse(
            success=1,
            query_summary=ReviewQuerySummary(
                total_positive=80,
                total_negative=20,
                total_reviews=100,
            ),
        )

        assert response.positive_ratio == pytest.approx(0.8)

    def test_positive_ratio_zero_reviews(self) -> None:
        """Test positive ratio when no reviews."""
        response = SteamReviewsResponse(
            success=1,
            query_summary=ReviewQuerySummary(total_reviews=0),
        )

        assert response.positive_ratio is None

    def test_is_successful_property(self) -> None:
        """Test is_successful helper property."""
        assert SteamReviewsResponse(success=1).is_successful is True
        assert SteamReviewsResponse(success=0).is_successful is False

    def test_to_review_stats(self) -> None:
        response = SteamReviewsResponse(
            success=1,
            query_summary=ReviewQuerySummary(
                total_positive=90,
                total_negative=10,
                total_reviews=100,
            ),
        )

        stats = response.to_review_stats()

        assert stats.raw_score_percent == pytest.approx(90)
        assert stats.review_count == 100

    def test_to_review_stats_without_reviews(self) -> None:
        stats = SteamReviewsResponse(success=1).to_review_stats()

        assert stats.raw_score_percent == 0
        assert stats.review_count == 0


class TestHLTBContracts:
    """Tests for HowLongToBeat contracts."""

    def test_normalize_title(self) -> None:
        assert normalize_title("  Portal™ 2: The Game!  ") == "portal 2 the game"

    def test_best_match_prefers_exact_title(self) -> None:
        response = HLTBSearchResponse(
            count=2,
            data=[
                HLTBGame(game_id=1, game_name="Portal 2: Peer Review", comp_main=7200),
                HLTBGame(game_id=2, game_name="Portal 2", comp_main=30600),
            ],
        )

        match = response.best_match("Portal 2")

        assert match is not None
        assert match.game_id == 2

    def test_best_match_falls_back_to_first_hit(self) -> None:
        response = HLTBSearchResponse(
            count=1,
            data=[HLTBGame(game_id=1, game_name="Portal 2: Peer Review", comp_main=7200)],
        )

        match = response.best_match("Portal")

        assert match is not None
        assert match.game_id == 1

    def test_best_match_empty(self) -> None:
        assert HLTBSearchResponse().best_match("Portal") is None

    def test_main_story_time(self) -> None:
        assert HLTBGame(game_id=1, game_name="X").has_main_story_time is False
        assert HLTBGame(game_id=1, game_name="X", comp_main=60).has_main_story_time is True

    def test_negative_times_rejected(self) -> None:
        with pytest.raises(ValueError):
            HLTBGame(game_id=1, game_name="X", comp_main=-1)
