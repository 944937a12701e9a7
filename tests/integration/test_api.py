"""Tests for the library request handlers."""

import json
from datetime import datetime, timezone

import pytest

from game_backlog.api import LibraryAPI
from game_backlog.config import EnrichmentConfig
from game_backlog.ingestion.extractors import ExtractionError
from game_backlog.ingestion.orchestrator import LibrarySyncService, SyncOrchestrator
from game_backlog.library.models import CatalogItem, CatalogMetadata, PlayStatus, ReviewStats
from game_backlog.library.status import StatusService
from game_backlog.persistence import InMemoryLibraryRepository

USER = "user-1"
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class StubCatalog:
    def __init__(self) -> None:
        self.down = False

    async def fetch_app_details(self, app_id: int) -> CatalogMetadata | None:
        if self.down:
            raise ExtractionError("store down")
        return CatalogMetadata(app_id=app_id, name="Portal 2", type="game")


class StubPlaytime:
    async def fetch_main_story_seconds(self, title: str) -> int | None:
        return 30600


class StubReviews:
    async def fetch_reviews(self, app_id: int) -> ReviewStats | None:
        return ReviewStats(raw_score_percent=100, review_count=10)


@pytest.fixture
def repository() -> InMemoryLibraryRepository:
    repo = InMemoryLibraryRepository()
    repo.add_items(
        USER,
        [
            CatalogItem(app_id=620, name="Portal 2", status=PlayStatus.PLAYING),
            CatalogItem(app_id=400, name="Portal"),
        ],
    )
    return repo


@pytest.fixture
def catalog() -> StubCatalog:
    return StubCatalog()


@pytest.fixture
def api(repository: InMemoryLibraryRepository, catalog: StubCatalog) -> LibraryAPI:
    orchestrator = SyncOrchestrator(
        catalog_source=catalog,
        playtime_source=StubPlaytime(),
        review_source=StubReviews(),
        clock=lambda: NOW,
        config=EnrichmentConfig(),
    )
    return LibraryAPI(
        StatusService(repository),
        LibrarySyncService(repository, orchestrator, concurrency=1),
    )


class TestStatusUpdate:
    def test_success(self, api: LibraryAPI, repository: InMemoryLibraryRepository) -> None:
        response = api.post_status_update(USER, json.dumps({"appId": 400, "status": "playing"}))

        assert response.status_code == 200
        assert response.body == {"success": True}
        playing = repository.get_currently_playing(USER)
        assert playing is not None
        assert playing.app_id == 400

    def test_unauthenticated(self, api: LibraryAPI) -> None:
        response = api.post_status_update(None, {"appId": 400, "status": "playing"})

        assert response.status_code == 401

    def test_unauthenticated_before_body_parsing(self, api: LibraryAPI) -> None:
        response = api.post_status_update("", "{not json")

        assert response.status_code == 401

    @pytest.mark.parametrize(
        ("body", "error"),
        [
            ({"status": "playing"}, "Invalid appId"),
            ({"appId": 1.5, "status": "playing"}, "Invalid appId"),
            ({"appId": 400}, "Missing status"),
            ({"appId": 400, "status": ""}, "Missing status"),
            ({"appId": 400, "status": "Playing"}, "Invalid status"),
            ("{not json", "Invalid JSON"),
            ("[1, 2]", "Invalid JSON"),
        ],
    )
    def test_bad_request(self, api: LibraryAPI, body: object, error: str) -> None:
        response = api.post_status_update(USER, body)

        assert response.status_code == 400
        assert response.body == {"error": error}

    def test_unknown_app_is_server_error(self, api: LibraryAPI) -> None:
        response = api.post_status_update(USER, {"appId": 999, "status": "finished"})

        assert response.status_code == 500


class TestSync:
    @pytest.mark.asyncio
    async def test_success(self, api: LibraryAPI) -> None:
        response = await api.post_sync(USER, {"appId": 620})

        assert response.status_code == 200
        assert response.body["success"] is True
        assert response.body["skipped"] is False
        record = response.body["record"]
        assert record["main_story_hours"] == 8.5
        assert record["steam_review_weighted"] == 73
        assert record["type"] == "game"

    @pytest.mark.asyncio
    async def test_fresh_item_skipped(self, api: LibraryAPI) -> None:
        await api.post_sync(USER, {"appId": 620})

        response = await api.post_sync(USER, {"appId": 620})

        assert response.status_code == 200
        assert response.body["skipped"] is True
        assert response.body["reason"] == "fresh"
        assert response.body["record"] is None

    @pytest.mark.asyncio
    async def test_invalid_app_id(self, api: LibraryAPI) -> None:
        response = await api.post_sync(USER, {"appId": -1})

        assert response.status_code == 400
        assert response.body == {"error": "Invalid appId"}

    @pytest.mark.asyncio
    async def test_unauthenticated(self, api: LibraryAPI) -> None:
        response = await api.post_sync(None, {"appId": 620})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_catalog_unavailable(self, api: LibraryAPI, catalog: StubCatalog) -> None:
        catalog.down = True

        response = await api.post_sync(USER, {"appId": 620})

        assert response.status_code == 500


class TestCurrentPlaying:
    def test_current_game(self, api: LibraryAPI) -> None:
        response = api.get_current_playing(USER)

        assert response.status_code == 200
        assert response.body["game"]["app_id"] == 620
        assert response.body["game"]["name"] == "Portal 2"

    def test_nothing_playing(self, api: LibraryAPI) -> None:
        api.post_status_update(USER, {"appId": 620, "status": "finished"})

        response = api.get_current_playing(USER)

        assert response.body == {"game": None}

    def test_unauthenticated(self, api: LibraryAPI) -> None:
        assert api.get_current_playing(None).status_code == 401
