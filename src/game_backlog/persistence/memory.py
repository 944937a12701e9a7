"""
In-memory library repository.

Reference implementation of LibraryRepository used by the CLI and
tests. Each user's rows are guarded by a re-entrant lock; a
transaction holds that lock for its whole duration and restores a
snapshot of the rows if it raises.
"""

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace

from game_backlog.errors import PersistenceError
from game_backlog.library.models import (
    CatalogItem,
    EnrichedRecord,
    EnrichmentSource,
    PlayStatus,
)
from game_backlog.logger import get_logger
from game_backlog.persistence.base import LibraryRepository


class InMemoryLibraryRepository(LibraryRepository):
    """Thread-safe dictionary-backed repository."""

    def __init__(self) -> None:
        self._rows: dict[str, dict[int, CatalogItem]] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()
        self._logger = get_logger(__name__, component="repository")

    def _lock_for(self, user_id: str) -> threading.RLock:
        with self._registry_lock:
            if user_id not in self._locks:
                self._locks[user_id] = threading.RLock()
            return self._locks[user_id]

    def _user_rows(self, user_id: str) -> dict[int, CatalogItem]:
        return self._rows.setdefault(user_id, {})

    def _require(self, user_id: str, app_id: int) -> CatalogItem:
        item = self._user_rows(user_id).get(app_id)
        if item is None:
            raise PersistenceError(f"App {app_id} is not in the library of user {user_id}")
        return item

    def add_items(self, user_id: str, items: Iterable[CatalogItem]) -> None:
        with self._lock_for(user_id):
            rows = self._user_rows(user_id)
            for item in items:
                rows[item.app_id] = replace(item)

    def get_item(self, user_id: str, app_id: int) -> CatalogItem | None:
        with self._lock_for(user_id):
            item = self._user_rows(user_id).get(app_id)
            return replace(item) if item else None

    def list_items(self, user_id: str) -> list[CatalogItem]:
        with self._lock_for(user_id):
            return [replace(item) for item in self._user_rows(user_id).values()]

    def get_currently_playing(self, user_id: str) -> CatalogItem | None:
        with self._lock_for(user_id):
            for item in self._user_rows(user_id).values():
                if item.status == PlayStatus.PLAYING:
                    return replace(item)
            return None

    def update_status(self, user_id: str, app_id: int, status: PlayStatus) -> None:
        with self._lock_for(user_id):
            self._require(user_id, app_id).status = status

    def bulk_demote(self, user_id: str, exclude_app_id: int | None = None) -> int:
        demoted = 0
        with self._lock_for(user_id):
            for item in self._user_rows(user_id).values():
                if item.status == PlayStatus.PLAYING and item.app_id != exclude_app_id:
                    item.status = PlayStatus.BACKLOG
                    demoted += 1
        return demoted

    def read_last_synced_at(self, user_id: str, app_id: int) -> str | None:
        with self._lock_for(user_id):
            item = self._user_rows(user_id).get(app_id)
            return item.last_synced_at if item else None

    def write_enriched_record(self, user_id: str, app_id: int, record: EnrichedRecord) -> None:
        if record.app_id != app_id:
            raise PersistenceError(f"Record for app {record.app_id} written to app {app_id}")
        with self._lock_for(user_id):
            rows = self._user_rows(user_id)
            item = rows.setdefault(app_id, CatalogItem(app_id=app_id, name=record.name))
            item.name = record.name
            item.type = record.type
            item.categories = frozenset(record.categories)
            item.header_image = record.header_image
            item.metacritic = record.metacritic
            if EnrichmentSource.PLAYTIME not in record.failed_sources:
                item.main_story_hours = record.main_story_hours
            if EnrichmentSource.REVIEWS not in record.failed_sources:
                item.steam_review_score = record.steam_review_score
                item.steam_review_count = record.steam_review_count
                item.steam_review_weighted = record.steam_review_weighted
            item.metadata_synced = record.metadata_synced
            # A partial sync stays stale so the next sync retries the failed sources
            if not record.is_partial:
                item.last_synced_at = record.metadata_synced_at

    @contextmanager
    def transaction(self, user_id: str) -> Iterator[LibraryRepository]:
        with self._lock_for(user_id):
            snapshot = {app_id: replace(item) for app_id, item in self._user_rows(user_id).items()}
            try:
                yield self
            except Exception:
                self._rows[user_id] = snapshot
                self._logger.warning("Transaction rolled back", user_id=user_id)
                raise
