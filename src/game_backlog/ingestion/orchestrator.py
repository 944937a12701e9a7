"""
Sync orchestrator that coordinates the enrichment sources.

Decides per catalog item whether metadata is fresh enough to reuse
and which sources apply, runs the fetches and builds the normalized
record handed to the persistence collaborator.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol
from uuid import UUID, uuid4

from game_backlog.config import EnrichmentConfig, get_settings
from game_backlog.errors import InvalidTimestampError, LibraryError, SourceUnavailableError
from game_backlog.ingestion.extractors.base import ExtractionError
from game_backlog.library.enrichment import EnrichmentStrategy, get_enrichment_strategy
from game_backlog.library.freshness import is_metadata_fresh
from game_backlog.library.models import (
    CatalogItem,
    CatalogMetadata,
    EnrichedRecord,
    EnrichmentSource,
    ReviewStats,
)
from game_backlog.library.scoring import (
    calculate_weighted_score,
    round_percent,
    seconds_to_hours,
)
from game_backlog.library.validation import validate_sync_input
from game_backlog.logger import get_logger, log_context
from game_backlog.persistence.base import LibraryRepository


class CatalogSource(Protocol):
    async def fetch_app_details(self, app_id: int) -> CatalogMetadata | None: ...


class PlaytimeSource(Protocol):
    async def fetch_main_story_seconds(self, title: str) -> int | None: ...


class ReviewSource(Protocol):
    async def fetch_reviews(self, app_id: int) -> ReviewStats | None: ...


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SkipReason(str, Enum):
    """Why a sync produced no record."""

    FRESH = "fresh"
    NOT_FOUND = "not_found"


@dataclass
class SyncResult:
    """Outcome of syncing one catalog item."""

    app_id: int
    skipped: bool
    reason: SkipReason | None = None
    strategy: EnrichmentStrategy | None = None
    record: EnrichedRecord | None = None
    failed_sources: list[EnrichmentSource] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        """True when an enrichment source failed and its fields are missing."""
        return bool(self.failed_sources)


@dataclass
class _ReviewScores:
    score: int | None = None
    count: int | None = None
    weighted: int | None = None


class SyncOrchestrator:
    """
    Decides and runs the external fetches for one catalog item.

    Holds no per-item state, so one instance can sync many items
    concurrently.
    """

    def __init__(
        self,
        *,
        catalog_source: CatalogSource,
        playtime_source: PlaytimeSource,
        review_source: ReviewSource,
        clock: Clock = utc_now,
        config: EnrichmentConfig | None = None,
    ) -> None:
        self._catalog_source = catalog_source
        self._playtime_source = playtime_source
        self._review_source = review_source
        self._clock = clock
        self._config = config or get_settings().enrichment
        self._logger = get_logger(__name__, component="orchestrator")

    def _is_fresh(self, item: CatalogItem, now: datetime) -> bool:
        if not item.last_synced_at:
            return False
        try:
            return is_metadata_fresh(
                item.last_synced_at,
                now,
                window_days=self._config.freshness_window_days,
            )
        except InvalidTimestampError:
            # An unreadable timestamp can never prove freshness
            self._logger.warning(
                "Unreadable last_synced_at, treating as stale",
                app_id=item.app_id,
                last_synced_at=item.last_synced_at,
            )
            return False

    async def sync_item(
        self,
        item: CatalogItem,
        *,
        require_catalog_entry: bool = False,
    ) -> SyncResult:
        """
        Sync one catalog item.

        Args:
            item: Item with its current type, name and last_synced_at
            require_catalog_entry: Skip the item when the store has no
                entry for it, instead of enriching from its own fields

        Returns:
            SyncResult; enrichment source failures leave their
            record fields as None instead of failing the sync

        Raises:
            SourceUnavailableError: base catalog metadata could not be fetched
        """
        now = self._clock()

        if self._is_fresh(item, now):
            self._logger.debug("Metadata fresh, skipping sync", app_id=item.app_id)
            return SyncResult(app_id=item.app_id, skipped=True, reason=SkipReason.FRESH)

        try:
            metadata = await self._catalog_source.fetch_app_details(item.app_id)
        except ExtractionError as e:
            raise SourceUnavailableError(
                f"Catalog metadata for app {item.app_id} unavailable: {e}"
            ) from e

        if metadata is None and require_catalog_entry:
            self._logger.info("App unknown to the catalog, skipping sync", app_id=item.app_id)
            return SyncResult(app_id=item.app_id, skipped=True, reason=SkipReason.NOT_FOUND)

        if metadata is not None:
            item = replace(
                item,
                name=metadata.name,
                type=metadata.type,
                categories=frozenset(metadata.categories),
                header_image=metadata.header_image,
                metacritic=metadata.metacritic,
            )

        strategy = get_enrichment_strategy(item.type)
        failed_sources: list[EnrichmentSource] = []

        hours, reviews = await asyncio.gather(
            self._fetch_main_story_hours(item, strategy, failed_sources),
            self._fetch_review_scores(item, strategy, failed_sources),
        )

        record = EnrichedRecord(
            app_id=item.app_id,
            name=item.name,
            type=item.type,
            categories=sorted(item.categories),
            header_image=item.header_image,
            metacritic=item.metacritic,
            main_story_hours=hours,
            steam_review_score=reviews.score,
            steam_review_count=reviews.count,
            steam_review_weighted=reviews.weighted,
            metadata_synced=not failed_sources,
            metadata_synced_at=now.isoformat(),
            failed_sources=failed_sources,
        )

        self._logger.info(
            "Item synced",
            app_id=item.app_id,
            app_type=item.type.value,
            enriched=strategy.enabled,
            main_story_hours=hours,
            weighted_score=reviews.weighted,
            failed_sources=failed_sources or None,
        )

        return SyncResult(
            app_id=item.app_id,
            skipped=False,
            strategy=strategy,
            record=record,
            failed_sources=failed_sources,
        )

    async def _fetch_main_story_hours(
        self,
        item: CatalogItem,
        strategy: EnrichmentStrategy,
        failed_sources: list[EnrichmentSource],
    ) -> float | None:
        if not strategy.fetch_primary_playtime_source or not item.name:
            return None
        try:
            seconds = await self._playtime_source.fetch_main_story_seconds(item.name)
        except ExtractionError as e:
            self._logger.warning("Playtime source failed", app_id=item.app_id, error=str(e))
            failed_sources.append(EnrichmentSource.PLAYTIME)
            return None
        return seconds_to_hours(seconds) if seconds is not None else None

    async def _fetch_review_scores(
        self,
        item: CatalogItem,
        strategy: EnrichmentStrategy,
        failed_sources: list[EnrichmentSource],
    ) -> _ReviewScores:
        if not strategy.fetch_secondary_review_source:
            return _ReviewScores()
        try:
            stats = await self._review_source.fetch_reviews(item.app_id)
        except ExtractionError as e:
            self._logger.warning("Review source failed", app_id=item.app_id, error=str(e))
            failed_sources.append(EnrichmentSource.REVIEWS)
            return _ReviewScores()
        if stats is None:
            return _ReviewScores()

        return _ReviewScores(
            score=round_percent(stats.raw_score_percent) if stats.review_count else None,
            count=stats.review_count,
            weighted=calculate_weighted_score(
                stats.raw_score_percent,
                stats.review_count,
                prior_weight=self._config.prior_weight,
                prior_score=self._config.prior_score,
            ),
        )


@dataclass
class SyncProgress:
    """Tracks progress of a library sync run."""

    total: int
    completed: int = 0
    synced: int = 0
    skipped: int = 0
    failed: int = 0
    current_app_id: int | None = None

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 100.0
        return (self.completed / self.total) * 100


@dataclass
class LibrarySyncReport:
    """Result of a complete library sync run."""

    run_id: UUID
    started_at: datetime
    completed_at: datetime
    total_items: int
    synced: int
    skipped: int
    failed: int
    errors: list[dict[str, Any]]

    @property
    def success_rate(self) -> float:
        if self.total_items == 0:
            return 100.0
        return ((self.synced + self.skipped) / self.total_items) * 100

    @property
    def duration_seconds(self) -> float:
        return (self.completed_at - self.started_at).total_seconds()


class LibrarySyncService:
    """
    Runs syncs against a user's library and persists the records.

    Example:
        >>> service = LibrarySyncService(repository, orchestrator)
        >>> result = await service.sync("user-1", 730)
    """

    def __init__(
        self,
        repository: LibraryRepository,
        orchestrator: SyncOrchestrator,
        *,
        concurrency: int | None = None,
    ) -> None:
        self._repository = repository
        self._orchestrator = orchestrator
        self._concurrency = concurrency or get_settings().enrichment.sync_concurrency
        self._logger = get_logger(__name__, component="library_sync")

    async def sync(self, user_id: str, app_id: Any) -> SyncResult:
        """
        Validate and sync one item of a user's library.

        An app outside the library is added only when the store knows it.

        Raises:
            InvalidAppIdError: app_id is invalid
            SourceUnavailableError: base catalog metadata unavailable
            PersistenceError: the record could not be written
        """
        command = validate_sync_input(app_id)
        stored = self._repository.get_item(user_id, command.app_id)
        if stored is None:
            # Only the store can vouch for an app outside the library
            return await self._sync_and_store(
                user_id,
                CatalogItem(app_id=command.app_id, name=""),
                require_catalog_entry=True,
            )
        return await self._sync_and_store(user_id, stored)

    async def _sync_and_store(
        self,
        user_id: str,
        item: CatalogItem,
        *,
        require_catalog_entry: bool = False,
    ) -> SyncResult:
        # The item may have been read before a concurrent sync stored a newer timestamp
        last_synced_at = self._repository.read_last_synced_at(user_id, item.app_id)
        if last_synced_at is not None:
            item = replace(item, last_synced_at=last_synced_at)

        result = await self._orchestrator.sync_item(
            item, require_catalog_entry=require_catalog_entry
        )
        if result.record is not None:
            self._repository.write_enriched_record(user_id, item.app_id, result.record)
        return result

    async def sync_library(
        self,
        user_id: str,
        *,
        include_synced: bool = False,
        on_progress: Callable[[SyncProgress], None] | None = None,
    ) -> LibrarySyncReport:
        """
        Sync every item of a user's library concurrently.

        Per-item failures are collected in the report instead of
        aborting the run.

        Args:
            user_id: Library owner
            include_synced: Also revisit synced items (stale ones get refreshed)
            on_progress: Called after each item completes
        """
        run_id = uuid4()
        started_at = datetime.now(timezone.utc)
        items = (
            self._repository.list_items(user_id)
            if include_synced
            else self._repository.items_needing_sync(user_id)
        )
        progress = SyncProgress(total=len(items))
        errors: list[dict[str, Any]] = []
        semaphore = asyncio.Semaphore(self._concurrency)

        self._logger.info(
            "Starting library sync",
            run_id=str(run_id),
            user_id=user_id,
            total_items=len(items),
        )

        async def _run(item: CatalogItem) -> None:
            async with semaphore:
                try:
                    result = await self._sync_and_store(user_id, item)
                except LibraryError as e:
                    progress.failed += 1
                    errors.append({"app_id": item.app_id, "error": str(e), "code": e.code})
                    self._logger.error("Item sync failed", app_id=item.app_id, error=str(e))
                else:
                    if result.skipped:
                        progress.skipped += 1
                    else:
                        progress.synced += 1
                finally:
                    progress.completed += 1
                    progress.current_app_id = item.app_id
                    if on_progress:
                        on_progress(progress)

        with log_context(run_id=str(run_id), user_id=user_id):
            await asyncio.gather(*(_run(item) for item in items))

        report = LibrarySyncReport(
            run_id=run_id,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            total_items=len(items),
            synced=progress.synced,
            skipped=progress.skipped,
            failed=progress.failed,
            errors=errors,
        )

        self._logger.info(
            "Library sync complete",
            run_id=str(run_id),
            duration_seconds=report.duration_seconds,
            success_rate=report.success_rate,
            total_errors=len(errors),
        )

        return report
