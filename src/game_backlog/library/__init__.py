"""
Game library core.

Input validation, enrichment policy, metadata freshness,
review scoring and the play status lifecycle.
"""

from game_backlog.library.enrichment import (
    EnrichmentStrategy,
    get_enrichment_strategy,
    should_skip_enrichment,
)
from game_backlog.library.freshness import FRESHNESS_WINDOW_DAYS, is_metadata_fresh
from game_backlog.library.models import (
    AppId,
    CatalogItem,
    CatalogItemType,
    CatalogMetadata,
    EnrichedRecord,
    EnrichmentSource,
    PlayStatus,
    ReviewStats,
)
from game_backlog.library.scoring import (
    PRIOR_SCORE,
    PRIOR_WEIGHT,
    calculate_weighted_score,
    seconds_to_hours,
)
from game_backlog.library.status import (
    StatusLifecycle,
    StatusService,
    requires_clearing_playing_games,
)
from game_backlog.library.validation import (
    StatusUpdateCommand,
    SyncCommand,
    validate_status_update,
    validate_sync_input,
)

__all__ = [
    "FRESHNESS_WINDOW_DAYS",
    "PRIOR_SCORE",
    "PRIOR_WEIGHT",
    "AppId",
    "CatalogItem",
    "CatalogItemType",
    "CatalogMetadata",
    "EnrichedRecord",
    "EnrichmentSource",
    "EnrichmentStrategy",
    "PlayStatus",
    "ReviewStats",
    "StatusLifecycle",
    "StatusService",
    "StatusUpdateCommand",
    "SyncCommand",
    "calculate_weighted_score",
    "get_enrichment_strategy",
    "is_metadata_fresh",
    "requires_clearing_playing_games",
    "seconds_to_hours",
    "should_skip_enrichment",
    "validate_status_update",
    "validate_sync_input",
]
