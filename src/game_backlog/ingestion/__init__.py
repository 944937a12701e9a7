"""
Metadata ingestion: enrichment source clients and the sync orchestrator.
"""

from game_backlog.ingestion.orchestrator import (
    LibrarySyncReport,
    LibrarySyncService,
    SkipReason,
    SyncOrchestrator,
    SyncProgress,
    SyncResult,
)

__all__ = [
    "LibrarySyncReport",
    "LibrarySyncService",
    "SkipReason",
    "SyncOrchestrator",
    "SyncProgress",
    "SyncResult",
]
