"""
Command-line interface for Game Backlog.

Provides commands to try the scoring rules, query the enrichment
sources and run a sync for a handful of apps.
"""

import asyncio
import json
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from game_backlog.config import get_settings
from game_backlog.errors import LibraryError
from game_backlog.logger import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__, component="cli")

CLI_USER = "cli"


class CLIOutput(BaseModel):
    """Structured output for CLI commands."""

    success: bool
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: dict[str, Any] | list[Any] | None = None
    error: str | None = None


def print_json(output: CLIOutput) -> None:
    """Print output as formatted JSON."""
    print(json.dumps(output.model_dump(mode="json"), indent=2))


def cmd_test_config() -> None:
    """Show the effective configuration."""
    settings = get_settings()

    print_json(
        CLIOutput(
            success=True,
            command="test-config",
            data={
                "environment": settings.environment,
                "steam_store_url": settings.steam.store_url,
                "steam_reviews_url": settings.steam.reviews_url,
                "steam_requests_per_minute": settings.steam.requests_per_minute,
                "hltb_base_url": settings.hltb.base_url,
                "freshness_window_days": settings.enrichment.freshness_window_days,
                "prior_weight": settings.enrichment.prior_weight,
                "prior_score": settings.enrichment.prior_score,
            },
        )
    )


def cmd_score(raw_score_percent: float, review_count: int) -> None:
    """Compute a weighted review score."""
    from game_backlog.library.scoring import calculate_weighted_score

    enrichment = get_settings().enrichment
    score = calculate_weighted_score(
        raw_score_percent,
        review_count,
        prior_weight=enrichment.prior_weight,
        prior_score=enrichment.prior_score,
    )
    print_json(
        CLIOutput(
            success=True,
            command="score",
            data={
                "raw_score_percent": raw_score_percent,
                "review_count": review_count,
                "weighted_score": score,
            },
        )
    )


def cmd_strategy(app_type: str) -> None:
    """Show which enrichment sources apply to an app type."""
    from game_backlog.library.enrichment import get_enrichment_strategy

    strategy = get_enrichment_strategy(app_type)
    print_json(
        CLIOutput(
            success=True,
            command="strategy",
            data={
                "type": app_type,
                "fetch_primary_playtime_source": strategy.fetch_primary_playtime_source,
                "fetch_secondary_review_source": strategy.fetch_secondary_review_source,
            },
        )
    )


def cmd_validate_status(app_id: Any, status: str) -> None:
    """Validate a status update as the API would."""
    from game_backlog.library.validation import validate_status_update

    try:
        command = validate_status_update(app_id, status)
    except LibraryError as e:
        print_json(CLIOutput(success=False, command="validate-status", error=e.code))
        return

    print_json(
        CLIOutput(
            success=True,
            command="validate-status",
            data={"app_id": command.app_id, "status": command.status.value},
        )
    )


async def cmd_extract_store(app_id: int) -> None:
    """Fetch the Steam Store entry of an app."""
    from game_backlog.ingestion.extractors import SteamStoreExtractor

    async with SteamStoreExtractor() as extractor:
        result = await extractor.extract(app_id)

    print_json(
        CLIOutput(
            success=result.success,
            command="extract-store",
            data=result.model_dump(mode="json") if result.success else None,
            error=result.error_message,
        )
    )


async def cmd_extract_reviews(app_id: int) -> None:
    """Fetch the Steam review summary of an app."""
    from game_backlog.ingestion.extractors import SteamReviewsExtractor

    async with SteamReviewsExtractor() as extractor:
        result = await extractor.extract(app_id)

    print_json(
        CLIOutput(
            success=result.success,
            command="extract-reviews",
            data=result.model_dump(mode="json") if result.success else None,
            error=result.error_message,
        )
    )


async def cmd_extract_hltb(title: str) -> None:
    """Search HowLongToBeat for a title."""
    from game_backlog.ingestion.extractors import HowLongToBeatExtractor

    async with HowLongToBeatExtractor() as extractor:
        result = await extractor.extract(title)

    print_json(
        CLIOutput(
            success=result.success,
            command="extract-hltb",
            data=result.model_dump(mode="json") if result.success else None,
            error=result.error_message,
        )
    )


async def cmd_sync(app_ids_str: str) -> None:
    """
    Sync a list of apps against the live sources.

    Args:
        app_ids_str: Comma-separated app IDs
    """
    from game_backlog.ingestion.extractors import (
        HowLongToBeatExtractor,
        SteamReviewsExtractor,
        SteamStoreExtractor,
    )
    from game_backlog.ingestion.orchestrator import LibrarySyncService, SyncOrchestrator
    from game_backlog.library.models import CatalogItem
    from game_backlog.persistence import InMemoryLibraryRepository

    app_ids = [int(x.strip()) for x in app_ids_str.split(",")]
    repository = InMemoryLibraryRepository()
    repository.add_items(CLI_USER, (CatalogItem(app_id=app_id, name="") for app_id in app_ids))

    print("Game Backlog - Library Sync")
    print(f"{'='*50}")
    print(f"  Apps: {len(app_ids)}")
    print(f"  App IDs: {app_ids[:5]}{'...' if len(app_ids) > 5 else ''}")
    print(f"{'='*50}\n")

    def on_progress(progress) -> None:
        bar_length = 30
        filled = int(bar_length * progress.percentage / 100)
        bar = "█" * filled + "░" * (bar_length - filled)
        print(
            f"\r  [{bar}] {progress.percentage:.1f}% "
            f"| {progress.completed}/{progress.total} "
            f"| app_id={progress.current_app_id or ''}     ",
            end="",
            flush=True,
        )

    async with (
        SteamStoreExtractor() as store,
        SteamReviewsExtractor() as reviews,
        HowLongToBeatExtractor() as hltb,
    ):
        orchestrator = SyncOrchestrator(
            catalog_source=store,
            playtime_source=hltb,
            review_source=reviews,
        )
        service = LibrarySyncService(repository, orchestrator)
        report = await service.sync_library(CLI_USER, on_progress=on_progress)

    print("\n")

    print("Sync Complete!")
    print(f"{'='*50}")
    print(f"  Run ID: {report.run_id}")
    print(f"  Duration: {report.duration_seconds:.2f}s")
    print(f"  Success Rate: {report.success_rate:.1f}%")

    if report.errors:
        print(f"\nErrors ({len(report.errors)}):")
        for err in report.errors[:5]:
            print(f"    - {err['app_id']}: {err['error'][:50]}")

    print_json(
        CLIOutput(
            success=report.failed == 0,
            command="sync",
            data=[item.to_dict() for item in repository.list_items(CLI_USER)],
        )
    )


def print_usage() -> None:
    """Print CLI usage information."""
    usage = """
Game Backlog CLI
================

Usage: game-backlog <command> [arguments]

Commands:
  test-config                        Show effective configuration
  score <raw_percent> <reviews>      Compute a weighted review score
  strategy <type>                    Show enrichment sources for an app type
  validate-status <app_id> <status>  Validate a status update
  extract-store <app_id>             Fetch Steam Store details
  extract-reviews <app_id>           Fetch Steam review summary
  extract-hltb <title>               Search HowLongToBeat
  sync <app_ids>                     Sync comma-separated app IDs

Examples:
  game-backlog score 90 100
  game-backlog sync 620,400
"""
    print(usage)


def _require_args(count: int, message: str) -> None:
    if len(sys.argv) < count:
        print(f"Error: {message}")
        sys.exit(1)


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print_usage()
        sys.exit(1)

    command = sys.argv[1]

    try:
        if command == "test-config":
            cmd_test_config()

        elif command == "score":
            _require_args(4, "raw_percent and review count required")
            cmd_score(float(sys.argv[2]), int(sys.argv[3]))

        elif command == "strategy":
            _require_args(3, "type required")
            cmd_strategy(sys.argv[2])

        elif command == "validate-status":
            _require_args(4, "app_id and status required")
            raw_app_id = sys.argv[2]
            cmd_validate_status(int(raw_app_id) if raw_app_id.lstrip("-").isdigit() else raw_app_id, sys.argv[3])

        elif command == "extract-store":
            _require_args(3, "app_id required")
            asyncio.run(cmd_extract_store(int(sys.argv[2])))

        elif command == "extract-reviews":
            _require_args(3, "app_id required")
            asyncio.run(cmd_extract_reviews(int(sys.argv[2])))

        elif command == "extract-hltb":
            _require_args(3, "title required")
            asyncio.run(cmd_extract_hltb(" ".join(sys.argv[2:])))

        elif command == "sync":
            _require_args(3, "app_ids required (comma-separated)")
            asyncio.run(cmd_sync(sys.argv[2]))

        elif command in ("help", "--help", "-h"):
            print_usage()

        else:
            print(f"Unknown command: {command}")
            print_usage()
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("CLI error", error=str(e))
        print_json(CLIOutput(success=False, command=command, error=str(e)))
        sys.exit(1)


if __name__ == "__main__":
    main()
