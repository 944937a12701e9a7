"""
Game pools.

Selects backlog games for the "short games", "weekend games" and
"random pick" suggestions.
"""

import random
from collections.abc import Iterable

from game_backlog.library.models import CatalogItem, CatalogItemType, PlayStatus

SHORT_GAME_MIN_HOURS = 1
SHORT_GAME_MAX_HOURS = 5
WEEKEND_GAME_MIN_HOURS = 5
WEEKEND_GAME_MAX_HOURS = 12
MAX_PLAYTIME_MINUTES = 240
RANDOM_PICK_MAX_PLAYTIME_MINUTES = 120


def _is_unstarted_backlog_game(item: CatalogItem, max_playtime_minutes: int) -> bool:
    if item.type != CatalogItemType.GAME:
        return False
    if item.main_story_hours is None:
        return False
    if item.playtime_forever is not None and item.playtime_forever > max_playtime_minutes:
        return False
    if not item.is_single_player:
        return False
    return item.status == PlayStatus.BACKLOG


def is_short_game_eligible(item: CatalogItem) -> bool:
    """Single-player backlog game beatable in 1-5 hours, with a weighted score."""
    if not _is_unstarted_backlog_game(item, MAX_PLAYTIME_MINUTES):
        return False
    if item.steam_review_weighted is None:
        return False
    hours = item.main_story_hours or 0
    return SHORT_GAME_MIN_HOURS <= hours <= SHORT_GAME_MAX_HOURS


def is_weekend_game_eligible(item: CatalogItem) -> bool:
    """Single-player backlog game beatable in more than 5 and up to 12 hours."""
    if not _is_unstarted_backlog_game(item, MAX_PLAYTIME_MINUTES):
        return False
    if item.steam_review_weighted is None:
        return False
    hours = item.main_story_hours or 0
    # 5 hours exactly belongs to the short pool
    return WEEKEND_GAME_MIN_HOURS < hours <= WEEKEND_GAME_MAX_HOURS


def is_random_pick_eligible(item: CatalogItem) -> bool:
    """Broader criteria: any barely-played single-player backlog game with a known length."""
    return _is_unstarted_backlog_game(item, RANDOM_PICK_MAX_PLAYTIME_MINUTES)


def _by_weighted_score(items: Iterable[CatalogItem]) -> list[CatalogItem]:
    return sorted(items, key=lambda item: item.steam_review_weighted or 0, reverse=True)


def short_games(items: Iterable[CatalogItem], limit: int | None = None) -> list[CatalogItem]:
    """Eligible short games, best weighted score first."""
    pool = _by_weighted_score(item for item in items if is_short_game_eligible(item))
    return pool[:limit] if limit is not None else pool


def weekend_games(items: Iterable[CatalogItem], limit: int | None = None) -> list[CatalogItem]:
    """Eligible weekend games, best weighted score first."""
    pool = _by_weighted_score(item for item in items if is_weekend_game_eligible(item))
    return pool[:limit] if limit is not None else pool


def pick_random_game(
    items: Iterable[CatalogItem],
    *,
    rng: random.Random | None = None,
) -> CatalogItem | None:
    """
    Pick a random eligible game.

    Args:
        items: Library items to choose from
        rng: Random generator (module-level generator if None)

    Returns:
        The chosen item, or None when nothing is eligible
    """
    pool = [item for item in items if is_random_pick_eligible(item)]
    if not pool:
        return None
    return (rng or random).choice(pool)  # type: ignore[attr-defined]
