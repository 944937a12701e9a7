"""
Metadata freshness.

Decides whether previously synced metadata can be reused or must
be fetched again. The current time is always passed in.
"""

from datetime import datetime, timedelta, timezone

from game_backlog.errors import InvalidTimestampError

FRESHNESS_WINDOW_DAYS = 7


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    A trailing ``Z`` is accepted and naive values are read as UTC.

    Raises:
        InvalidTimestampError: value is not a parseable ISO-8601 string
    """
    if not isinstance(value, str) or not value:
        raise InvalidTimestampError(f"Invalid timestamp: {value!r}")
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidTimestampError(f"Invalid timestamp: {value!r}") from e
    return _as_utc(parsed)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def is_metadata_fresh(
    last_synced_at: str,
    now: datetime,
    *,
    window_days: int = FRESHNESS_WINDOW_DAYS,
) -> bool:
    """
    Check whether metadata synced at ``last_synced_at`` is still fresh.

    Fresh means strictly less than ``window_days`` have elapsed, so
    exactly seven days is already stale.

    Args:
        last_synced_at: ISO-8601 UTC timestamp of the last sync
        now: Current time
        window_days: Freshness window in days

    Returns:
        True if the metadata may be reused

    Raises:
        InvalidTimestampError: last_synced_at is malformed
    """
    elapsed = _as_utc(now) - parse_timestamp(last_synced_at)
    return elapsed < timedelta(days=window_days)
