"""
Input validation for sync and status-update requests.

Narrows untyped request values into typed commands. Validation
failures raise a ValidationError subclass whose ``code`` is the
fixed error string reported to clients.
"""

from dataclasses import dataclass
from typing import Any

from game_backlog.errors import InvalidAppIdError, InvalidStatusError, MissingStatusError
from game_backlog.library.models import PlayStatus

VALID_STATUSES = frozenset(s.value for s in PlayStatus)


@dataclass(frozen=True)
class SyncCommand:
    """A validated sync request."""

    app_id: int


@dataclass(frozen=True)
class StatusUpdateCommand:
    """A validated status-update request."""

    app_id: int
    status: PlayStatus


def _validate_app_id(app_id: Any) -> int:
    # bool is an int subclass; floats are rejected even when integral
    if isinstance(app_id, bool) or not isinstance(app_id, int) or app_id <= 0:
        raise InvalidAppIdError()
    return app_id


def _validate_status(status: Any) -> PlayStatus:
    if status is None or status == "":
        raise MissingStatusError()
    if not isinstance(status, str) or status not in VALID_STATUSES:
        raise InvalidStatusError()
    return PlayStatus(status)


def validate_sync_input(app_id: Any = None) -> SyncCommand:
    """
    Validate the input of a sync request.

    Args:
        app_id: Raw appId value from the request body

    Returns:
        SyncCommand with the app id unchanged

    Raises:
        InvalidAppIdError: app_id is missing, non-integer or not positive
    """
    return SyncCommand(app_id=_validate_app_id(app_id))


def validate_status_update(app_id: Any = None, status: Any = None) -> StatusUpdateCommand:
    """
    Validate the input of a status-update request.

    The app id is checked before the status. Status labels must match
    one of the canonical values exactly; no case folding is applied.

    Raises:
        InvalidAppIdError: app_id is missing, non-integer or not positive
        MissingStatusError: status is missing, None or empty
        InvalidStatusError: status is not a canonical label
    """
    valid_app_id = _validate_app_id(app_id)
    return StatusUpdateCommand(app_id=valid_app_id, status=_validate_status(status))
