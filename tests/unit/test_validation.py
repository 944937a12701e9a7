"""Tests for request input validation."""

import pytest

from game_backlog.errors import (
    InvalidAppIdError,
    InvalidStatusError,
    MissingStatusError,
    ValidationError,
)
from game_backlog.library.models import PlayStatus
from game_backlog.library.validation import (
    StatusUpdateCommand,
    SyncCommand,
    validate_status_update,
    validate_sync_input,
)


class TestValidateSyncInput:
    """Tests for sync request validation."""

    @pytest.mark.parametrize("app_id", [1, 730, 2147483647])
    def test_valid_app_id(self, app_id: int) -> None:
        assert validate_sync_input(app_id) == SyncCommand(app_id=app_id)

    @pytest.mark.parametrize(
        "app_id",
        [None, 0, -5, 1.5, 730.0, "730", "abc", True, [730]],
    )
    def test_invalid_app_id(self, app_id: object) -> None:
        """Missing, non-integer and non-positive ids are rejected."""
        with pytest.raises(InvalidAppIdError) as exc_info:
            validate_sync_input(app_id)

        assert exc_info.value.code == "Invalid appId"

    def test_missing_app_id(self) -> None:
        with pytest.raises(InvalidAppIdError):
            validate_sync_input()


class TestValidateStatusUpdate:
    """Tests for status update validation."""

    @pytest.mark.parametrize("status", [s.value for s in PlayStatus])
    def test_every_canonical_status(self, status: str) -> None:
        command = validate_status_update(730, status)

        assert command == StatusUpdateCommand(app_id=730, status=PlayStatus(status))

    @pytest.mark.parametrize("app_id", [1, 2147483647])
    def test_boundary_app_ids_unchanged(self, app_id: int) -> None:
        command = validate_status_update(app_id, "finished")

        assert command.app_id == app_id
        assert command.status is PlayStatus.FINISHED

    def test_app_id_checked_first(self) -> None:
        """An invalid id wins over a missing status."""
        with pytest.raises(InvalidAppIdError):
            validate_status_update(0, None)

    @pytest.mark.parametrize("status", [None, ""])
    def test_missing_status(self, status: object) -> None:
        with pytest.raises(MissingStatusError) as exc_info:
            validate_status_update(730, status)

        assert exc_info.value.code == "Missing status"

    @pytest.mark.parametrize("status", ["Playing", "PLAYING", "wishlist", " playing", 0, 1, False])
    def test_invalid_status(self, status: object) -> None:
        """Labels must match exactly; no case folding or trimming."""
        with pytest.raises(InvalidStatusError) as exc_info:
            validate_status_update(730, status)

        assert exc_info.value.code == "Invalid status"

    def test_errors_are_validation_errors(self) -> None:
        with pytest.raises(ValidationError):
            validate_status_update(730, "bogus")
