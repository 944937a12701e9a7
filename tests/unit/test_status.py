"""Tests for the play status lifecycle."""

import pytest

from game_backlog.library.models import PlayStatus
from game_backlog.library.status import (
    DemotePlaying,
    SetStatus,
    StatusLifecycle,
    requires_clearing_playing_games,
)
from game_backlog.library.validation import StatusUpdateCommand


class TestRequiresClearingPlayingGames:
    def test_playing_requires_clearing(self) -> None:
        assert requires_clearing_playing_games(PlayStatus.PLAYING) is True
        assert requires_clearing_playing_games("playing") is True

    @pytest.mark.parametrize(
        "status",
        [PlayStatus.BACKLOG, PlayStatus.FINISHED, PlayStatus.DROPPED, PlayStatus.HIDDEN],
    )
    def test_other_statuses(self, status: PlayStatus) -> None:
        assert requires_clearing_playing_games(status) is False


class TestStatusLifecycle:
    """Tests for instruction planning."""

    def test_playing_demotes_first(self) -> None:
        plan = StatusLifecycle().plan(StatusUpdateCommand(app_id=620, status=PlayStatus.PLAYING))

        assert plan == [
            DemotePlaying(exclude_app_id=620),
            SetStatus(app_id=620, status=PlayStatus.PLAYING),
        ]

    @pytest.mark.parametrize("status", [s for s in PlayStatus if s is not PlayStatus.PLAYING])
    def test_other_statuses_only_set(self, status: PlayStatus) -> None:
        plan = StatusLifecycle().plan(StatusUpdateCommand(app_id=620, status=status))

        assert plan == [SetStatus(app_id=620, status=status)]
