"""Tests for logging helpers."""

import structlog

from game_backlog.logger import get_logger, log_context


class TestLogContext:
    def test_binds_inside_block_only(self) -> None:
        with log_context(user_id="user-1", app_id=620):
            assert structlog.contextvars.get_contextvars() == {"user_id": "user-1", "app_id": 620}

        assert "user_id" not in structlog.contextvars.get_contextvars()

    def test_none_values_skipped(self) -> None:
        with log_context(user_id="user-1", app_id=None):
            assert structlog.contextvars.get_contextvars() == {"user_id": "user-1"}


class TestGetLogger:
    def test_initial_context_bound(self) -> None:
        with structlog.testing.capture_logs() as logs:
            get_logger(__name__, component="sync").info("Sync skipped", app_id=730)

        assert logs == [
            {"component": "sync", "app_id": 730, "event": "Sync skipped", "log_level": "info"}
        ]
