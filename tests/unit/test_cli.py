"""Tests for the offline CLI commands."""

import json
import sys
from unittest.mock import patch

import pytest

from game_backlog import cli


def run_cli(capsys: pytest.CaptureFixture[str], *args: str) -> dict:
    with patch.object(sys, "argv", ["game-backlog", *args]):
        cli.main()
    return json.loads(capsys.readouterr().out)


class TestCLI:
    def test_score(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = run_cli(capsys, "score", "90", "100")

        assert output["success"] is True
        assert output["data"]["weighted_score"] == 80

    def test_strategy(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = run_cli(capsys, "strategy", "dlc")

        assert output["data"]["fetch_primary_playtime_source"] is False

    def test_validate_status_rejected(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = run_cli(capsys, "validate-status", "730", "Playing")

        assert output["success"] is False
        assert output["error"] == "Invalid status"

    def test_validate_status_accepted(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = run_cli(capsys, "validate-status", "730", "playing")

        assert output["data"] == {"app_id": 730, "status": "playing"}

    def test_unknown_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(sys, "argv", ["game-backlog", "bogus"]), pytest.raises(SystemExit):
            cli.main()
