"""
Tests for CLI main functionality and command groups.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from mediatag import __version__
from mediatag.cli.main import app
from mediatag.exceptions import EXIT_CODE_INVALID_ARGS


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


def test_cli_version(runner):
    """Test version flag."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"mediatag v{__version__}" in result.stdout


def test_cli_version_command(runner):
    """Test version command."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_cli_help(runner):
    """Test help command."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Hierarchical tagging for media libraries" in result.stdout


def test_cli_status(runner):
    """Test status command."""
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 0
    assert "mediatag is ready to use" in result.stdout


class TestTvCommands:
    """Tests for ``mediatag tv``."""

    def test_episode(self, runner):
        result = runner.invoke(app, ["tv", "episode", "hiS01E04.ex"])
        assert result.exit_code == 0
        assert "hiS01E04.ex" in result.stdout

    def test_episode_with_options(self, runner):
        result = runner.invoke(
            app, ["tv", "episode", "pilot.mkv", "--season", "1", "--episode", "7"]
        )
        assert result.exit_code == 0
        assert "7" in result.stdout

    def test_episode_capture_failure(self, runner):
        result = runner.invoke(app, ["tv", "episode", "trailer.mkv"])
        assert result.exit_code == EXIT_CODE_INVALID_ARGS
        assert "Capture Failed" in result.stdout

    def test_season(self, runner):
        result = runner.invoke(app, ["tv", "season", "e01.mkv", "e02.mkv", "-n", "3"])
        assert result.exit_code == 0
        assert "2 files" in result.stdout

    def test_season_failure(self, runner):
        result = runner.invoke(app, ["tv", "season", "e01.mkv", "extras.mkv", "-n", "3"])
        assert result.exit_code == EXIT_CODE_INVALID_ARGS
        assert "extras.mkv" in result.stdout


class TestTagCommands:
    """Tests for ``mediatag tags``."""

    def test_normalize(self, runner):
        result = runner.invoke(app, ["tags", "normalize", "  Science   FICTION "])
        assert result.exit_code == 0
        assert "science fiction" in result.stdout
        assert "Science FICTION" in result.stdout

    def test_normalize_blank(self, runner):
        result = runner.invoke(app, ["tags", "normalize", "   "])
        assert result.exit_code == EXIT_CODE_INVALID_ARGS
        assert "Invalid Tag" in result.stdout


class TestApiCommands:
    """Tests for ``mediatag api start``."""

    def test_start_development(self, runner):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["api", "start", "--port", "3000"])
        assert result.exit_code == 0
        args, kwargs = mock_run.call_args
        assert args == ("mediatag.api.main:app",)
        assert kwargs["port"] == 3000
        assert kwargs["reload"] is True

    def test_start_production(self, runner):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["api", "start", "--production"])
        assert result.exit_code == 0
        kwargs = mock_run.call_args.kwargs
        assert kwargs["log_level"] == "warning"
        assert kwargs["workers"] == 1
