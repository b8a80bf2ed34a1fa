"""
Tests for TV filename capture.

Includes the loosely formatted names the capture rules were written for:
mixed case, spelled-out markers, zero padding and missing separators.
"""

from __future__ import annotations

import pytest

from mediatag.exceptions import CaptureError, CaptureErrorReason
from mediatag.services.filename_capture import (
    Capture,
    capture_episode,
    capture_many,
    capture_season,
    format_name,
    split_filename,
)


class TestCaptureFromFile:
    """Tests for ``Capture.from_file``."""

    @pytest.mark.parametrize(
        ("file_path", "season", "episode"),
        [
            ("hello s01 e02 hi.mp4", 1, 2),
            ("xs01e20.epc", 1, 20),
            ("SEASON3EPISODE4", 3, 4),
            ("EPIsode2 and SEASOn 0002.exy", 2, 2),
            ("hiS01E04.ex", 1, 4),
            ("The.Wire.S04E13.720p.mkv", 4, 13),
        ],
    )
    def test_numbers_parsed(self, file_path: str, season: int, episode: int) -> None:
        """Season and episode numbers are found in loose names."""
        capture = Capture.from_file(file_path)
        assert capture.season == season
        assert capture.episode == episode
        assert capture.file_path == file_path

    def test_extension_split_off(self) -> None:
        """The extension keeps its dot and is not searched."""
        capture = Capture.from_file("hello s01 e02 hi.mp4")
        assert capture.filename == "hello s01 e02 hi"
        assert capture.ext == ".mp4"

    def test_no_extension(self) -> None:
        """Names without a dot have no extension."""
        assert Capture.from_file("SEASON3EPISODE4").ext is None

    def test_context_overrides_parsing(self) -> None:
        """Explicit numbers are used as given."""
        capture = Capture.from_file("S01E02.mkv", season=7, episode=9)
        assert (capture.season, capture.episode) == (7, 9)

    def test_context_fills_missing_numbers(self) -> None:
        """A name with no numbers works when both are supplied."""
        capture = Capture.from_file("pilot.mkv", season=1, episode=1)
        assert capture.title == "pilot"

    def test_missing_episode(self) -> None:
        """No episode number anywhere raises CaptureError."""
        with pytest.raises(CaptureError) as exc_info:
            Capture.from_file("trailer.mkv")
        assert exc_info.value.reason is CaptureErrorReason.NO_EPISODE
        assert exc_info.value.file_path == "trailer.mkv"
        assert "No episode number" in exc_info.value.message

    def test_missing_season(self) -> None:
        """No season number anywhere raises CaptureError."""
        with pytest.raises(CaptureError) as exc_info:
            Capture.from_file("Episode 5.mkv")
        assert exc_info.value.reason is CaptureErrorReason.NO_SEASON

    def test_title_is_formatted(self) -> None:
        """The title replaces dots and dashes with spaces."""
        assert Capture.from_file("The.Wire-S04E13.mkv").title == "The Wire S04E13"


class TestCaptureMany:
    """Tests for ``capture_many``."""

    def test_season_applies_to_all(self) -> None:
        """A season number given once covers every file."""
        captures = capture_many(["e01.mkv", "e02.mkv"], season=3)
        assert [(c.season, c.episode) for c in captures] == [(3, 1), (3, 2)]

    def test_first_failure_aborts(self) -> None:
        """One bad name fails the whole batch."""
        with pytest.raises(CaptureError) as exc_info:
            capture_many(["e01.mkv", "extras.mkv", "bonus.mkv"], season=1)
        assert exc_info.value.file_path == "extras.mkv"


class TestHelpers:
    """Tests for the parsing helpers."""

    def test_split_on_last_dot(self) -> None:
        assert split_filename("a.b.c") == ("a.b", ".c")

    def test_format_name_collapses_separators(self) -> None:
        assert format_name(" The..Office - US ") == "The Office US"

    def test_capture_helpers_return_none(self) -> None:
        assert capture_episode("no numbers") is None
        assert capture_season("no numbers") is None
