"""
Season/episode capture for TV episode file names.

Parses season and episode numbers out of loosely formatted file names such
as ``"Show.S01E02.720p.mkv"`` or ``"season 3 episode 4.avi"``. Numbers
passed explicitly as context take precedence over anything parsed, and skip
the regex work entirely.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from mediatag.exceptions import CaptureError, CaptureErrorReason

EPISODE_PATTERN = re.compile(r"(e(p(isode)?)? *[0-9]+){1}", re.IGNORECASE)
SEASON_PATTERN = re.compile(r"(s(eason)? *[0-9]+){1}", re.IGNORECASE)
NUMBER_PATTERN = re.compile(r"[0-9]+")
SEPARATOR_PATTERN = re.compile(r"(\.|-| )+")


def split_filename(file_path: str) -> Tuple[str, Optional[str]]:
    """
    Split a file name into stem and extension on the last dot.

    Examples
    --------
    >>> split_filename("show.s01e02.mkv")
    ('show.s01e02', '.mkv')
    >>> split_filename("README")
    ('README', None)
    """
    stem, dot, ext = file_path.rpartition(".")
    if not dot:
        return file_path, None
    return stem, f".{ext}"


def format_name(name: str) -> str:
    """
    Turn dots, dashes, and space runs into single spaces and trim.

    Examples
    --------
    >>> format_name("The.Office--S01E01 ")
    'The Office S01E01'
    """
    return SEPARATOR_PATTERN.sub(" ", name).strip()


def _capture_number(pattern: re.Pattern[str], text: str) -> Optional[int]:
    match = pattern.search(text)
    if match is None:
        return None
    digits = NUMBER_PATTERN.search(match.group(0))
    return int(digits.group(0)) if digits else None


def capture_episode(filename: str) -> Optional[int]:
    """Episode number parsed from *filename*, or None."""
    return _capture_number(EPISODE_PATTERN, filename)


def capture_season(filename: str) -> Optional[int]:
    """Season number parsed from *filename*, or None."""
    return _capture_number(SEASON_PATTERN, filename)


class Capture(BaseModel):
    """Season and episode numbers captured for one file."""

    file_path: str = Field(..., description="Original file name as supplied")
    filename: str = Field(..., description="File name without its extension")
    ext: Optional[str] = Field(default=None, description="Extension including the dot")
    season: int = Field(..., ge=0)
    episode: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def title(self) -> str:
        """Display title derived from the file name."""
        return format_name(self.filename)

    @classmethod
    def from_file(
        cls,
        file_path: str,
        *,
        season: Optional[int] = None,
        episode: Optional[int] = None,
    ) -> Capture:
        """
        Capture season/episode numbers for *file_path*.

        Raises
        ------
        CaptureError
            If a number is neither given nor found in the file name.
        """
        filename, ext = split_filename(file_path)

        if episode is None:
            episode = capture_episode(filename)
            if episode is None:
                raise CaptureError(CaptureErrorReason.NO_EPISODE, file_path)
        if season is None:
            season = capture_season(filename)
            if season is None:
                raise CaptureError(CaptureErrorReason.NO_SEASON, file_path)

        return cls(
            file_path=file_path,
            filename=filename,
            ext=ext,
            season=season,
            episode=episode,
        )


def capture_many(
    file_paths: Iterable[str], *, season: Optional[int] = None
) -> List[Capture]:
    """
    Capture every file of a season; the first failure aborts the batch.

    Raises
    ------
    CaptureError
        For the first file that cannot be captured.
    """
    return [Capture.from_file(path, season=season) for path in file_paths]
