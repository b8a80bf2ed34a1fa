"""
Enums for mediatag models.

Defines enumeration types used across the application for consistent
type safety and validation.
"""

from __future__ import annotations

from enum import Enum


class MediaDomain(str, Enum):
    """Top-level media domains an entity belongs to."""

    TELEVISION = "television"
    MOVIE = "movie"
    MUSIC = "music"


class EntityKind(str, Enum):
    """Kinds of taggable media entities."""

    SHOW = "show"
    SEASON = "season"
    EPISODE = "episode"
    MOVIE = "movie"
    ALBUM = "album"
    SONG = "song"


class AssignmentMode(str, Enum):
    """How an explicit assignment affects a tag at and below an entity."""

    INCLUDE = "include"
    EXCLUDE = "exclude"


class MatchMode(str, Enum):
    """Combination rule for multi-tag queries."""

    ALL = "all"
    ANY = "any"
