"""
Media entity models.

Defines Pydantic models for the nodes of the containment forest
(show -> season -> episode, album -> song, standalone movies) together with
the static containment rules shared by the entity store and the API layer.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import EntityKind, MediaDomain

KIND_DOMAINS: dict[EntityKind, MediaDomain] = {
    EntityKind.SHOW: MediaDomain.TELEVISION,
    EntityKind.SEASON: MediaDomain.TELEVISION,
    EntityKind.EPISODE: MediaDomain.TELEVISION,
    EntityKind.MOVIE: MediaDomain.MOVIE,
    EntityKind.ALBUM: MediaDomain.MUSIC,
    EntityKind.SONG: MediaDomain.MUSIC,
}
"""The single domain each entity kind belongs to."""

PARENT_KINDS: dict[EntityKind, EntityKind] = {
    EntityKind.SEASON: EntityKind.SHOW,
    EntityKind.EPISODE: EntityKind.SEASON,
    EntityKind.SONG: EntityKind.ALBUM,
}
"""Required parent kind for every kind that must have a parent."""

ROOT_KINDS: frozenset[EntityKind] = frozenset(
    {EntityKind.SHOW, EntityKind.MOVIE, EntityKind.ALBUM}
)
"""Kinds that never have a parent."""


class EntityCreate(BaseModel):
    """Model for creating media entities."""

    domain: MediaDomain = Field(..., description="Media domain of the entity")
    kind: EntityKind = Field(..., description="Entity kind")
    parent_id: Optional[uuid.UUID] = Field(
        default=None, description="Containing entity (required for season/episode/song)"
    )
    title: Optional[str] = Field(
        default=None, min_length=1, max_length=500, description="Display title"
    )
    number: Optional[int] = Field(
        default=None, ge=0, description="Season, episode, or track number"
    )


class Entity(BaseModel):
    """Immutable snapshot of a media entity."""

    id: uuid.UUID = Field(..., description="Entity UUID (UUIDv7)")
    domain: MediaDomain
    kind: EntityKind
    parent_id: Optional[uuid.UUID] = None
    children: tuple[uuid.UUID, ...] = Field(
        default=(), description="Child entity ids in insertion order"
    )
    title: Optional[str] = None
    number: Optional[int] = Field(default=None, ge=0)
    created_at: datetime = Field(..., description="When the entity was registered")

    model_config = ConfigDict(frozen=True)

    @property
    def is_root(self) -> bool:
        """Whether the entity has no parent."""
        return self.parent_id is None
