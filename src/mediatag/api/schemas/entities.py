"""Entity API schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from mediatag.api.schemas.responses import ApiResponse
from mediatag.api.schemas.tags import TagItem
from mediatag.models.entity import Entity, EntityCreate
from mediatag.models.enums import AssignmentMode, EntityKind, MediaDomain


class EntityCreateRequest(EntityCreate):
    """Request body for registering an entity."""


class EntityItem(BaseModel):
    """Entity as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    domain: MediaDomain
    kind: EntityKind
    parent_id: Optional[uuid.UUID] = None
    children: List[uuid.UUID] = Field(default_factory=list)
    title: Optional[str] = None
    number: Optional[int] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, entity: Entity) -> EntityItem:
        return cls(
            id=entity.id,
            domain=entity.domain,
            kind=entity.kind,
            parent_id=entity.parent_id,
            children=list(entity.children),
            title=entity.title,
            number=entity.number,
            created_at=entity.created_at,
        )


class EntityResponse(ApiResponse[EntityItem]):
    """Response for a single entity."""


class EntityListResponse(ApiResponse[List[EntityItem]]):
    """Response for a list of entities."""


class EntityIdListResponse(ApiResponse[List[uuid.UUID]]):
    """Response for ordered entity id lists (children, path)."""


class EffectiveTagItem(TagItem):
    """An effective tag and the entity whose assignment decided it."""

    source_entity_id: uuid.UUID
    inherited: bool


class EffectiveTagsResponse(ApiResponse[List[EffectiveTagItem]]):
    """Response for the effective tag set of an entity."""


class AssignmentRequest(BaseModel):
    """Request body for setting an assignment by tag text."""

    tag: str = Field(..., min_length=1, max_length=500, description="Tag text")
    mode: AssignmentMode = Field(
        default=AssignmentMode.INCLUDE, description="include or exclude"
    )


class AssignmentItem(BaseModel):
    """An explicit assignment recorded on an entity."""

    model_config = ConfigDict(from_attributes=True)

    tag: TagItem
    mode: AssignmentMode


class AssignmentListResponse(ApiResponse[List[AssignmentItem]]):
    """Response for explicit assignments on an entity."""


class AssignmentResponse(ApiResponse[AssignmentItem]):
    """Response for a single assignment."""
