"""Tag API schemas."""

from __future__ import annotations

import uuid
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from mediatag.api.schemas.responses import ApiResponse
from mediatag.models.tag import Tag


class TagItem(BaseModel):
    """Tag as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str = Field(..., description="Display form (first-seen casing)")
    normalized: str = Field(..., description="Registry key")

    @classmethod
    def from_tag(cls, tag: Tag) -> TagItem:
        return cls(id=tag.id, name=tag.display_form, normalized=tag.normalized_form)


class TagCreateRequest(BaseModel):
    """Request body for interning a tag."""

    text: str = Field(..., max_length=500, description="Raw tag text")


class TagResponse(ApiResponse[TagItem]):
    """Response for a single tag."""


class TagListResponse(ApiResponse[List[TagItem]]):
    """Response for a list of tags."""
