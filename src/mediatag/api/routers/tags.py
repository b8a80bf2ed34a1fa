"""Tag registry endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Path, Query, status

from mediatag.api.deps import get_tagging_service
from mediatag.api.schemas.responses import problem_responses
from mediatag.api.schemas.tags import (
    TagCreateRequest,
    TagItem,
    TagListResponse,
    TagResponse,
)
from mediatag.services.tagging_service import TaggingService

router = APIRouter()


@router.get("/tags", response_model=TagListResponse, responses=problem_responses(503))
def list_tags(
    q: str | None = Query(
        default=None,
        min_length=1,
        max_length=500,
        description="Only return tags close to this text (typo tolerant)",
    ),
    limit: int = Query(default=5, ge=1, le=50, description="Suggestion limit"),
    service: TaggingService = Depends(get_tagging_service),
) -> TagListResponse:
    """
    List registered tags ordered by normalized form.

    With ``q`` the list is replaced by the closest registered tags, nearest
    first, which is what autocomplete wants.
    """
    if q is not None:
        tags = service.suggest_tags(q, limit=limit)
    else:
        tags = service.list_tags()
    return TagListResponse(data=[TagItem.from_tag(tag) for tag in tags])


@router.post(
    "/tags",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    responses=problem_responses(400, 422, 503),
)
def intern_tag(
    body: TagCreateRequest,
    service: TaggingService = Depends(get_tagging_service),
) -> TagResponse:
    """
    Register tag text, or return the existing tag it normalizes to.

    Interning is idempotent; the display form stays the first-seen text.
    """
    tag_id = service.intern_tag(body.text)
    return TagResponse(data=TagItem.from_tag(service.get_tag(tag_id)))


@router.get(
    "/tags/{tag_id}",
    response_model=TagResponse,
    responses=problem_responses(404, 422, 503),
)
def get_tag(
    tag_id: uuid.UUID = Path(..., description="Tag id"),
    service: TaggingService = Depends(get_tagging_service),
) -> TagResponse:
    """Get one tag with its display name."""
    return TagResponse(data=TagItem.from_tag(service.get_tag(tag_id)))
