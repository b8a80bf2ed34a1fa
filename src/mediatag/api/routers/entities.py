"""Entity lifecycle, assignment and effective-tag endpoints.

Assignments are addressed by tag text rather than tag id: ``PUT`` interns
the text on the way in, ``DELETE`` looks it up and treats an unknown tag as
already cleared. The tag segment uses the ``path`` converter so that text
containing ``/`` (``AC/DC``) can be cleared as well.

Handlers are plain functions: FastAPI runs them in its threadpool, where the
service's blocking read/write lock orders concurrent requests.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, Path, Response, status

from mediatag.api.deps import get_tagging_service
from mediatag.api.schemas.entities import (
    AssignmentItem,
    AssignmentListResponse,
    AssignmentRequest,
    AssignmentResponse,
    EffectiveTagItem,
    EffectiveTagsResponse,
    EntityCreateRequest,
    EntityIdListResponse,
    EntityItem,
    EntityResponse,
)
from mediatag.api.schemas.responses import problem_responses
from mediatag.api.schemas.tags import TagItem
from mediatag.services.tagging_service import TaggingService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/entities",
    response_model=EntityResponse,
    status_code=status.HTTP_201_CREATED,
    responses=problem_responses(400, 422, 503),
)
def create_entity(
    body: EntityCreateRequest,
    service: TaggingService = Depends(get_tagging_service),
) -> EntityResponse:
    """Register a new entity under an optional parent."""
    entity_id = service.create_entity(
        body.domain,
        body.kind,
        body.parent_id,
        title=body.title,
        number=body.number,
    )
    return EntityResponse(data=EntityItem.from_entity(service.get_entity(entity_id)))


@router.get(
    "/entities/{entity_id}",
    response_model=EntityResponse,
    responses=problem_responses(404, 422, 503),
)
def get_entity(
    entity_id: uuid.UUID = Path(..., description="Entity id"),
    service: TaggingService = Depends(get_tagging_service),
) -> EntityResponse:
    """Get one entity."""
    return EntityResponse(data=EntityItem.from_entity(service.get_entity(entity_id)))


@router.get(
    "/entities/{entity_id}/children",
    response_model=EntityIdListResponse,
    responses=problem_responses(404, 422, 503),
)
def get_children(
    entity_id: uuid.UUID = Path(..., description="Entity id"),
    service: TaggingService = Depends(get_tagging_service),
) -> EntityIdListResponse:
    """Child ids in insertion order."""
    return EntityIdListResponse(data=service.children(entity_id))


@router.get(
    "/entities/{entity_id}/path",
    response_model=EntityIdListResponse,
    responses=problem_responses(404, 409, 422, 503),
)
def get_path(
    entity_id: uuid.UUID = Path(..., description="Entity id"),
    service: TaggingService = Depends(get_tagging_service),
) -> EntityIdListResponse:
    """Ancestry of an entity, root first and the entity itself last."""
    return EntityIdListResponse(data=service.path_to_root(entity_id))


@router.delete(
    "/entities/{entity_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=problem_responses(404, 422, 503),
)
def remove_entity(
    entity_id: uuid.UUID = Path(..., description="Entity id"),
    service: TaggingService = Depends(get_tagging_service),
) -> Response:
    """Remove an entity together with its descendants and their assignments."""
    service.remove_entity(entity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/entities/{entity_id}/tags",
    response_model=EffectiveTagsResponse,
    responses=problem_responses(404, 409, 422, 503),
)
def get_effective_tags(
    entity_id: uuid.UUID = Path(..., description="Entity id"),
    service: TaggingService = Depends(get_tagging_service),
) -> EffectiveTagsResponse:
    """
    Effective tags of an entity.

    Each item names the entity whose include assignment decided it;
    ``inherited`` is true when that is an ancestor.
    """
    sources = service.explain_tags(entity_id)
    items = []
    for tag_id, source_id in sources.items():
        tag = service.get_tag(tag_id)
        items.append(
            EffectiveTagItem(
                id=tag.id,
                name=tag.display_form,
                normalized=tag.normalized_form,
                source_entity_id=source_id,
                inherited=source_id != entity_id,
            )
        )
    items.sort(key=lambda item: item.normalized)
    return EffectiveTagsResponse(data=items)


@router.get(
    "/entities/{entity_id}/assignments",
    response_model=AssignmentListResponse,
    responses=problem_responses(404, 422, 503),
)
def get_assignments(
    entity_id: uuid.UUID = Path(..., description="Entity id"),
    service: TaggingService = Depends(get_tagging_service),
) -> AssignmentListResponse:
    """Assignments recorded directly on an entity."""
    items = [
        AssignmentItem(
            tag=TagItem.from_tag(service.get_tag(assignment.tag_id)),
            mode=assignment.mode,
        )
        for assignment in service.assignments_at(entity_id)
    ]
    items.sort(key=lambda item: item.tag.normalized)
    return AssignmentListResponse(data=items)


@router.put(
    "/entities/{entity_id}/assignments",
    response_model=AssignmentResponse,
    responses=problem_responses(400, 404, 422, 503),
)
def set_assignment(
    body: AssignmentRequest,
    entity_id: uuid.UUID = Path(..., description="Entity id"),
    service: TaggingService = Depends(get_tagging_service),
) -> AssignmentResponse:
    """Include or exclude a tag on an entity, replacing any earlier mode."""
    tag_id = service.tag_entity(entity_id, body.tag, body.mode)
    return AssignmentResponse(
        data=AssignmentItem(
            tag=TagItem.from_tag(service.get_tag(tag_id)), mode=body.mode
        )
    )


@router.delete(
    "/entities/{entity_id}/assignments/{tag:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=problem_responses(404, 422, 503),
)
def clear_assignment(
    entity_id: uuid.UUID = Path(..., description="Entity id"),
    tag: str = Path(..., min_length=1, description="Tag text"),
    service: TaggingService = Depends(get_tagging_service),
) -> Response:
    """Clear the assignment for a tag; clearing an absent one is a no-op."""
    cleared = service.untag_entity(entity_id, tag)
    if not cleared:
        logger.debug("No assignment for tag %r on entity %s", tag, entity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
