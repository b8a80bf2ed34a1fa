"""Tag search endpoint.

Tags are given as text and resolved through the registry. An unknown tag is
a 404 whose detail lists the closest registered tags.
"""

from __future__ import annotations

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, Query

from mediatag.api.deps import get_tagging_service
from mediatag.api.schemas.entities import EntityItem, EntityListResponse
from mediatag.api.schemas.responses import problem_responses
from mediatag.config.settings import get_settings
from mediatag.exceptions import NotFoundError
from mediatag.models.enums import MatchMode
from mediatag.services.tagging_service import TaggingService

logger = logging.getLogger(__name__)

router = APIRouter()


def _resolve_tag_ids(service: TaggingService, texts: List[str]) -> List[uuid.UUID]:
    """
    Look up registry ids for tag texts.

    Raises
    ------
    NotFoundError
        For the first text that is not registered, with suggestions as hint.
    """
    tag_ids = []
    for text in texts:
        tag_id = service.lookup_tag(text)
        if tag_id is None:
            suggestions = service.suggest_tags(
                text, limit=get_settings().suggestion_limit
            )
            hint = None
            if suggestions:
                hint = "Did you mean: " + ", ".join(
                    tag.display_form for tag in suggestions
                )
            raise NotFoundError(resource_type="Tag", identifier=text, hint=hint)
        tag_ids.append(tag_id)
    return tag_ids


@router.get(
    "/search",
    response_model=EntityListResponse,
    responses=problem_responses(404, 422, 503),
)
def search_entities(
    tag: List[str] = Query(..., description="Tag text, repeatable"),
    match: MatchMode = Query(
        default=MatchMode.ALL, description="all: every tag, any: at least one"
    ),
    service: TaggingService = Depends(get_tagging_service),
) -> EntityListResponse:
    """
    Find entities by effective tags.

    Results are ordered by entity id, which follows registration order.
    """
    tag_ids = _resolve_tag_ids(service, tag)
    found = service.find(tag_ids, match)
    logger.debug("Search %s %r matched %d entities", match.value, tag, len(found))
    entities = service.get_entities(sorted(found))
    return EntityListResponse(data=[EntityItem.from_entity(e) for e in entities])
