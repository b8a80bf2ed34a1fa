"""Music import endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Path, status

from mediatag.api.deps import get_tagging_service
from mediatag.api.schemas.entities import EntityItem, EntityResponse
from mediatag.api.schemas.media import SongImportRequest
from mediatag.api.schemas.responses import problem_responses
from mediatag.services.tagging_service import TaggingService

router = APIRouter(prefix="/music")


@router.post(
    "/albums/{album_id}/songs",
    response_model=EntityResponse,
    status_code=status.HTTP_201_CREATED,
    responses=problem_responses(400, 404, 422, 503),
)
def import_song(
    body: SongImportRequest,
    album_id: uuid.UUID = Path(..., description="Album entity id"),
    service: TaggingService = Depends(get_tagging_service),
) -> EntityResponse:
    """Register a song under an album, titled from its file name."""
    song_id = service.import_song(album_id, body.name, track=body.track)
    return EntityResponse(data=EntityItem.from_entity(service.get_entity(song_id)))
