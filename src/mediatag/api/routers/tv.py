"""TV filename capture and episode import endpoints."""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from mediatag.api.deps import get_tagging_service
from mediatag.api.schemas.media import (
    CaptureItem,
    CaptureListResponse,
    CaptureResponse,
    EpisodeImportItem,
    EpisodeImportResponse,
    Episodes,
    ImportedEpisodeItem,
)
from mediatag.api.schemas.responses import problem_responses
from mediatag.services.filename_capture import Capture, capture_many
from mediatag.services.tagging_service import TaggingService

router = APIRouter(prefix="/tv")


def _capture_item(capture: Capture) -> CaptureItem:
    return CaptureItem(
        file_path=capture.file_path,
        filename=capture.filename,
        ext=capture.ext,
        season=capture.season,
        episode=capture.episode,
    )


@router.post(
    "/episode",
    response_model=CaptureResponse,
    responses=problem_responses(400, 422),
)
def capture_episode(
    name: str = Query(..., min_length=1, description="Episode file name"),
    episode: Optional[int] = Query(
        default=None, ge=0, description="Episode number, skips parsing"
    ),
    season: Optional[int] = Query(
        default=None, ge=0, description="Season number, skips parsing"
    ),
) -> CaptureResponse:
    """Capture season and episode numbers from one file name."""
    capture = Capture.from_file(name, season=season, episode=episode)
    return CaptureResponse(data=_capture_item(capture))


@router.post(
    "/season",
    response_model=CaptureListResponse,
    responses=problem_responses(400, 422),
)
def capture_season(
    body: Episodes,
    number: Optional[int] = Query(
        default=None, ge=0, description="Season number for every file"
    ),
) -> CaptureListResponse:
    """Capture a season's worth of file names; any failure rejects the batch."""
    captures = capture_many(body.names, season=number)
    return CaptureListResponse(data=[_capture_item(c) for c in captures])


@router.post(
    "/shows/{show_id}/episodes",
    response_model=EpisodeImportResponse,
    status_code=status.HTTP_201_CREATED,
    responses=problem_responses(400, 404, 422, 503),
)
def import_episodes(
    body: Episodes,
    show_id: uuid.UUID = Path(..., description="Show entity id"),
    season: Optional[int] = Query(
        default=None, ge=0, description="Season number for every file"
    ),
    service: TaggingService = Depends(get_tagging_service),
) -> EpisodeImportResponse:
    """
    Register episodes under a show from their file names.

    Seasons are matched by number and created when missing.
    """
    result = service.import_episodes(show_id, body.names, season=season)
    return EpisodeImportResponse(
        data=EpisodeImportItem(
            show_id=result.show_id,
            created_seasons=result.created_seasons,
            episodes=[
                ImportedEpisodeItem(
                    entity_id=imported.entity_id,
                    season_id=result.season_ids[imported.capture.season],
                    capture=_capture_item(imported.capture),
                )
                for imported in result.episodes
            ],
        )
    )
