"""Schemas for TV filename capture and media import endpoints."""

from __future__ import annotations

import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from mediatag.api.schemas.responses import ApiResponse


class CaptureItem(BaseModel):
    """Season/episode numbers captured from a file name."""

    model_config = ConfigDict(strict=True)

    file_path: str
    filename: str
    ext: Optional[str] = None
    season: int
    episode: int


class CaptureResponse(ApiResponse[CaptureItem]):
    """Response for a single capture."""


class CaptureListResponse(ApiResponse[List[CaptureItem]]):
    """Response for a season of captures."""


class Episodes(BaseModel):
    """A list of episode file names."""

    names: List[str] = Field(..., min_length=1, description="Episode file names")


class ImportedEpisodeItem(BaseModel):
    """An episode entity created from a file name."""

    entity_id: uuid.UUID
    season_id: uuid.UUID
    capture: CaptureItem


class EpisodeImportItem(BaseModel):
    """Summary of an episode import."""

    show_id: uuid.UUID
    created_seasons: List[uuid.UUID]
    episodes: List[ImportedEpisodeItem]


class EpisodeImportResponse(ApiResponse[EpisodeImportItem]):
    """Response for an episode import."""


class SongImportRequest(BaseModel):
    """Request body for importing a song under an album."""

    name: str = Field(..., min_length=1, max_length=500, description="Song file name")
    track: Optional[int] = Field(default=None, ge=0, description="Track number")
