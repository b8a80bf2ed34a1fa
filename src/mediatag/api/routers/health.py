"""Health check endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from mediatag import __version__
from mediatag.api.deps import get_tagging_service
from mediatag.api.schemas.responses import ApiResponse, problem_responses
from mediatag.services.tagging_service import TaggingService


class StoreCounts(BaseModel):
    """Row counts of the in-memory store."""

    model_config = ConfigDict(strict=True)

    entities: int
    tags: int
    assignments: int


class HealthStatus(BaseModel):
    """Application health status."""

    status: str  # "healthy"
    version: str
    timestamp: datetime
    store: StoreCounts


class HealthResponse(ApiResponse[HealthStatus]):
    """Response for health check endpoint."""


router = APIRouter()


@router.get(
    "/health", response_model=HealthResponse, responses=problem_responses(503)
)
def health_check(
    service: TaggingService = Depends(get_tagging_service),
) -> HealthResponse:
    """
    Health check endpoint.

    Reports the application version and the current store counts. Taking
    the counts needs the read lock, so a wedged writer surfaces here as 503.
    """
    stats = service.stats()
    return HealthResponse(
        data=HealthStatus(
            status="healthy",
            version=__version__,
            timestamp=datetime.now(timezone.utc),
            store=StoreCounts(
                entities=stats.entities,
                tags=stats.tags,
                assignments=stats.assignments,
            ),
        )
    )
