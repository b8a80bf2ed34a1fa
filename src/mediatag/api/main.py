"""FastAPI application for the mediatag API."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from mediatag import __version__
from mediatag.api.exception_handlers import register_exception_handlers
from mediatag.api.routers import entities, health, music, search, tags, tv
from mediatag.config.logging_config import configure_logging
from mediatag.config.settings import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting %s %s", settings.app_name, __version__)
    yield
    logger.info("Shutting down %s", settings.app_name)


app = FastAPI(
    title="Mediatag API",
    description="Hierarchical tagging for television, movie and music libraries",
    version=__version__,
    lifespan=lifespan,
)

register_exception_handlers(app)


def _get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxied requests."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


@app.middleware("http")
async def log_requests(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """
    Middleware to log incoming requests and outgoing responses.

    Logs response status code and timing with a level picked by status:
    - INFO for 2xx/3xx responses
    - WARNING for 4xx responses
    - ERROR for 5xx responses
    """
    start_time = time.perf_counter()
    method = request.method
    path = request.url.path

    logger.info("Request: %s %s from %s", method, path, _get_client_ip(request))

    response = await call_next(request)

    duration = time.perf_counter() - start_time
    status_code = response.status_code

    if status_code >= 500:
        log_level = logging.ERROR
    elif status_code >= 400:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    logger.log(
        log_level,
        "Response: %s %s - %d (%.3fs)",
        method,
        path,
        status_code,
        duration,
    )
    return response


# Mount routers under /api/v1 prefix
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(entities.router, prefix="/api/v1", tags=["entities"])
app.include_router(tags.router, prefix="/api/v1", tags=["tags"])
app.include_router(search.router, prefix="/api/v1", tags=["search"])
app.include_router(tv.router, prefix="/api/v1", tags=["tv"])
app.include_router(music.router, prefix="/api/v1", tags=["music"])
