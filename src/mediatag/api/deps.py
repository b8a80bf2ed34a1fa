"""FastAPI dependencies for API endpoints."""

from mediatag.container import container
from mediatag.services.tagging_service import TaggingService


def get_tagging_service() -> TaggingService:
    """
    Dependency for the shared tagging core.

    Returns
    -------
    TaggingService
        The process-wide service held by the container.
    """
    return container.tagging_service
