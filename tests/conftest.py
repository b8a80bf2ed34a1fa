"""
Pytest configuration and fixtures for mediatag tests.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from mediatag.container import container
from mediatag.models.enums import EntityKind, MediaDomain
from mediatag.services.tagging_service import TaggingService


@pytest.fixture()
def service() -> TaggingService:
    """Provide a fresh, empty tagging service."""
    return TaggingService(lock_timeout=1.0)


@pytest.fixture()
def show_tree(service: TaggingService) -> dict[str, object]:
    """
    A show with one season and two episodes.

    Keys: ``show``, ``season``, ``e1``, ``e2``.
    """
    tv = MediaDomain.TELEVISION
    show = service.create_entity(tv, EntityKind.SHOW, title="Lost")
    season = service.create_entity(tv, EntityKind.SEASON, show, number=1)
    e1 = service.create_entity(tv, EntityKind.EPISODE, season, number=1)
    e2 = service.create_entity(tv, EntityKind.EPISODE, season, number=2)
    return {"show": show, "season": season, "e1": e1, "e2": e2}


@pytest.fixture(autouse=True)
def reset_container() -> Iterator[None]:
    """Start every test with an empty shared store."""
    container.reset()
    yield
    container.reset()
