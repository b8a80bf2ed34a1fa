"""Fixtures for API tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from httpx import ASGITransport, AsyncClient

from mediatag.api.deps import get_tagging_service
from mediatag.api.main import app
from mediatag.services.tagging_service import TaggingService


@pytest.fixture()
def api_service(service: TaggingService) -> Iterator[TaggingService]:
    """Route every request to the test's own service."""
    app.dependency_overrides[get_tagging_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture()
def client(api_service: TaggingService) -> AsyncClient:
    """Async HTTP client bound to the app."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
