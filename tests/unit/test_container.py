"""
Unit tests for the mediatag dependency container.
"""

from __future__ import annotations

from mediatag.config.settings import Settings
from mediatag.container import Container, container
from mediatag.models.enums import EntityKind, MediaDomain
from mediatag.services.tagging_service import TaggingService


class TestContainer:
    """Tests for singleton and transient services."""

    def test_singleton_is_cached(self) -> None:
        c = Container()
        assert c.tagging_service is c.tagging_service
        assert isinstance(c.tagging_service, TaggingService)

    def test_factory_is_transient(self) -> None:
        c = Container()
        assert c.create_tagging_service() is not c.create_tagging_service()

    def test_settings_drive_lock_timeout(self) -> None:
        c = Container(settings=Settings(lock_timeout_seconds=0.25))
        assert c.tagging_service._lock._timeout == 0.25

    def test_reset_gives_empty_store(self) -> None:
        service = container.tagging_service
        service.create_entity(MediaDomain.MOVIE, EntityKind.MOVIE)
        container.reset()
        assert container.tagging_service is not service
        assert container.tagging_service.stats().entities == 0
