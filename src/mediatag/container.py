"""
Dependency container for mediatag.

Holds the process-wide ``TaggingService`` that the HTTP adapter shares
between requests. The service is created lazily on first access with the
lock timeout from settings; tests call ``reset()`` to start from an empty
store.

Usage
-----
    >>> from mediatag.container import container
    >>> service = container.tagging_service
    >>> service is container.tagging_service
    True
"""

from __future__ import annotations

from functools import cached_property
from typing import Optional

from mediatag.config.settings import Settings, get_settings
from mediatag.services.tagging_service import TaggingService


class Container:
    """
    Dependency container for mediatag.

    Singletons are cached via ``@cached_property`` and cleared by
    ``reset()``.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> Settings:
        """Settings used to build services (loaded on first use)."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def create_tagging_service(self) -> TaggingService:
        """
        Create a new, empty TaggingService (transient).

        Returns
        -------
        TaggingService
            A service with its own independent store.
        """
        return TaggingService(lock_timeout=self.settings.lock_timeout_seconds)

    @cached_property
    def tagging_service(self) -> TaggingService:
        """
        Get the singleton TaggingService instance.

        Returns
        -------
        TaggingService
            The shared service, created on first access.
        """
        return self.create_tagging_service()

    def reset(self) -> None:
        """
        Clear cached singletons so the next access starts a fresh store.

        Examples
        --------
        >>> container.reset()
        """
        self.__dict__.pop("tagging_service", None)


# Global container instance
container = Container()
