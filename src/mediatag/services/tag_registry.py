"""
Tag Registry: the process-wide canonical set of tag names.

Tags are deduplicated by normalized form (see ``TagNormalizer``) and keep
the display form they were first seen with. Tags are created implicitly on
first use and never deleted.
"""

from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional

from mediatag.exceptions import InvalidTagError, NotFoundError
from mediatag.models.tag import Tag
from mediatag.services.tag_normalization import TagNormalizer, clean_display_text
from mediatag.utils.fuzzy import closest_matches
from mediatag.utils.ids import new_id

logger = logging.getLogger(__name__)


class TagRegistry:
    """Canonical tag names keyed by normalized text."""

    def __init__(self, normalizer: Optional[TagNormalizer] = None) -> None:
        self._normalizer = normalizer or TagNormalizer()
        self._tags: Dict[uuid.UUID, Tag] = {}
        self._by_normalized: Dict[str, uuid.UUID] = {}

    def __len__(self) -> int:
        return len(self._tags)

    def _normalize_or_raise(self, text: str) -> str:
        normalized = self._normalizer.normalize(text)
        if normalized is None:
            raise InvalidTagError(text, "Tag text must not be empty or whitespace")
        return normalized

    def intern(self, text: str) -> uuid.UUID:
        """
        Return the id for *text*, registering a new tag if unseen.

        Parameters
        ----------
        text : str
            Raw tag text; surrounding whitespace and case are ignored.

        Returns
        -------
        uuid.UUID
            The id of the existing or newly created tag.

        Raises
        ------
        InvalidTagError
            If *text* is empty or whitespace only.
        """
        normalized = self._normalize_or_raise(text)
        existing = self._by_normalized.get(normalized)
        if existing is not None:
            return existing

        tag = Tag(
            id=new_id(),
            normalized_form=normalized,
            display_form=clean_display_text(text),
        )
        self._tags[tag.id] = tag
        self._by_normalized[normalized] = tag.id
        logger.info("Tag registered: %r (id=%s)", tag.display_form, tag.id)
        return tag.id

    def lookup(self, text: str) -> Optional[uuid.UUID]:
        """Return the id for *text* without registering it (None if unseen)."""
        normalized = self._normalizer.normalize(text)
        if normalized is None:
            return None
        return self._by_normalized.get(normalized)

    def exists(self, tag_id: uuid.UUID) -> bool:
        """Check whether a tag id is registered."""
        return tag_id in self._tags

    def get(self, tag_id: uuid.UUID) -> Tag:
        """Return the tag for *tag_id*."""
        tag = self._tags.get(tag_id)
        if tag is None:
            raise NotFoundError(resource_type="Tag", identifier=tag_id)
        return tag

    def display_name(self, tag_id: uuid.UUID) -> str:
        """Return the first-seen display text of a tag."""
        return self.get(tag_id).display_form

    def all(self) -> List[Tag]:
        """Return every tag ordered by normalized form."""
        return sorted(self._tags.values(), key=lambda tag: tag.normalized_form)

    def suggest(self, text: str, limit: int = 5) -> List[Tag]:
        """
        Suggest registered tags close to *text* for "did you mean" hints.

        Returns an empty list for text that normalizes to nothing.
        """
        normalized = self._normalizer.normalize(text)
        if normalized is None:
            return []
        names = closest_matches(normalized, self._by_normalized, limit=limit)
        return [self._tags[self._by_normalized[name]] for name in names]
