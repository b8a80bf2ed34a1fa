"""
Assignment Table: explicit (entity, tag, mode) rows.

At most one row exists per (entity, tag) pair. Setting a new mode replaces
the previous one; clearing deletes the row, which is distinct from setting
``exclude``. A reverse index (tag -> entities with any row for that tag)
is maintained alongside the forward rows so queries never have to scan
every entity.
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from typing import DefaultDict, Dict, Iterable, Optional, Set, Tuple

from mediatag.exceptions import NotFoundError
from mediatag.models.assignment import Assignment
from mediatag.models.enums import AssignmentMode
from mediatag.services.entity_store import EntityStore
from mediatag.services.tag_registry import TagRegistry

logger = logging.getLogger(__name__)


class AssignmentTable:
    """Explicit tag assignments recorded on entities."""

    def __init__(self, entities: EntityStore, tags: TagRegistry) -> None:
        self._entities = entities
        self._tags = tags
        self._rows: Dict[uuid.UUID, Dict[uuid.UUID, AssignmentMode]] = {}
        self._by_tag: DefaultDict[uuid.UUID, Set[uuid.UUID]] = defaultdict(set)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def set(
        self,
        entity_id: uuid.UUID,
        tag_id: uuid.UUID,
        mode: AssignmentMode,
    ) -> Optional[AssignmentMode]:
        """
        Upsert the (entity, tag) row to *mode*.

        Returns
        -------
        Optional[AssignmentMode]
            The mode that was replaced, or None if the row is new.

        Raises
        ------
        NotFoundError
            If the entity or the tag does not exist.
        """
        if not self._entities.exists(entity_id):
            raise NotFoundError(resource_type="Entity", identifier=entity_id)
        if not self._tags.exists(tag_id):
            raise NotFoundError(resource_type="Tag", identifier=tag_id)
        mode = AssignmentMode(mode)

        row = self._rows.setdefault(entity_id, {})
        previous = row.get(tag_id)
        row[tag_id] = mode
        if previous is None:
            self._by_tag[tag_id].add(entity_id)
            self._count += 1

        logger.debug(
            "Assignment set: entity=%s tag=%s mode=%s (was %s)",
            entity_id,
            tag_id,
            mode.value,
            previous.value if previous else None,
        )
        return previous

    def clear(self, entity_id: uuid.UUID, tag_id: uuid.UUID) -> bool:
        """Delete the (entity, tag) row; returns False when there was none."""
        row = self._rows.get(entity_id)
        if row is None or tag_id not in row:
            return False

        del row[tag_id]
        if not row:
            del self._rows[entity_id]
        self._discard_reverse(tag_id, entity_id)
        self._count -= 1
        logger.debug("Assignment cleared: entity=%s tag=%s", entity_id, tag_id)
        return True

    def explicit_at(
        self, entity_id: uuid.UUID
    ) -> Set[Tuple[uuid.UUID, AssignmentMode]]:
        """Return the (tag, mode) pairs recorded directly on an entity."""
        return set(self._rows.get(entity_id, {}).items())

    def assignments_at(self, entity_id: uuid.UUID) -> list[Assignment]:
        """Return the rows recorded directly on an entity as models."""
        return [
            Assignment(entity_id=entity_id, tag_id=tag_id, mode=mode)
            for tag_id, mode in self._rows.get(entity_id, {}).items()
        ]

    def mode_at(
        self, entity_id: uuid.UUID, tag_id: uuid.UUID
    ) -> Optional[AssignmentMode]:
        """Return the explicit mode for (entity, tag), or None."""
        return self._rows.get(entity_id, {}).get(tag_id)

    def entities_with(self, tag_id: uuid.UUID) -> Set[uuid.UUID]:
        """Return every entity carrying a row (any mode) for *tag_id*."""
        return set(self._by_tag.get(tag_id, ()))

    def purge(self, entity_ids: Iterable[uuid.UUID]) -> int:
        """Drop every row touching any of *entity_ids*; returns rows removed."""
        removed = 0
        for entity_id in entity_ids:
            row = self._rows.pop(entity_id, None)
            if not row:
                continue
            for tag_id in row:
                self._discard_reverse(tag_id, entity_id)
            removed += len(row)
        self._count -= removed
        return removed

    def _discard_reverse(self, tag_id: uuid.UUID, entity_id: uuid.UUID) -> None:
        holders = self._by_tag.get(tag_id)
        if holders is None:
            return
        holders.discard(entity_id)
        if not holders:
            del self._by_tag[tag_id]
