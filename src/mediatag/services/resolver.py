"""
Resolver for effective tag sets.

A tag is effective on an entity when the nearest explicit assignment for
that tag on the path from the entity up to its root ancestor has mode
``include``. The entity's own assignment wins over its parent's, the
parent's over the grandparent's, and so on. A tag with no assignment on the
path is not effective.

Resolution is a single pass over the path (at most three levels deep:
show/season/episode or album/song) with one mapping lookup per level.
"""

from __future__ import annotations

import uuid
from typing import Dict, FrozenSet, Optional

from mediatag.models.enums import AssignmentMode
from mediatag.services.assignment_table import AssignmentTable
from mediatag.services.entity_store import EntityStore


class Resolver:
    """Computes effective tags by nearest-wins over the ancestry path."""

    def __init__(self, entities: EntityStore, assignments: AssignmentTable) -> None:
        self._entities = entities
        self._assignments = assignments

    def _nearest(
        self, entity_id: uuid.UUID
    ) -> Dict[uuid.UUID, tuple[AssignmentMode, uuid.UUID]]:
        """Map each tag on the path to (nearest mode, entity that set it)."""
        decided: Dict[uuid.UUID, tuple[AssignmentMode, uuid.UUID]] = {}
        for level_id in reversed(self._entities.path_to_root(entity_id)):
            for tag_id, mode in self._assignments.explicit_at(level_id):
                if tag_id not in decided:
                    decided[tag_id] = (mode, level_id)
        return decided

    def effective_tags(self, entity_id: uuid.UUID) -> FrozenSet[uuid.UUID]:
        """
        Return the effective tag set of an entity.

        Raises
        ------
        NotFoundError
            If the entity does not exist.
        """
        return frozenset(
            tag_id
            for tag_id, (mode, _) in self._nearest(entity_id).items()
            if mode is AssignmentMode.INCLUDE
        )

    def explain(self, entity_id: uuid.UUID) -> Dict[uuid.UUID, uuid.UUID]:
        """Map each effective tag to the entity whose include decided it."""
        return {
            tag_id: source_id
            for tag_id, (mode, source_id) in self._nearest(entity_id).items()
            if mode is AssignmentMode.INCLUDE
        }

    def effective_mode(
        self, entity_id: uuid.UUID, tag_id: uuid.UUID
    ) -> Optional[AssignmentMode]:
        """Return the nearest mode for one tag, or None if nothing is assigned."""
        for level_id in reversed(self._entities.path_to_root(entity_id)):
            mode = self._assignments.mode_at(level_id, tag_id)
            if mode is not None:
                return mode
        return None

    def has_tag(self, entity_id: uuid.UUID, tag_id: uuid.UUID) -> bool:
        """Whether *tag_id* is effective on *entity_id*."""
        return self.effective_mode(entity_id, tag_id) is AssignmentMode.INCLUDE
