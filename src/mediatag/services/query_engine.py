"""
Query Engine: find entities by effective tags.

Instead of resolving every entity in the store, each query starts from the
assignment reverse index. An entity can only have a tag effective if it, or
an ancestor, carries an ``include`` row for it, so the candidates are the
subtrees rooted at those entities. Each candidate is then checked with the
resolver's nearest-wins rule, which gives results identical to a full
resolve-and-filter scan.
"""

from __future__ import annotations

import logging
import uuid
from functools import reduce
from typing import FrozenSet, Iterable, Set

from mediatag.exceptions import NotFoundError
from mediatag.models.enums import AssignmentMode
from mediatag.services.assignment_table import AssignmentTable
from mediatag.services.entity_store import EntityStore
from mediatag.services.resolver import Resolver
from mediatag.services.tag_registry import TagRegistry

logger = logging.getLogger(__name__)


class QueryEngine:
    """Read-only queries over effective tag sets."""

    def __init__(
        self,
        entities: EntityStore,
        tags: TagRegistry,
        assignments: AssignmentTable,
        resolver: Resolver,
    ) -> None:
        self._entities = entities
        self._tags = tags
        self._assignments = assignments
        self._resolver = resolver

    def _candidates(self, tag_id: uuid.UUID) -> Set[uuid.UUID]:
        roots = [
            entity_id
            for entity_id in self._assignments.entities_with(tag_id)
            if self._assignments.mode_at(entity_id, tag_id) is AssignmentMode.INCLUDE
        ]
        candidates: Set[uuid.UUID] = set()
        for root_id in roots:
            if root_id in candidates:
                continue
            candidates.update(self._entities.iter_descendants(root_id))
        return candidates

    def find_by_tag(self, tag_id: uuid.UUID) -> FrozenSet[uuid.UUID]:
        """
        Return every entity whose effective tag set contains *tag_id*.

        Raises
        ------
        NotFoundError
            If the tag is not registered.
        """
        if not self._tags.exists(tag_id):
            raise NotFoundError(resource_type="Tag", identifier=tag_id)
        matches = frozenset(
            entity_id
            for entity_id in self._candidates(tag_id)
            if self._resolver.has_tag(entity_id, tag_id)
        )
        logger.debug("find_by_tag: tag=%s matches=%d", tag_id, len(matches))
        return matches

    def find_by_all_tags(self, tag_ids: Iterable[uuid.UUID]) -> FrozenSet[uuid.UUID]:
        """Entities that have every one of *tag_ids* effective."""
        results = [self.find_by_tag(tag_id) for tag_id in set(tag_ids)]
        if not results:
            return frozenset()
        return reduce(frozenset.intersection, results)

    def find_by_any_tags(self, tag_ids: Iterable[uuid.UUID]) -> FrozenSet[uuid.UUID]:
        """Entities that have at least one of *tag_ids* effective."""
        return frozenset().union(*(self.find_by_tag(tag_id) for tag_id in set(tag_ids)))
