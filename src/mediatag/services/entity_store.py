"""
Entity Store for the media containment forest.

Holds every registered media entity and the containment edges between them
(show -> season -> episode, album -> song; movies stand alone). Children are
owned through the parent's ordered child list; the child only keeps a
non-owning ``parent_id`` back-reference used for path traversal. The store has
no tagging logic and no locking of its own: it is owned by
``TaggingService``, which serializes access.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional

from mediatag.exceptions import (
    CycleRejectedError,
    InvalidHierarchyError,
    NotFoundError,
)
from mediatag.models.entity import KIND_DOMAINS, PARENT_KINDS, ROOT_KINDS, Entity
from mediatag.models.enums import EntityKind, MediaDomain
from mediatag.utils.ids import new_id

logger = logging.getLogger(__name__)


@dataclass
class _EntityRecord:
    """Mutable in-store representation of an entity."""

    id: uuid.UUID
    domain: MediaDomain
    kind: EntityKind
    parent_id: Optional[uuid.UUID]
    title: Optional[str]
    number: Optional[int]
    created_at: datetime
    children: List[uuid.UUID] = field(default_factory=list)

    def snapshot(self) -> Entity:
        return Entity(
            id=self.id,
            domain=self.domain,
            kind=self.kind,
            parent_id=self.parent_id,
            children=tuple(self.children),
            title=self.title,
            number=self.number,
            created_at=self.created_at,
        )


class EntityStore:
    """
    Canonical set of media entities and their containment edges.

    Examples
    --------
    >>> store = EntityStore()
    >>> show = store.create(MediaDomain.TELEVISION, EntityKind.SHOW, title="Lost")
    >>> season = store.create(MediaDomain.TELEVISION, EntityKind.SEASON, show, number=1)
    >>> store.path_to_root(season) == [show, season]
    True
    """

    def __init__(self) -> None:
        self._records: Dict[uuid.UUID, _EntityRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._records

    def exists(self, entity_id: uuid.UUID) -> bool:
        """Check whether an entity is registered."""
        return entity_id in self._records

    def all_ids(self) -> List[uuid.UUID]:
        """Return every registered entity id in registration order."""
        return list(self._records)

    def _record(self, entity_id: uuid.UUID) -> _EntityRecord:
        record = self._records.get(entity_id)
        if record is None:
            raise NotFoundError(resource_type="Entity", identifier=entity_id)
        return record

    def _validate_placement(
        self,
        domain: MediaDomain,
        kind: EntityKind,
        parent_id: Optional[uuid.UUID],
    ) -> Optional[_EntityRecord]:
        """
        Check the containment rules for a new entity.

        Returns
        -------
        Optional[_EntityRecord]
            The parent record, or None for root kinds.

        Raises
        ------
        InvalidHierarchyError
            If any containment rule is violated.
        """
        expected_domain = KIND_DOMAINS[kind]
        if domain != expected_domain:
            raise InvalidHierarchyError(
                f"Kind '{kind.value}' belongs to domain '{expected_domain.value}', "
                f"not '{domain.value}'",
                kind=kind.value,
            )

        if kind in ROOT_KINDS:
            if parent_id is not None:
                raise InvalidHierarchyError(
                    f"Kind '{kind.value}' cannot have a parent", kind=kind.value
                )
            return None

        required_parent_kind = PARENT_KINDS[kind]
        if parent_id is None:
            raise InvalidHierarchyError(
                f"Kind '{kind.value}' requires a '{required_parent_kind.value}' parent",
                kind=kind.value,
            )

        parent = self._records.get(parent_id)
        if parent is None:
            raise InvalidHierarchyError(
                f"Parent entity '{parent_id}' does not exist", kind=kind.value
            )
        if parent.kind != required_parent_kind:
            raise InvalidHierarchyError(
                f"Kind '{kind.value}' cannot be placed under '{parent.kind.value}' "
                f"(expected '{required_parent_kind.value}')",
                kind=kind.value,
                parent_kind=parent.kind.value,
            )
        return parent

    def create(
        self,
        domain: MediaDomain,
        kind: EntityKind,
        parent_id: Optional[uuid.UUID] = None,
        *,
        title: Optional[str] = None,
        number: Optional[int] = None,
    ) -> uuid.UUID:
        """
        Register a new entity, appending it to its parent's child list.

        Parameters
        ----------
        domain : MediaDomain
            Media domain; must match the kind.
        kind : EntityKind
            Entity kind.
        parent_id : Optional[uuid.UUID]
            Containing entity; required for season, episode, and song.
        title : Optional[str]
            Display title.
        number : Optional[int]
            Season, episode, or track number.

        Returns
        -------
        uuid.UUID
            The new entity id.

        Raises
        ------
        InvalidHierarchyError
            If the parent is missing, absent from the store, of the wrong
            kind, or the domain does not match the kind.
        """
        domain = MediaDomain(domain)
        kind = EntityKind(kind)
        parent = self._validate_placement(domain, kind, parent_id)

        entity_id = new_id()
        self._records[entity_id] = _EntityRecord(
            id=entity_id,
            domain=domain,
            kind=kind,
            parent_id=parent_id,
            title=title,
            number=number,
            created_at=datetime.now(timezone.utc),
        )
        if parent is not None:
            parent.children.append(entity_id)

        logger.debug(
            "Entity created: id=%s kind=%s parent=%s", entity_id, kind.value, parent_id
        )
        return entity_id

    def get(self, entity_id: uuid.UUID) -> Entity:
        """Return an immutable snapshot of an entity."""
        return self._record(entity_id).snapshot()

    def kind_of(self, entity_id: uuid.UUID) -> EntityKind:
        """Return the kind of an entity."""
        return self._record(entity_id).kind

    def children(self, entity_id: uuid.UUID) -> List[uuid.UUID]:
        """Return child ids in insertion order (empty for leaf kinds)."""
        return list(self._record(entity_id).children)

    def parent_of(self, entity_id: uuid.UUID) -> Optional[uuid.UUID]:
        """Return the parent id of an entity, or None for roots."""
        return self._record(entity_id).parent_id

    def path_to_root(self, entity_id: uuid.UUID) -> List[uuid.UUID]:
        """
        Return the ancestry of an entity, root first and the entity last.

        Raises
        ------
        NotFoundError
            If the entity does not exist.
        CycleRejectedError
            If the parent chain revisits a node.
        """
        path: List[uuid.UUID] = []
        seen: set[uuid.UUID] = set()
        current: Optional[uuid.UUID] = self._record(entity_id).id

        while current is not None:
            if current in seen:
                raise CycleRejectedError(entity_id)
            seen.add(current)
            path.append(current)
            current = self._record(current).parent_id

        path.reverse()
        return path

    def iter_descendants(self, entity_id: uuid.UUID) -> Iterator[uuid.UUID]:
        """Yield ``entity_id`` and every descendant, depth-first pre-order."""
        stack = [self._record(entity_id).id]
        seen: set[uuid.UUID] = set()
        while stack:
            current = stack.pop()
            if current in seen:
                raise CycleRejectedError(current)
            seen.add(current)
            yield current
            stack.extend(reversed(self._records[current].children))

    def descendants(self, entity_id: uuid.UUID) -> List[uuid.UUID]:
        """Return ``entity_id`` and every descendant, depth-first pre-order."""
        return list(self.iter_descendants(entity_id))

    def find_child(
        self,
        parent_id: uuid.UUID,
        kind: EntityKind,
        number: int,
    ) -> Optional[uuid.UUID]:
        """Return the first child of ``kind`` carrying ``number``, if any."""
        for child_id in self._record(parent_id).children:
            child = self._records[child_id]
            if child.kind == kind and child.number == number:
                return child_id
        return None

    def remove(self, entity_id: uuid.UUID) -> List[uuid.UUID]:
        """
        Remove an entity and all of its descendants.

        The full subtree is collected before anything is deleted, so a
        failure (missing id, corrupt structure) leaves the store unchanged.

        Returns
        -------
        List[uuid.UUID]
            Removed ids, depth-first pre-order starting with ``entity_id``.
        """
        removed = self.descendants(entity_id)
        parent_id = self._records[entity_id].parent_id

        if parent_id is not None:
            self._records[parent_id].children.remove(entity_id)
        for removed_id in removed:
            del self._records[removed_id]

        logger.debug("Entity removed: id=%s cascade=%d", entity_id, len(removed))
        return removed
