"""
Tagging service: the single entry point into the tagging core.

Owns one entity store, tag registry, assignment table, resolver and query
engine, and serializes access to them with a readers-writer lock. Adapters
(HTTP, CLI) call only this class. Mutations hold the lock exclusively;
reads share it and therefore never observe a half-finished cascade.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from mediatag.exceptions import InvalidHierarchyError, NotFoundError
from mediatag.models.assignment import Assignment
from mediatag.models.entity import Entity
from mediatag.models.enums import AssignmentMode, EntityKind, MatchMode, MediaDomain
from mediatag.models.tag import Tag
from mediatag.services.assignment_table import AssignmentTable
from mediatag.services.entity_store import EntityStore
from mediatag.services.filename_capture import Capture, capture_many, format_name, split_filename
from mediatag.services.locking import ReadWriteLock
from mediatag.services.query_engine import QueryEngine
from mediatag.services.resolver import Resolver
from mediatag.services.tag_registry import TagRegistry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class RemovalResult:
    """Result of a cascading entity removal."""

    entity_id: uuid.UUID
    removed_ids: List[uuid.UUID]
    assignments_removed: int


@dataclass
class ImportedEpisode:
    """One episode registered from a file name."""

    capture: Capture
    entity_id: uuid.UUID


@dataclass
class EpisodeImportResult:
    """Result of importing a batch of episode files under a show."""

    show_id: uuid.UUID
    season_ids: Dict[int, uuid.UUID] = field(default_factory=dict)
    created_seasons: List[uuid.UUID] = field(default_factory=list)
    episodes: List[ImportedEpisode] = field(default_factory=list)


@dataclass
class StoreStats:
    """Row counts for health reporting."""

    entities: int
    tags: int
    assignments: int


class TaggingService:
    """
    Hierarchical tag resolution and storage engine.

    Examples
    --------
    >>> svc = TaggingService()
    >>> show = svc.create_entity(MediaDomain.TELEVISION, EntityKind.SHOW)
    >>> season = svc.create_entity(MediaDomain.TELEVISION, EntityKind.SEASON, show)
    >>> drama = svc.tag_entity(show, "Drama", AssignmentMode.INCLUDE)
    >>> svc.effective_tags(season) == {drama}
    True
    """

    def __init__(self, lock_timeout: float = 5.0) -> None:
        self._entities = EntityStore()
        self._tags = TagRegistry()
        self._assignments = AssignmentTable(self._entities, self._tags)
        self._resolver = Resolver(self._entities, self._assignments)
        self._queries = QueryEngine(
            self._entities, self._tags, self._assignments, self._resolver
        )
        self._lock = ReadWriteLock(timeout=lock_timeout)

    # -------------------------------------------------------------------
    # Entity lifecycle
    # -------------------------------------------------------------------

    def create_entity(
        self,
        domain: MediaDomain,
        kind: EntityKind,
        parent_id: Optional[uuid.UUID] = None,
        *,
        title: Optional[str] = None,
        number: Optional[int] = None,
    ) -> uuid.UUID:
        """Register a new entity; see ``EntityStore.create``."""
        with self._lock.write():
            entity_id = self._entities.create(
                domain, kind, parent_id, title=title, number=number
            )
        logger.info(
            "Entity registered: id=%s kind=%s parent=%s",
            entity_id,
            EntityKind(kind).value,
            parent_id,
        )
        return entity_id

    def get_entity(self, entity_id: uuid.UUID) -> Entity:
        """Return an entity snapshot."""
        with self._lock.read():
            return self._entities.get(entity_id)

    def children(self, entity_id: uuid.UUID) -> List[uuid.UUID]:
        """Return child ids in insertion order."""
        with self._lock.read():
            return self._entities.children(entity_id)

    def path_to_root(self, entity_id: uuid.UUID) -> List[uuid.UUID]:
        """Return the ancestry of an entity, root first."""
        with self._lock.read():
            return self._entities.path_to_root(entity_id)

    def remove_entity(self, entity_id: uuid.UUID) -> RemovalResult:
        """
        Remove an entity, its descendants, and every assignment touching them.

        All-or-nothing: the subtree is collected before anything changes.

        Raises
        ------
        NotFoundError
            If the entity does not exist.
        """
        with self._lock.write():
            removed_ids = self._entities.remove(entity_id)
            assignments_removed = self._assignments.purge(removed_ids)
        logger.info(
            "Entity removed: id=%s entities=%d assignments=%d",
            entity_id,
            len(removed_ids),
            assignments_removed,
        )
        return RemovalResult(
            entity_id=entity_id,
            removed_ids=removed_ids,
            assignments_removed=assignments_removed,
        )

    # -------------------------------------------------------------------
    # Tag lifecycle
    # -------------------------------------------------------------------

    def intern_tag(self, text: str) -> uuid.UUID:
        """Return the id for tag text, registering it if unseen."""
        with self._lock.write():
            return self._tags.intern(text)

    def lookup_tag(self, text: str) -> Optional[uuid.UUID]:
        """Return the id for tag text without registering it."""
        with self._lock.read():
            return self._tags.lookup(text)

    def get_tag(self, tag_id: uuid.UUID) -> Tag:
        """Return a registered tag."""
        with self._lock.read():
            return self._tags.get(tag_id)

    def display_name(self, tag_id: uuid.UUID) -> str:
        """Return a tag's display text."""
        with self._lock.read():
            return self._tags.display_name(tag_id)

    def list_tags(self) -> List[Tag]:
        """Return all tags ordered by normalized form."""
        with self._lock.read():
            return self._tags.all()

    def suggest_tags(self, text: str, limit: int = 5) -> List[Tag]:
        """Return registered tags close to *text*."""
        with self._lock.read():
            return self._tags.suggest(text, limit=limit)

    # -------------------------------------------------------------------
    # Assignments
    # -------------------------------------------------------------------

    def set_assignment(
        self, entity_id: uuid.UUID, tag_id: uuid.UUID, mode: AssignmentMode
    ) -> None:
        """Upsert the (entity, tag) assignment."""
        with self._lock.write():
            self._assignments.set(entity_id, tag_id, mode)

    def clear_assignment(self, entity_id: uuid.UUID, tag_id: uuid.UUID) -> bool:
        """Delete the (entity, tag) assignment; no-op if absent."""
        with self._lock.write():
            return self._assignments.clear(entity_id, tag_id)

    def tag_entity(
        self, entity_id: uuid.UUID, text: str, mode: AssignmentMode
    ) -> uuid.UUID:
        """
        Intern *text* and assign it to an entity in one step.

        The entity is checked before the tag is interned so a failed call
        does not leave a new tag behind.
        """
        with self._lock.write():
            if not self._entities.exists(entity_id):
                raise NotFoundError(resource_type="Entity", identifier=entity_id)
            tag_id = self._tags.intern(text)
            self._assignments.set(entity_id, tag_id, mode)
        logger.info(
            "Entity tagged: entity=%s tag=%r mode=%s",
            entity_id,
            text,
            AssignmentMode(mode).value,
        )
        return tag_id

    def untag_entity(self, entity_id: uuid.UUID, text: str) -> bool:
        """Clear the assignment for tag *text*; unknown tags are a no-op."""
        with self._lock.write():
            if not self._entities.exists(entity_id):
                raise NotFoundError(resource_type="Entity", identifier=entity_id)
            tag_id = self._tags.lookup(text)
            if tag_id is None:
                return False
            return self._assignments.clear(entity_id, tag_id)

    def explicit_at(
        self, entity_id: uuid.UUID
    ) -> Set[Tuple[uuid.UUID, AssignmentMode]]:
        """Return the (tag, mode) pairs recorded directly on an entity."""
        with self._lock.read():
            if not self._entities.exists(entity_id):
                raise NotFoundError(resource_type="Entity", identifier=entity_id)
            return self._assignments.explicit_at(entity_id)

    def assignments_at(self, entity_id: uuid.UUID) -> List[Assignment]:
        """Return the assignments recorded directly on an entity."""
        with self._lock.read():
            if not self._entities.exists(entity_id):
                raise NotFoundError(resource_type="Entity", identifier=entity_id)
            return self._assignments.assignments_at(entity_id)

    # -------------------------------------------------------------------
    # Resolution and queries
    # -------------------------------------------------------------------

    def effective_tags(self, entity_id: uuid.UUID) -> FrozenSet[uuid.UUID]:
        """Return the effective tag set of an entity."""
        with self._lock.read():
            return self._resolver.effective_tags(entity_id)

    def explain_tags(self, entity_id: uuid.UUID) -> Dict[uuid.UUID, uuid.UUID]:
        """Map each effective tag to the entity whose include decided it."""
        with self._lock.read():
            return self._resolver.explain(entity_id)

    def find_by_tag(self, tag_id: uuid.UUID) -> FrozenSet[uuid.UUID]:
        """Entities with *tag_id* effective."""
        with self._lock.read():
            return self._queries.find_by_tag(tag_id)

    def find_by_all_tags(self, tag_ids: Iterable[uuid.UUID]) -> FrozenSet[uuid.UUID]:
        """Entities with every tag effective."""
        with self._lock.read():
            return self._queries.find_by_all_tags(tag_ids)

    def find_by_any_tags(self, tag_ids: Iterable[uuid.UUID]) -> FrozenSet[uuid.UUID]:
        """Entities with at least one tag effective."""
        with self._lock.read():
            return self._queries.find_by_any_tags(tag_ids)

    def find(
        self, tag_ids: Iterable[uuid.UUID], match: MatchMode = MatchMode.ALL
    ) -> FrozenSet[uuid.UUID]:
        """Dispatch to the all/any query by *match*."""
        if MatchMode(match) is MatchMode.ANY:
            return self.find_by_any_tags(tag_ids)
        return self.find_by_all_tags(tag_ids)

    def get_entities(self, entity_ids: Iterable[uuid.UUID]) -> List[Entity]:
        """Snapshots for *entity_ids*, skipping ids removed in the meantime."""
        with self._lock.read():
            return [
                self._entities.get(entity_id)
                for entity_id in entity_ids
                if self._entities.exists(entity_id)
            ]

    def stats(self) -> StoreStats:
        """Return current row counts."""
        with self._lock.read():
            return StoreStats(
                entities=len(self._entities),
                tags=len(self._tags),
                assignments=len(self._assignments),
            )

    # -------------------------------------------------------------------
    # File imports
    # -------------------------------------------------------------------

    def import_episodes(
        self,
        show_id: uuid.UUID,
        file_names: Iterable[str],
        *,
        season: Optional[int] = None,
    ) -> EpisodeImportResult:
        """
        Register episodes under a show from their file names.

        Every name is captured before anything is created; one unparseable
        name aborts the whole batch. Seasons are matched by number and
        created when missing.

        Raises
        ------
        CaptureError
            If a file name yields no season or episode number.
        InvalidHierarchyError
            If *show_id* is not a show.
        NotFoundError
            If *show_id* does not exist.
        """
        captures = capture_many(file_names, season=season)
        result = EpisodeImportResult(show_id=show_id)

        with self._lock.write():
            if self._entities.kind_of(show_id) is not EntityKind.SHOW:
                raise InvalidHierarchyError(
                    f"Episodes can only be imported under a show, not "
                    f"'{self._entities.kind_of(show_id).value}'",
                    kind=EntityKind.EPISODE.value,
                    parent_kind=self._entities.kind_of(show_id).value,
                )
            for capture in captures:
                season_id = result.season_ids.get(capture.season)
                if season_id is None:
                    season_id = self._entities.find_child(
                        show_id, EntityKind.SEASON, capture.season
                    )
                if season_id is None:
                    season_id = self._entities.create(
                        MediaDomain.TELEVISION,
                        EntityKind.SEASON,
                        show_id,
                        title=f"Season {capture.season}",
                        number=capture.season,
                    )
                    result.created_seasons.append(season_id)
                result.season_ids[capture.season] = season_id

                episode_id = self._entities.create(
                    MediaDomain.TELEVISION,
                    EntityKind.EPISODE,
                    season_id,
                    title=capture.title,
                    number=capture.episode,
                )
                result.episodes.append(
                    ImportedEpisode(capture=capture, entity_id=episode_id)
                )

        logger.info(
            "Imported %d episodes under show %s (%d new seasons)",
            len(result.episodes),
            show_id,
            len(result.created_seasons),
        )
        return result

    def import_song(
        self,
        album_id: uuid.UUID,
        file_name: str,
        *,
        track: Optional[int] = None,
    ) -> uuid.UUID:
        """Register a song under an album, titled from its file name."""
        stem, _ = split_filename(file_name)
        title = format_name(stem) or file_name
        with self._lock.write():
            song_id = self._entities.create(
                MediaDomain.MUSIC,
                EntityKind.SONG,
                album_id,
                title=title,
                number=track,
            )
        logger.info("Imported song %r under album %s", title, album_id)
        return song_id
