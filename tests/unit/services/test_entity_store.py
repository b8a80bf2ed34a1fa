"""
Tests for the entity store.

Covers creation rules for every kind, child ordering, path traversal,
descendant collection and cascading removal.
"""

from __future__ import annotations

import uuid

import pytest

from mediatag.exceptions import CycleRejectedError, InvalidHierarchyError, NotFoundError
from mediatag.models.enums import EntityKind, MediaDomain
from mediatag.services.entity_store import EntityStore

TV = MediaDomain.TELEVISION


@pytest.fixture()
def store() -> EntityStore:
    """Provide an empty entity store."""
    return EntityStore()


class TestCreate:
    """Tests for ``EntityStore.create``."""

    def test_root_kinds_need_no_parent(self, store: EntityStore) -> None:
        """Shows, movies and albums are created without a parent."""
        show = store.create(TV, EntityKind.SHOW)
        movie = store.create(MediaDomain.MOVIE, EntityKind.MOVIE)
        album = store.create(MediaDomain.MUSIC, EntityKind.ALBUM)
        assert store.path_to_root(show) == [show]
        assert store.path_to_root(movie) == [movie]
        assert store.path_to_root(album) == [album]
        assert len(store) == 3

    def test_ids_are_unique(self, store: EntityStore) -> None:
        """Every created entity gets a fresh id."""
        ids = {store.create(TV, EntityKind.SHOW) for _ in range(50)}
        assert len(ids) == 50

    def test_child_is_appended_to_parent(self, store: EntityStore) -> None:
        """A season lands at the end of its show's child list."""
        show = store.create(TV, EntityKind.SHOW)
        s1 = store.create(TV, EntityKind.SEASON, show, number=1)
        s2 = store.create(TV, EntityKind.SEASON, show, number=2)
        assert store.children(show) == [s1, s2]
        assert store.parent_of(s2) == show

    def test_snapshot_carries_fields(self, store: EntityStore) -> None:
        """``get`` returns title, number and children."""
        album = store.create(MediaDomain.MUSIC, EntityKind.ALBUM, title="Kind of Blue")
        song = store.create(MediaDomain.MUSIC, EntityKind.SONG, album, number=1)
        entity = store.get(album)
        assert entity.title == "Kind of Blue"
        assert entity.children == (song,)
        assert entity.is_root
        assert not store.get(song).is_root

    def test_season_without_parent_rejected(self, store: EntityStore) -> None:
        """A season requires a show parent."""
        with pytest.raises(InvalidHierarchyError, match="requires a 'show' parent"):
            store.create(TV, EntityKind.SEASON)
        assert len(store) == 0

    def test_episode_under_show_rejected(self, store: EntityStore) -> None:
        """An episode must sit under a season, not a show."""
        show = store.create(TV, EntityKind.SHOW)
        with pytest.raises(InvalidHierarchyError) as exc_info:
            store.create(TV, EntityKind.EPISODE, show)
        assert exc_info.value.kind == "episode"
        assert exc_info.value.parent_kind == "show"
        assert store.children(show) == []

    def test_song_under_season_rejected(self, store: EntityStore) -> None:
        """A song cannot be placed under a season."""
        show = store.create(TV, EntityKind.SHOW)
        season = store.create(TV, EntityKind.SEASON, show)
        with pytest.raises(InvalidHierarchyError):
            store.create(MediaDomain.MUSIC, EntityKind.SONG, season)

    def test_root_with_parent_rejected(self, store: EntityStore) -> None:
        """A movie cannot have a parent."""
        show = store.create(TV, EntityKind.SHOW)
        with pytest.raises(InvalidHierarchyError, match="cannot have a parent"):
            store.create(MediaDomain.MOVIE, EntityKind.MOVIE, show)

    def test_domain_mismatch_rejected(self, store: EntityStore) -> None:
        """The domain must be the one the kind belongs to."""
        with pytest.raises(InvalidHierarchyError, match="belongs to domain"):
            store.create(MediaDomain.MUSIC, EntityKind.SHOW)

    def test_missing_parent_rejected(self, store: EntityStore) -> None:
        """A parent id that is not registered is a hierarchy error."""
        with pytest.raises(InvalidHierarchyError, match="does not exist"):
            store.create(TV, EntityKind.SEASON, uuid.uuid4())


class TestTraversal:
    """Tests for path and descendant traversal."""

    def test_path_to_root_orders_root_first(self, store: EntityStore) -> None:
        """The path starts at the root and ends at the entity."""
        show = store.create(TV, EntityKind.SHOW)
        season = store.create(TV, EntityKind.SEASON, show)
        episode = store.create(TV, EntityKind.EPISODE, season)
        assert store.path_to_root(episode) == [show, season, episode]

    def test_path_of_unknown_entity(self, store: EntityStore) -> None:
        """An unknown id raises NotFoundError."""
        with pytest.raises(NotFoundError, match="Entity"):
            store.path_to_root(uuid.uuid4())

    def test_corrupted_parent_chain_is_rejected(self, store: EntityStore) -> None:
        """A parent chain that loops raises instead of spinning forever."""
        show = store.create(TV, EntityKind.SHOW)
        season = store.create(TV, EntityKind.SEASON, show)
        store._records[show].parent_id = season
        with pytest.raises(CycleRejectedError):
            store.path_to_root(season)

    def test_descendants_pre_order(self, store: EntityStore) -> None:
        """Descendants come depth-first, children in insertion order."""
        show = store.create(TV, EntityKind.SHOW)
        s1 = store.create(TV, EntityKind.SEASON, show)
        e11 = store.create(TV, EntityKind.EPISODE, s1)
        s2 = store.create(TV, EntityKind.SEASON, show)
        e21 = store.create(TV, EntityKind.EPISODE, s2)
        assert store.descendants(show) == [show, s1, e11, s2, e21]

    def test_find_child_by_number(self, store: EntityStore) -> None:
        """``find_child`` matches kind and number."""
        show = store.create(TV, EntityKind.SHOW)
        store.create(TV, EntityKind.SEASON, show, number=1)
        s2 = store.create(TV, EntityKind.SEASON, show, number=2)
        assert store.find_child(show, EntityKind.SEASON, 2) == s2
        assert store.find_child(show, EntityKind.SEASON, 3) is None


class TestRemove:
    """Tests for ``EntityStore.remove``."""

    def test_remove_cascades(self, store: EntityStore) -> None:
        """Removing a show removes its seasons and episodes."""
        show = store.create(TV, EntityKind.SHOW)
        season = store.create(TV, EntityKind.SEASON, show)
        episode = store.create(TV, EntityKind.EPISODE, season)
        removed = store.remove(show)
        assert removed == [show, season, episode]
        assert len(store) == 0
        for entity_id in removed:
            assert not store.exists(entity_id)

    def test_remove_detaches_from_parent(self, store: EntityStore) -> None:
        """A removed season disappears from its show's children."""
        show = store.create(TV, EntityKind.SHOW)
        s1 = store.create(TV, EntityKind.SEASON, show)
        s2 = store.create(TV, EntityKind.SEASON, show)
        store.remove(s1)
        assert store.children(show) == [s2]

    def test_remove_unknown_leaves_store_unchanged(self, store: EntityStore) -> None:
        """Removing an unknown id raises and changes nothing."""
        show = store.create(TV, EntityKind.SHOW)
        with pytest.raises(NotFoundError):
            store.remove(uuid.uuid4())
        assert store.all_ids() == [show]
