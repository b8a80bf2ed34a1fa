"""Tests for fuzzy tag matching."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mediatag.utils.fuzzy import closest_matches, edit_distance


class TestEditDistance:
    """Tests for ``edit_distance``."""

    @pytest.mark.parametrize(
        ("s1", "s2", "expected"),
        [
            ("", "", 0),
            ("", "abc", 3),
            ("drama", "drama", 0),
            ("drama", "dramas", 1),
            ("kitten", "sitting", 3),
        ],
    )
    def test_known_distances(self, s1: str, s2: str, expected: int) -> None:
        assert edit_distance(s1, s2) == expected

    def test_cutoff_short_circuits(self) -> None:
        """Distances beyond the cutoff are reported as cutoff + 1."""
        assert edit_distance("rock", "classical", cutoff=2) == 3
        assert edit_distance("drama", "drams", cutoff=2) == 1

    @given(st.text(max_size=8), st.text(max_size=8))
    def test_symmetric(self, s1: str, s2: str) -> None:
        assert edit_distance(s1, s2) == edit_distance(s2, s1)


class TestClosestMatches:
    """Tests for ``closest_matches``."""

    def test_sorted_by_distance_then_name(self) -> None:
        assert closest_matches("rok", ["rock", "rick", "folk", "jazz"]) == [
            "rock",
            "folk",
            "rick",
        ]

    def test_limit_and_zero_limit(self) -> None:
        candidates = ["ab", "ac", "ad"]
        assert closest_matches("a", candidates, limit=1) == ["ab"]
        assert closest_matches("a", candidates, limit=0) == []

    def test_nothing_close(self) -> None:
        assert closest_matches("jazz", ["classical"], max_distance=1) == []
