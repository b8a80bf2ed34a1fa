"""
Tests for tag normalization.

Covers the normalization pipeline, display cleanup and idempotency.
Accents are significant, so accent tests assert that nothing is stripped.
"""

from __future__ import annotations

import unicodedata

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mediatag.services.tag_normalization import TagNormalizer, clean_display_text


@pytest.fixture()
def normalizer() -> TagNormalizer:
    """Provide a fresh ``TagNormalizer`` instance."""
    return TagNormalizer()


class TestNormalize:
    """Tests for ``TagNormalizer.normalize``."""

    def test_case_folding(self, normalizer: TagNormalizer) -> None:
        """Upper-case input is case-folded."""
        assert normalizer.normalize("DRAMA") == "drama"

    def test_surrounding_whitespace(self, normalizer: TagNormalizer) -> None:
        """Leading and trailing whitespace is removed."""
        assert normalizer.normalize("  Drama  ") == "drama"

    def test_inner_whitespace_collapsed(self, normalizer: TagNormalizer) -> None:
        """Runs of spaces, tabs and NBSP collapse to one space."""
        raw = "Science\t \N{NO-BREAK SPACE}Fiction"
        assert normalizer.normalize(raw) == "science fiction"

    def test_zero_width_removed(self, normalizer: TagNormalizer) -> None:
        """Zero-width characters do not create distinct tags."""
        raw = "dra\N{ZERO WIDTH SPACE}ma\N{ZERO WIDTH NO-BREAK SPACE}"
        assert normalizer.normalize(raw) == "drama"

    def test_accents_preserved(self, normalizer: TagNormalizer) -> None:
        """Accented letters are kept, so 'Café' and 'cafe' differ."""
        assert normalizer.normalize("Caf\N{LATIN SMALL LETTER E WITH ACUTE}") == (
            "caf\N{LATIN SMALL LETTER E WITH ACUTE}"
        )
        assert normalizer.normalize("Cafe") == "cafe"

    def test_composed_and_decomposed_match(self, normalizer: TagNormalizer) -> None:
        """NFD input normalizes to the same key as NFC input."""
        composed = "Caf\N{LATIN SMALL LETTER E WITH ACUTE}"
        decomposed = unicodedata.normalize("NFD", composed)
        assert composed != decomposed
        assert normalizer.normalize(composed) == normalizer.normalize(decomposed)

    def test_casefold_handles_sharp_s(self, normalizer: TagNormalizer) -> None:
        """Casefolding maps German sharp s to 'ss'."""
        assert normalizer.normalize("Stra\N{LATIN SMALL LETTER SHARP S}e") == "strasse"

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n", "\N{ZERO WIDTH SPACE}"])
    def test_empty_results_return_none(
        self, normalizer: TagNormalizer, raw: str
    ) -> None:
        """Input with nothing left after cleanup yields ``None``."""
        assert normalizer.normalize(raw) is None

    @given(st.text(alphabet=st.characters(min_codepoint=0x20, max_codepoint=0x17F)))
    def test_idempotent(self, raw: str) -> None:
        """Normalizing a normalized form changes nothing."""
        normalizer = TagNormalizer()
        once = normalizer.normalize(raw)
        if once is not None:
            assert normalizer.normalize(once) == once


class TestCleanDisplayText:
    """Tests for ``clean_display_text``."""

    def test_keeps_casing(self) -> None:
        """Display text keeps the caller's casing."""
        assert clean_display_text("  Science  Fiction ") == "Science Fiction"

    def test_strips_zero_width(self) -> None:
        """Zero-width characters are dropped from display text."""
        assert clean_display_text("Jazz\N{ZERO WIDTH JOINER}") == "Jazz"
