"""
Tag normalization for the global tag registry.

The pipeline is pure (no I/O) and idempotent:
``normalize(normalize(x)) == normalize(x)``. Two raw tags are the same tag
exactly when their normalized forms are equal.

Unlike slug-style normalizers, accents are preserved: "Café" and "cafe" are
different tags. Only whitespace and letter case are folded.
"""

from __future__ import annotations

import logging
import unicodedata

logger = logging.getLogger(__name__)

# Zero-width characters removed before comparison
_ZERO_WIDTH_CHARS: frozenset[str] = frozenset(
    {
        "\u200B",  # ZERO WIDTH SPACE
        "\u200C",  # ZERO WIDTH NON-JOINER
        "\u200D",  # ZERO WIDTH JOINER
        "\uFEFF",  # ZERO WIDTH NO-BREAK SPACE / BOM
    }
)


def clean_display_text(raw_tag: str) -> str:
    """
    Tidy raw tag text for presentation without changing its casing.

    Strips zero-width characters, trims, and collapses whitespace runs
    (including non-breaking spaces and tabs) to single spaces.

    Examples
    --------
    >>> clean_display_text("  Science\\u00A0 Fiction ")
    'Science Fiction'
    """
    text = "".join(ch for ch in raw_tag if ch not in _ZERO_WIDTH_CHARS)
    text = text.replace("\u00A0", " ").replace("\t", " ")
    return " ".join(text.split())


class TagNormalizer:
    """
    Normalizes raw tag text into its registry key.

    Steps, in order:

    1. Strip leading/trailing whitespace
    2. Replace non-breaking spaces (U+00A0) and tabs with regular space
    3. Collapse multiple spaces to a single space
    4. Strip zero-width characters (U+200B, U+200C, U+200D, U+FEFF)
    5. NFC compose
    6. Casefold

    The result is ``None`` when the output would be an empty string.
    """

    def normalize(self, raw_tag: str) -> str | None:
        """
        Run the normalization pipeline on *raw_tag*.

        Parameters
        ----------
        raw_tag : str
            Tag text as supplied by a client.

        Returns
        -------
        str | None
            The normalized form, or ``None`` if nothing is left.

        Examples
        --------
        >>> TagNormalizer().normalize("  Science   FICTION ")
        'science fiction'

        >>> TagNormalizer().normalize("   ") is None
        True
        """
        # Step 1: Strip leading/trailing whitespace
        text = raw_tag.strip()

        # Step 2: Replace non-breaking spaces and tabs with regular space
        text = text.replace("\u00A0", " ").replace("\t", " ")

        # Step 3: Collapse multiple spaces to single space
        text = " ".join(text.split())

        # Step 4: Strip zero-width characters
        text = "".join(ch for ch in text if ch not in _ZERO_WIDTH_CHARS)

        # Step 5: NFC compose so precomposed and combining forms match
        text = unicodedata.normalize("NFC", text)

        # Step 6: Casefold
        text = text.casefold()

        # Zero-width removal and casefolding can expose new edge whitespace
        text = " ".join(text.split())

        return text if text else None
