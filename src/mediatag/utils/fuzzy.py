"""Fuzzy string matching for "did you mean" tag hints.

Distances are plain Levenshtein edit distances. Inputs are expected to be
already normalized (see ``mediatag.services.tag_normalization``), so no case
folding happens here.
"""

from collections.abc import Iterable
from typing import List, Optional, Tuple


def edit_distance(s1: str, s2: str, cutoff: Optional[int] = None) -> int:
    """
    Levenshtein distance between two strings.

    When *cutoff* is given, computation stops as soon as every cell of a
    row exceeds it and ``cutoff + 1`` is returned; callers that only care
    whether the distance is within a bound can skip the remaining rows.

    Examples
    --------
    >>> edit_distance("drama", "dramas")
    1
    >>> edit_distance("kitten", "sitting")
    3
    >>> edit_distance("rock", "classical", cutoff=2)
    3
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if cutoff is not None and len(s1) - len(s2) > cutoff:
        return cutoff + 1
    if not s2:
        return len(s1)

    previous_row: List[int] = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current_row: List[int] = [i]
        for j, c2 in enumerate(s2, start=1):
            current_row.append(
                min(
                    previous_row[j] + 1,
                    current_row[j - 1] + 1,
                    previous_row[j - 1] + (c1 != c2),
                )
            )
        if cutoff is not None and min(current_row) > cutoff:
            return cutoff + 1
        previous_row = current_row
    return previous_row[-1]


def closest_matches(
    query: str,
    candidates: Iterable[str],
    *,
    max_distance: int = 2,
    limit: int = 5,
) -> List[str]:
    """
    Candidates within *max_distance* of *query*, closest first.

    Ties are broken alphabetically. Exact matches are included.

    Examples
    --------
    >>> closest_matches("dram", ["drama", "dream", "rock"])
    ['drama', 'dream']
    >>> closest_matches("jazz", ["rock"], max_distance=1)
    []
    """
    if limit <= 0:
        return []
    matches: List[Tuple[int, str]] = []
    for candidate in candidates:
        distance = edit_distance(query, candidate, cutoff=max_distance)
        if distance <= max_distance:
            matches.append((distance, candidate))
    matches.sort()
    return [candidate for _, candidate in matches[:limit]]
