"""Utility modules for mediatag."""

from mediatag.utils.fuzzy import closest_matches, edit_distance
from mediatag.utils.ids import new_id

__all__ = ["closest_matches", "edit_distance", "new_id"]
