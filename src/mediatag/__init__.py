"""
mediatag - Hierarchical tagging service for media libraries.

Attach, remove, and query descriptive tags on television shows, movies,
and music, with tags inherited down the show/season/episode and
album/song containment hierarchy unless overridden.
"""

from __future__ import annotations

__version__ = "0.3.0"
__author__ = "mediatag"
__email__ = "noreply@mediatag.dev"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__email__", "__license__"]
