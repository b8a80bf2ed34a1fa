"""
Pydantic models for mediatag entities, tags, and assignments.
"""

from __future__ import annotations

from .assignment import Assignment
from .entity import (
    KIND_DOMAINS,
    PARENT_KINDS,
    ROOT_KINDS,
    Entity,
    EntityCreate,
)
from .enums import AssignmentMode, EntityKind, MatchMode, MediaDomain
from .tag import Tag

__all__ = [
    "Assignment",
    "AssignmentMode",
    "Entity",
    "EntityCreate",
    "EntityKind",
    "KIND_DOMAINS",
    "MatchMode",
    "MediaDomain",
    "PARENT_KINDS",
    "ROOT_KINDS",
    "Tag",
]
