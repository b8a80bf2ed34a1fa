"""
Tagging core services for mediatag.

Components in dependency order: entity store, tag registry, assignment
table, resolver, query engine. ``TaggingService`` owns one of each and is
the only class adapters are expected to use.
"""

from __future__ import annotations

from mediatag.services.assignment_table import AssignmentTable
from mediatag.services.entity_store import EntityStore
from mediatag.services.query_engine import QueryEngine
from mediatag.services.resolver import Resolver
from mediatag.services.tag_registry import TagRegistry
from mediatag.services.tagging_service import TaggingService

__all__ = [
    "AssignmentTable",
    "EntityStore",
    "QueryEngine",
    "Resolver",
    "TagRegistry",
    "TaggingService",
]
