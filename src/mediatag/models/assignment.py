"""
Assignment models for explicit (entity, tag, mode) rows.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict

from .enums import AssignmentMode


class Assignment(BaseModel):
    """An explicit tag assignment recorded directly on one entity."""

    entity_id: uuid.UUID
    tag_id: uuid.UUID
    mode: AssignmentMode

    model_config = ConfigDict(frozen=True)
