"""
Tag models.

A tag is identified by its normalized text; the display form keeps the
casing it was first seen with.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field


class Tag(BaseModel):
    """Canonical tag in the global tag registry."""

    id: uuid.UUID = Field(..., description="Tag UUID (UUIDv7)")
    normalized_form: str = Field(
        ..., min_length=1, description="Machine key (trimmed, casefolded)"
    )
    display_form: str = Field(
        ..., min_length=1, description="First-seen form used for presentation"
    )

    model_config = ConfigDict(frozen=True)
