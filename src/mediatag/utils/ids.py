"""Identifier helpers."""

from __future__ import annotations

import uuid

from uuid_utils import uuid7


def new_id() -> uuid.UUID:
    """Return a fresh time-ordered UUIDv7 as a standard ``uuid.UUID``."""
    return uuid.UUID(bytes=uuid7().bytes)
