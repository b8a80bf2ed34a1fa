"""
Tests for RFC 7807 exception handling.

Every core error maps to one status code and a problem+json body.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from mediatag.api.exception_handlers import (
    MAX_DETAIL_LENGTH,
    TRUNCATION_SUFFIX,
    _truncate_detail,
    register_exception_handlers,
)
from mediatag.exceptions import (
    CaptureError,
    CaptureErrorReason,
    CycleRejectedError,
    InvalidHierarchyError,
    InvalidTagError,
    LockAcquisitionError,
    MediatagError,
    NotFoundError,
)

# CRITICAL: This line ensures async tests work with coverage
pytestmark = pytest.mark.asyncio


def _app_raising(exc: Exception) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def boom() -> None:
        raise exc

    return app


async def _get(app: FastAPI):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get("/boom")


class TestStatusMapping:
    """Tests for the error to status code mapping."""

    @pytest.mark.parametrize(
        ("exc", "status", "code"),
        [
            (NotFoundError("Entity", "abc"), 404, "NOT_FOUND"),
            (InvalidHierarchyError("bad parent"), 400, "INVALID_HIERARCHY"),
            (InvalidTagError(""), 400, "INVALID_TAG"),
            (CaptureError(CaptureErrorReason.NO_SEASON, "x.mkv"), 400, "CAPTURE_FAILED"),
            (CycleRejectedError("abc"), 409, "CYCLE_REJECTED"),
            (LockAcquisitionError(), 503, "SERVICE_UNAVAILABLE"),
            (MediatagError("unmapped"), 500, "INTERNAL_ERROR"),
        ],
    )
    async def test_core_errors(self, exc: Exception, status: int, code: str) -> None:
        response = await _get(_app_raising(exc))
        assert response.status_code == status
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["status"] == status
        assert body["code"] == code
        assert body["instance"] == "/boom"
        assert body["type"].endswith(f"/{code}")

    async def test_not_found_extra(self) -> None:
        response = await _get(_app_raising(NotFoundError("Tag", "drma")))
        assert response.json()["extra"] == {"resource_type": "Tag", "identifier": "drma"}

    async def test_capture_extra(self) -> None:
        exc = CaptureError(CaptureErrorReason.NO_EPISODE, "trailer.mkv")
        response = await _get(_app_raising(exc))
        assert response.json()["extra"] == {
            "reason": "no_episode",
            "file_path": "trailer.mkv",
        }

    async def test_lock_timeout_sets_retry_after(self) -> None:
        response = await _get(_app_raising(LockAcquisitionError(timeout=1.0)))
        assert response.headers["retry-after"] == "1"

    async def test_unexpected_error_hides_details(self) -> None:
        response = await _get(_app_raising(RuntimeError("secret internals")))
        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "INTERNAL_ERROR"
        assert "secret" not in body["detail"]


class TestTruncation:
    """Tests for detail truncation."""

    async def test_short_detail_untouched(self) -> None:
        assert _truncate_detail("short") == "short"

    async def test_long_detail_truncated(self) -> None:
        detail = _truncate_detail("x" * (MAX_DETAIL_LENGTH + 10))
        assert len(detail) == MAX_DETAIL_LENGTH
        assert detail.endswith(TRUNCATION_SUFFIX)
