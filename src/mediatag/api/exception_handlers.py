"""Centralized exception handlers for FastAPI with RFC 7807 compliance.

Converts tagging-core exceptions into Problem Details responses
(``application/problem+json``). The mapping from core errors to HTTP status
codes lives here and nowhere else:

- NotFoundError -> 404
- InvalidHierarchyError, InvalidTagError, CaptureError -> 400
- CycleRejectedError -> 409
- LockAcquisitionError -> 503
- RequestValidationError -> 422
- anything else -> 500
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from mediatag.api.schemas.responses import (
    ERROR_TITLES,
    ErrorCode,
    FieldError,
    ProblemDetail,
    ProblemJSONResponse,
    ValidationProblemDetail,
    get_error_type_uri,
)
from mediatag.exceptions import (
    CaptureError,
    CycleRejectedError,
    InvalidHierarchyError,
    InvalidTagError,
    LockAcquisitionError,
    MediatagError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

MAX_DETAIL_LENGTH = 4096
"""Maximum allowed length for detail messages before truncation."""

TRUNCATION_SUFFIX = "... (truncated)"

ERROR_STATUS: dict[type[MediatagError], tuple[int, ErrorCode]] = {
    NotFoundError: (404, ErrorCode.NOT_FOUND),
    InvalidHierarchyError: (400, ErrorCode.INVALID_HIERARCHY),
    InvalidTagError: (400, ErrorCode.INVALID_TAG),
    CaptureError: (400, ErrorCode.CAPTURE_FAILED),
    CycleRejectedError: (409, ErrorCode.CYCLE_REJECTED),
    LockAcquisitionError: (503, ErrorCode.SERVICE_UNAVAILABLE),
}
"""Status code and error code for each core exception type."""


def _truncate_detail(detail: str) -> str:
    if len(detail) <= MAX_DETAIL_LENGTH:
        return detail
    return detail[: MAX_DETAIL_LENGTH - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX


def _status_for(exc: MediatagError) -> tuple[int, ErrorCode]:
    """Resolve status and code by walking the exception's MRO."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500, ErrorCode.INTERNAL_ERROR


def _extra_for(exc: MediatagError) -> dict[str, Any] | None:
    if isinstance(exc, NotFoundError):
        return {"resource_type": exc.resource_type, "identifier": exc.identifier}
    if isinstance(exc, InvalidHierarchyError):
        return {"kind": exc.kind, "parent_kind": exc.parent_kind}
    if isinstance(exc, CaptureError):
        return {"reason": exc.reason.value, "file_path": exc.file_path}
    return None


def problem_response(
    code: ErrorCode,
    status: int,
    detail: str,
    instance: str,
    extra: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> ProblemJSONResponse:
    """Build a Problem Details response.

    Parameters
    ----------
    code : ErrorCode
        The error code for the problem.
    status : int
        HTTP status code for the response.
    detail : str
        Human-readable explanation of the problem.
    instance : str
        URI reference of the specific occurrence.
    extra : dict[str, Any] | None, optional
        Structured context for clients.
    headers : dict[str, str] | None, optional
        Additional response headers.

    Returns
    -------
    ProblemJSONResponse
        RFC 7807 compliant JSON response.
    """
    problem = ProblemDetail(
        type=get_error_type_uri(code),
        title=ERROR_TITLES.get(code, "Error"),
        status=status,
        detail=_truncate_detail(detail),
        instance=instance,
        code=code.value,
        extra=extra,
    )
    return ProblemJSONResponse(
        content=problem.model_dump(), status_code=status, headers=headers
    )


async def mediatag_error_handler(
    request: Request, exc: MediatagError
) -> ProblemJSONResponse:
    """Handle tagging-core errors.

    Parameters
    ----------
    request : Request
        The incoming FastAPI request.
    exc : MediatagError
        The core exception that was raised.

    Returns
    -------
    ProblemJSONResponse
        Problem Details response with the mapped status code.
    """
    status, code = _status_for(exc)
    headers = None
    if isinstance(exc, LockAcquisitionError):
        logger.warning("Store lock timeout on %s: %s", request.url.path, exc.message)
        headers = {"Retry-After": "1"}
    elif status >= 500:
        logger.error("Core error on %s: %s", request.url.path, exc.message)

    return problem_response(
        code=code,
        status=status,
        detail=exc.message,
        instance=str(request.url.path),
        extra=_extra_for(exc),
        headers=headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> ProblemJSONResponse:
    """Handle request validation errors with a field error list (422)."""
    errors = [
        FieldError(
            loc=list(error.get("loc", [])),
            msg=error.get("msg", ""),
            type=error.get("type", ""),
        )
        for error in exc.errors()
    ]
    problem = ValidationProblemDetail(
        type=get_error_type_uri(ErrorCode.VALIDATION_ERROR),
        title=ERROR_TITLES[ErrorCode.VALIDATION_ERROR],
        status=422,
        detail="Request validation failed",
        instance=str(request.url.path),
        code=ErrorCode.VALIDATION_ERROR.value,
        errors=errors,
    )
    return ProblemJSONResponse(content=problem.model_dump(), status_code=422)


async def generic_error_handler(
    request: Request, exc: Exception
) -> ProblemJSONResponse:
    """Catch-all for unexpected exceptions; details are logged, not exposed."""
    logger.exception("Unhandled exception: %s", exc)
    return problem_response(
        code=ErrorCode.INTERNAL_ERROR,
        status=500,
        detail="An unexpected error occurred",
        instance=str(request.url.path),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Examples
    --------
    >>> from fastapi import FastAPI
    >>> app = FastAPI()
    >>> register_exception_handlers(app)
    """
    app.add_exception_handler(MediatagError, mediatag_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_error_handler)
