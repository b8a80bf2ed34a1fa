"""API response envelope schemas."""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import JSONResponse


class ErrorCode(str, Enum):
    """Standardized error codes for API responses.

    4xx Client Errors:
        NOT_FOUND: Entity or tag does not exist (404)
        INVALID_HIERARCHY: Parent/kind/domain mismatch (400)
        INVALID_TAG: Empty or whitespace-only tag text (400)
        CAPTURE_FAILED: No season/episode number in a file name (400)
        VALIDATION_ERROR: Request validation failed (422)
        CYCLE_REJECTED: Operation would create a containment cycle (409)

    5xx Server Errors:
        INTERNAL_ERROR: Unexpected server error (500)
        SERVICE_UNAVAILABLE: Store lock could not be acquired in time (503)
    """

    # 4xx Client Errors
    NOT_FOUND = "NOT_FOUND"
    INVALID_HIERARCHY = "INVALID_HIERARCHY"
    INVALID_TAG = "INVALID_TAG"
    CAPTURE_FAILED = "CAPTURE_FAILED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CYCLE_REJECTED = "CYCLE_REJECTED"

    # 5xx Server Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


# RFC 7807 Constants and Utilities
ERROR_TYPE_BASE: str = "https://api.mediatag.dev/errors"
"""Base URI for constructing RFC 7807 type URIs."""


def get_error_type_uri(code: ErrorCode) -> str:
    """Generate RFC 7807 type URI from error code.

    Examples
    --------
    >>> get_error_type_uri(ErrorCode.NOT_FOUND)
    'https://api.mediatag.dev/errors/NOT_FOUND'
    """
    return f"{ERROR_TYPE_BASE}/{code.value}"


ERROR_TITLES: dict[ErrorCode, str] = {
    ErrorCode.NOT_FOUND: "Resource Not Found",
    ErrorCode.INVALID_HIERARCHY: "Invalid Hierarchy",
    ErrorCode.INVALID_TAG: "Invalid Tag",
    ErrorCode.CAPTURE_FAILED: "Capture Failed",
    ErrorCode.VALIDATION_ERROR: "Validation Error",
    ErrorCode.CYCLE_REJECTED: "Cycle Rejected",
    ErrorCode.INTERNAL_ERROR: "Internal Server Error",
    ErrorCode.SERVICE_UNAVAILABLE: "Service Unavailable",
}
"""Mapping from ErrorCode to human-readable RFC 7807 title."""

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response for API errors.

    Attributes
    ----------
    type : str
        URI identifying the problem type.
    title : str
        Short human-readable summary of the problem type.
    status : int
        HTTP status code (4xx or 5xx).
    detail : str
        Human-readable explanation of the specific problem occurrence.
    instance : str
        URI reference of the specific occurrence.
    code : str
        Application-specific error code from ErrorCode enum.
    extra : dict[str, Any] | None
        Structured context (e.g. resource type, tag suggestions).
    """

    type: str = Field(
        ...,
        description="URI identifying the problem type",
        examples=["https://api.mediatag.dev/errors/NOT_FOUND"],
    )
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., ge=400, le=599, description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation of the problem")
    instance: str = Field(
        ...,
        description="URI reference of the specific occurrence",
        examples=["/api/v1/entities/0190f1c2-7a3b-7c4d-8e9f-0a1b2c3d4e5f"],
    )
    code: str = Field(..., description="Application-specific error code")
    extra: dict[str, Any] | None = Field(
        default=None, description="Additional structured context"
    )


class FieldError(BaseModel):
    """Individual field validation error for RFC 7807 validation responses."""

    loc: list[str | int] = Field(..., description="Location of the error (field path)")
    msg: str = Field(..., description="Error message")
    type: str = Field(..., description="Error type identifier")


class ValidationProblemDetail(ProblemDetail):
    """RFC 7807 Problem Details with field errors for 422 responses."""

    errors: list[FieldError] = Field(
        ..., description="List of field-level validation errors"
    )


class ProblemJSONResponse(JSONResponse):
    """JSONResponse with the RFC 7807 ``application/problem+json`` media type."""

    media_type = "application/problem+json"


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

ResponsesType = dict[int | str, dict[str, Any]]


def problem_responses(*statuses: int) -> ResponsesType:
    """OpenAPI ``responses`` entries documenting problem+json errors."""
    descriptions = {
        400: "Bad request",
        404: "Resource not found",
        409: "Conflict",
        422: "Validation error",
        503: "Store busy",
    }
    return {
        status: {
            "model": ValidationProblemDetail if status == 422 else ProblemDetail,
            "description": descriptions.get(status, "Error"),
            "content": {PROBLEM_JSON_MEDIA_TYPE: {}},
        }
        for status in statuses
    }
