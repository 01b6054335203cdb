"""API error envelope schemas."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Machine-readable error codes returned by the API.

    4xx Client Errors:
        NOT_FOUND: Route does not exist (404)
        METHOD_NOT_ALLOWED: Only GET is accepted (405)

    5xx Server Errors:
        CHANNEL_FETCH_FAILED: No channel data could be produced (502)
        INTERNAL_ERROR: Unexpected server error (500)
    """

    # 4xx Client Errors
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"

    # 5xx Server Errors
    CHANNEL_FETCH_FAILED = "channel_fetch_failed"
    INTERNAL_ERROR = "internal_error"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NOT_FOUND: "Resource not found",
    ErrorCode.METHOD_NOT_ALLOWED: "Method not allowed",
    ErrorCode.CHANNEL_FETCH_FAILED: "Channel data is temporarily unavailable",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred",
}
"""Default human-readable message for each error code."""


class ApiError(BaseModel):
    """Standard error body."""

    model_config = ConfigDict(strict=True)

    code: str  # Machine-readable error code (e.g., channel_fetch_failed)
    message: str  # Human-readable message
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response wrapper."""

    model_config = ConfigDict(strict=True)

    error: ApiError

    @classmethod
    def for_code(cls, code: ErrorCode, message: str | None = None) -> ErrorResponse:
        """Build an error response with the code's default message."""
        return cls(error=ApiError(code=code.value, message=message or ERROR_MESSAGES[code]))
