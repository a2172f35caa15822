"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Standardized error codes for API responses.

    GraphQL execution errors are not reported with these codes; they stay
    inside the GraphQL response envelope.
    """

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, missing fields, etc.)."""

    NOT_FOUND = "NOT_FOUND"
    """No route matches the request path."""

    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    """The route exists but does not accept the request method."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    """The field that caused the error, if applicable."""

    message: str
    """Human-readable error description."""


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    """Machine-readable error code."""

    message: str
    """Human-readable error message."""

    details: list[ErrorDetail] | None = None
    """Additional error details for validation failures."""


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "error": {
                "code": "INVALID_REQUEST",
                "message": "Request validation failed"
            }
        }
    """

    error: ErrorBody
