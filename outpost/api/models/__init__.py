"""Request and response models for the HTTP API."""

from outpost.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from outpost.api.models.graphql import GraphQLRequest
from outpost.api.models.health import HealthResponse

__all__ = [
    "ErrorBody",
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "GraphQLRequest",
    "HealthResponse",
]
