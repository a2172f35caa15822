"""GraphQL-over-HTTP request model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GraphQLRequest(BaseModel):
    """Body of a GraphQL execution request.

    Example:
        {
            "query": "query Probe { health }",
            "operationName": "Probe",
            "variables": {}
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str
    """GraphQL document text."""

    variables: dict[str, Any] | None = None
    """Variable values keyed by name."""

    operation_name: str | None = Field(default=None, alias="operationName")
    """Operation to run when the document holds several."""

    extensions: dict[str, Any] | None = None
    """Client extensions; accepted and ignored."""
