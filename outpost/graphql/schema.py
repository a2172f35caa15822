"""GraphQL schema.

The schema is built once at startup and shared read-only by every request.
Mutations and subscriptions are disabled.
"""

import strawberry


@strawberry.type(description="Root query type.")
class Query:
    # GraphQL object types need at least one field
    @strawberry.field(description="Always true while the service is serving requests.")
    def health(self) -> bool:
        return True


def build_schema() -> strawberry.Schema:
    """Build the query-only schema."""
    return strawberry.Schema(query=Query)
