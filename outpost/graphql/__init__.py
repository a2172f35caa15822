"""GraphQL schema and playground page."""

from outpost.graphql.playground import playground_html
from outpost.graphql.schema import Query, build_schema

__all__ = ["Query", "build_schema", "playground_html"]
