"""GraphQL API of the Product Service (queries, mutations, subscriptions)."""

from .schema import create_graphql_router, schema

__all__ = ["schema", "create_graphql_router"]
