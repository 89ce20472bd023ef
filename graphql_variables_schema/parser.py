"""GraphQL schema and operation parsing."""

from typing import Union

from graphql import (
    DocumentNode,
    GraphQLError,
    GraphQLSchema,
    build_ast_schema,
    build_client_schema,
    parse,
    validate,
)

SDL_SUFFIXES = (".graphql", ".graphqls", ".gql")


def is_sdl_path(path: str) -> bool:
    """Check whether a schema file holds SDL rather than introspection JSON."""
    return path.lower().endswith(SDL_SUFFIXES)


def build_schema(source: Union[dict, str]) -> GraphQLSchema:
    """
    Build a GraphQL schema from introspection JSON or SDL.

    Args:
        source: Introspection result ({"__schema": ...} or {"data": {"__schema": ...}})
                or SDL text

    Returns:
        GraphQLSchema object
    """
    if isinstance(source, str):
        return build_ast_schema(parse(source))

    if "data" in source and "__schema" in source["data"]:
        source = source["data"]
    return build_client_schema(source)


def parse_query(source: str) -> DocumentNode:
    """
    Parse a GraphQL operation document.

    Raises:
        GraphQLError: If the document is syntactically invalid
    """
    return parse(source)


def validate_query(doc: DocumentNode, schema: GraphQLSchema) -> list[GraphQLError]:
    """Validate an operation document against a schema, returning the errors."""
    return validate(schema, doc)
