"""Variable collection from parsed GraphQL operations."""

import logging
from typing import Optional

from graphql import (
    DocumentNode,
    GraphQLInputType,
    GraphQLSchema,
    OperationDefinitionNode,
    is_input_type,
    print_ast,
    type_from_ast,
)

logger = logging.getLogger(__name__)


def iter_operations(doc: DocumentNode, operation_name: Optional[str] = None):
    """
    Iterate over operation definitions in a document.

    Args:
        doc: Parsed GraphQL document
        operation_name: Only yield the operation with this name

    Raises:
        ValueError: If operation_name is given but not defined in the document
    """
    operations = [d for d in doc.definitions if isinstance(d, OperationDefinitionNode)]
    if operation_name is None:
        yield from operations
        return

    selected = [op for op in operations if op.name and op.name.value == operation_name]
    if not selected:
        raise ValueError(f"Operation '{operation_name}' not found in document")
    yield from selected


def collect_variables(
    schema: GraphQLSchema, doc: DocumentNode, operation_name: Optional[str] = None
) -> dict[str, GraphQLInputType]:
    """
    Resolve the declared variables of a document against a schema.

    Variables are returned in declaration order. Variables whose type is
    unknown to the schema, or is not an input type, are skipped.

    Args:
        schema: GraphQL schema
        doc: Parsed GraphQL document
        operation_name: Restrict to a single named operation

    Returns:
        Dict mapping variable name -> resolved input type
    """
    variable_to_type: dict[str, GraphQLInputType] = {}
    for op in iter_operations(doc, operation_name):
        for var_def in op.variable_definitions or ():
            name = var_def.variable.name.value
            type_ = type_from_ast(schema, var_def.type)
            if type_ is None or not is_input_type(type_):
                logger.warning("Skipping variable $%s: unknown input type %s", name, print_ast(var_def.type))
                continue
            variable_to_type[name] = type_
    return variable_to_type
