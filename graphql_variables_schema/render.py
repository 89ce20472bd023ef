"""Human-readable rendering of GraphQL input type signatures."""

from graphql import GraphQLInputType, is_list_type, is_non_null_type

MARKDOWN_OPEN = "```graphql\n"
MARKDOWN_CLOSE = "\n```"


def _render(into: list[str], type_: GraphQLInputType) -> None:
    if is_non_null_type(type_):
        _render(into, type_.of_type)
        into.append("!")
    elif is_list_type(type_):
        into.append("[")
        _render(into, type_.of_type)
        into.append("]")
    else:
        into.append(type_.name)


def render_type(type_: GraphQLInputType) -> str:
    """
    Render a type reference the way it is written in a GraphQL document.

    Args:
        type_: Input type, possibly wrapped in List/NonNull

    Returns:
        Signature such as "[String!]!"
    """
    into: list[str] = []
    _render(into, type_)
    return "".join(into)


def render_type_to_string(
    type_: GraphQLInputType, use_markdown: bool = False
) -> str:
    """Render a type signature, optionally fenced as a graphql code block."""
    rendered = render_type(type_)
    if use_markdown:
        return f"{MARKDOWN_OPEN}{rendered}{MARKDOWN_CLOSE}"
    return rendered
