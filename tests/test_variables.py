"""Tests for variable collection."""

import logging

import pytest
from graphql import GraphQLNonNull, parse

from graphql_variables_schema.render import render_type
from graphql_variables_schema.variables import collect_variables, iter_operations

QUERY = """
query Items($filter: Filter, $first: Int!) {
  items(filter: $filter, first: $first)
}

query Search($a: A, $ids: [ID!]!) {
  search(a: $a, ids: $ids)
}
"""


def test_collects_in_declaration_order(schema):
    variables = collect_variables(schema, parse(QUERY))

    assert list(variables) == ["filter", "first", "a", "ids"]
    assert variables["filter"] is schema.type_map["Filter"]
    assert isinstance(variables["first"], GraphQLNonNull)
    assert render_type(variables["ids"]) == "[ID!]!"


def test_single_operation(schema):
    variables = collect_variables(schema, parse(QUERY), operation_name="Search")
    assert list(variables) == ["a", "ids"]


def test_unknown_operation(schema):
    with pytest.raises(ValueError, match="Nope"):
        collect_variables(schema, parse(QUERY), operation_name="Nope")


def test_skips_unknown_and_output_types(schema, caplog):
    doc = parse("query Q($x: Missing, $y: Query, $z: String) { items }")

    with caplog.at_level(logging.WARNING):
        variables = collect_variables(schema, doc)

    assert list(variables) == ["z"]
    assert "$x" in caplog.text
    assert "$y" in caplog.text


def test_ignores_fragments(schema):
    doc = parse("fragment F on Query { items }\nquery Q($z: String) { ...F }")
    assert [op.name.value for op in iter_operations(doc)] == ["Q"]
    assert list(collect_variables(schema, doc)) == ["z"]


def test_operation_without_variables(schema):
    assert collect_variables(schema, parse("{ items }")) == {}
