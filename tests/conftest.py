"""Shared fixtures for gql-vars-schema tests."""

import pytest
from graphql import build_schema

SDL = '''
"""Color of a thing"""
enum Color {
  RED
  GREEN
}

scalar JSON
scalar Date
scalar Url
scalar DateTime

"""Filter description"""
input Filter {
  "Nested filter"
  self: Filter
  name: String!
  limit: Int = 10
  color: Color = RED
}

input A {
  b: B
}

input B {
  a: A!
  tags: [String]
}

type Query {
  items(filter: Filter, first: Int): [String]
  search(a: A, ids: [ID!]!): [String]
  recent(since: Date): [String]
}
'''


@pytest.fixture
def schema():
    return build_schema(SDL)


@pytest.fixture
def sdl_text():
    return SDL


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config and schema cache lookups out of the real home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
