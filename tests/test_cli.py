"""Tests for the gql-vars-schema CLI."""

import json
from unittest.mock import Mock, patch

import pytest
import yaml
from graphql import build_schema, introspection_from_schema
from typer.testing import CliRunner

from graphql_variables_schema.cli import GenerateOptions, app, run_generate
from graphql_variables_schema.report import schema_kind

runner = CliRunner()

QUERY = """
query Items($filter: Filter, $first: Int!, $since: Date) {
  items(filter: $filter, first: $first)
  recent(since: $since)
}
"""


@pytest.fixture
def files(tmp_path, sdl_text):
    schema_path = tmp_path / "schema.graphql"
    schema_path.write_text(sdl_text)
    query_path = tmp_path / "query.graphql"
    query_path.write_text(QUERY)
    return schema_path, query_path


def test_generate_json(files):
    schema_path, query_path = files

    result = runner.invoke(app, ["generate", str(query_path), "--schema", str(schema_path)])

    assert result.exit_code == 0, result.output
    doc = json.loads(result.stdout)
    assert list(doc["properties"]) == ["filter", "first", "since"]
    assert doc["required"] == ["first"]
    assert list(doc["definitions"]) == ["Filter"]
    assert "markdownDescription" not in doc["properties"]["first"]


def test_generate_markdown_and_scalars(files, tmp_path):
    schema_path, query_path = files
    scalars = tmp_path / "scalars.yaml"
    scalars.write_text(yaml.dump({"Date": {"type": "string", "format": "date"}}))
    out = tmp_path / "out.json"

    result = runner.invoke(
        app,
        [
            "generate",
            str(query_path),
            "--schema",
            str(schema_path),
            "--markdown",
            "--scalar-schemas",
            str(scalars),
            "--out",
            str(out),
        ],
    )

    assert result.exit_code == 0, result.output
    doc = json.loads(out.read_text())
    assert doc["properties"]["since"]["type"] == ["string", "null"]
    assert doc["properties"]["since"]["format"] == "date"
    assert doc["properties"]["first"]["markdownDescription"] == "```graphql\nInt!\n```"


def test_generate_operation_not_found(files):
    schema_path, query_path = files

    result = runner.invoke(
        app, ["generate", str(query_path), "--schema", str(schema_path), "--operation", "Missing"]
    )

    assert result.exit_code == 1
    assert "Missing" in result.output


def test_generate_without_schema(files):
    _, query_path = files

    result = runner.invoke(app, ["generate", str(query_path)])

    assert result.exit_code == 1
    assert "No URL or schema file provided" in result.output


def test_generate_console(files):
    schema_path, query_path = files

    result = runner.invoke(
        app, ["generate", str(query_path), "--schema", str(schema_path), "--output", "console"]
    )

    assert result.exit_code == 0, result.output
    assert "$first" in result.output
    assert "Filter" in result.output


def test_run_generate_uses_config_defaults(files, isolated_home):
    schema_path, query_path = files
    cfg_dir = isolated_home / ".gql-vars-schema"
    cfg_dir.mkdir()
    (cfg_dir / "config.yaml").write_text(
        yaml.dump({"use_markdown_description": True, "custom_scalar_schemas": {"Date": {"type": "string"}}})
    )

    doc = run_generate(str(query_path), GenerateOptions(schema_file=str(schema_path)))

    assert doc["properties"]["since"]["type"] == ["string", "null"]
    assert "markdownDescription" in doc["properties"]["first"]

    doc = run_generate(
        str(query_path), GenerateOptions(schema_file=str(schema_path), use_markdown_description=False)
    )
    assert "markdownDescription" not in doc["properties"]["first"]


def test_schema_pull(tmp_path, sdl_text):
    introspection = introspection_from_schema(build_schema(sdl_text))
    resp = Mock(status_code=200)
    resp.json.return_value = {"data": introspection}
    out = tmp_path / "pulled.json"

    with patch("graphql_variables_schema.schema_loader.requests.post", return_value=resp):
        result = runner.invoke(app, ["schema", "pull", "--url", "https://api.example.com/graphql", "--out", str(out)])

    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text()) == introspection


def test_schema_pull_requires_url():
    result = runner.invoke(app, ["schema", "pull"])
    assert result.exit_code == 1
    assert "No URL provided" in result.output


def test_config_init(tmp_path):
    path = tmp_path / "config.yaml"

    result = runner.invoke(app, ["config", "init", "--path", str(path)])

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(path.read_text())["use_markdown_description"] is False


@pytest.mark.parametrize(
    "fragment, expected",
    [
        ({"type": "string"}, "string"),
        ({"type": ["array", "null"], "items": {"$ref": "#/definitions/Filter"}}, "array|null of $ref Filter"),
        ({"oneOf": [{"$ref": "#/definitions/Filter"}, {"type": "null"}]}, "$ref Filter | null"),
        ({"enum": ["RED", None]}, "enum(RED, null)"),
        ({"format": "uri"}, "any"),
    ],
)
def test_schema_kind(fragment, expected):
    assert schema_kind(fragment) == expected
