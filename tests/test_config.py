"""Tests for configuration loading."""

import yaml

from graphql_variables_schema import config


def test_defaults_when_missing(tmp_path):
    cfg = config.load(str(tmp_path / "missing.yaml"))

    assert cfg.default_url is None
    assert cfg.use_markdown_description is False
    assert cfg.custom_scalar_schemas == {}
    assert not cfg.schema_cache_dir.startswith("~")


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump(
            {
                "default_url": "https://api.example.com/graphql",
                "use_markdown_description": True,
                "custom_scalar_schemas": {"Date": {"type": "string", "format": "date"}},
                "schema_cache_dir": str(tmp_path / "cache"),
            }
        )
    )

    cfg = config.load(str(path))

    assert cfg.default_url == "https://api.example.com/graphql"
    assert cfg.use_markdown_description is True
    assert cfg.custom_scalar_schemas["Date"]["format"] == "date"
    assert cfg.schema_cache_dir == str(tmp_path / "cache")


def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert config.load(str(path)).custom_scalar_schemas == {}


def test_json_schema_options_overrides():
    cfg = config.Config(
        use_markdown_description=True,
        custom_scalar_schemas={"Date": {"type": "string"}, "JSON": {"type": "object"}},
    )

    opts = cfg.json_schema_options()
    assert opts.use_markdown_description is True
    assert set(opts.custom_scalar_schemas) == {"Date", "JSON"}

    opts = cfg.json_schema_options(
        use_markdown_description=False,
        custom_scalar_schemas={"JSON": {"type": "array"}},
    )
    assert opts.use_markdown_description is False
    assert opts.custom_scalar_schemas["JSON"] == {"type": "array"}
    assert cfg.custom_scalar_schemas["JSON"] == {"type": "object"}


def test_create_example_config(tmp_path):
    path = str(tmp_path / "nested" / "config.yaml")

    assert config.create_example_config(path) == path

    cfg = config.load(path)
    assert cfg.default_url == "https://api.example.com/graphql"
    assert cfg.custom_scalar_schemas["Date"] == {"type": "string", "format": "date"}
