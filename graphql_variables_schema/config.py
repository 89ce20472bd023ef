"""Configuration management for gql-vars-schema."""

from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from . import utils
from .jsonschema import JsonSchemaOptions

DEFAULT_CONFIG_PATH = "~/.gql-vars-schema/config.yaml"
DEFAULT_SCHEMA_CACHE_DIR = "~/.gql-vars-schema/schemas"


@dataclass
class Config:
    """Configuration for gql-vars-schema."""

    default_url: Optional[str] = None
    schema_cache_dir: str = DEFAULT_SCHEMA_CACHE_DIR
    use_markdown_description: bool = False
    custom_scalar_schemas: dict[str, dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self):
        """Expand paths after initialization."""
        self.schema_cache_dir = utils.expand_path(self.schema_cache_dir)

    def json_schema_options(self, **overrides) -> JsonSchemaOptions:
        """
        Build synthesis options from config values.

        Args:
            **overrides: Non-None values replace the configured ones
                         (use_markdown_description, custom_scalar_schemas)
        """
        use_markdown = overrides.get("use_markdown_description")
        scalars = dict(self.custom_scalar_schemas)
        scalars.update(overrides.get("custom_scalar_schemas") or {})
        return JsonSchemaOptions(
            use_markdown_description=self.use_markdown_description if use_markdown is None else use_markdown,
            custom_scalar_schemas=scalars,
        )


def get_default_config_path() -> str:
    return utils.expand_path(DEFAULT_CONFIG_PATH)


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.
    """
    if config_path is None:
        config_path = get_default_config_path()

    if not utils.exists(config_path):
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return Config(
        default_url=data.get("default_url"),
        schema_cache_dir=data.get("schema_cache_dir", DEFAULT_SCHEMA_CACHE_DIR),
        use_markdown_description=bool(data.get("use_markdown_description", False)),
        custom_scalar_schemas=data.get("custom_scalar_schemas") or {},
    )


def create_example_config(path: Optional[str] = None) -> str:
    """Create an example config file, returning its path."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "default_url": "https://api.example.com/graphql",
        "schema_cache_dir": DEFAULT_SCHEMA_CACHE_DIR,
        "use_markdown_description": False,
        "custom_scalar_schemas": {
            "Date": {"type": "string", "format": "date"},
            "JSON": {"type": "object"},
        },
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)
    return path
