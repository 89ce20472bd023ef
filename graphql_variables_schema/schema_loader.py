"""Schema loading and caching."""

import logging
from dataclasses import asdict, dataclass
from typing import Optional, Union

import requests

from . import parser, utils
from .config import Config

logger = logging.getLogger(__name__)


@dataclass
class SchemaProfile:
    """Schema profile with metadata."""

    url: str
    fetched_at: str
    hash: str
    schema_json: dict
    schema_sdl: Optional[str] = None

    @property
    def source(self) -> Union[dict, str]:
        """SDL text when loaded from an SDL file, introspection JSON otherwise."""
        return self.schema_sdl if self.schema_sdl is not None else self.schema_json


def load_schema(
    url: Optional[str] = None,
    schema_file: Optional[str] = None,
    cfg: Optional[Config] = None,
    allow_cache: bool = True,
    refresh: bool = False,
    token: Optional[str] = None,
) -> SchemaProfile:
    """
    Load GraphQL schema from file or via introspection.

    Args:
        url: GraphQL endpoint URL
        schema_file: Path to an introspection JSON or SDL file
        cfg: Configuration object
        allow_cache: Whether to use cached schema
        refresh: Force refresh even if cached
        token: Optional bearer token for authentication

    Returns:
        SchemaProfile with loaded schema

    Raises:
        ValueError: If neither url nor schema_file provided
    """
    if schema_file:
        if parser.is_sdl_path(schema_file):
            sdl = utils.read_text(schema_file)
            return SchemaProfile(
                url=f"file://{schema_file}",
                fetched_at=utils.now_iso(),
                hash=utils.sha256(sdl),
                schema_json={},
                schema_sdl=sdl,
            )
        js = utils.read_json(schema_file)
        return SchemaProfile(
            url=f"file://{schema_file}",
            fetched_at=utils.now_iso(),
            hash=utils.sha256(js),
            schema_json=js,
        )

    if not url:
        raise ValueError("No URL or schema file provided")

    cfg = cfg or Config()
    cache_path = cache_path_for(url, cfg)

    if allow_cache and utils.exists(cache_path) and not refresh:
        logger.info("Using cached schema %s", cache_path)
        return SchemaProfile(**utils.read_json(cache_path))

    js = introspect(url, token)
    prof = SchemaProfile(
        url=url,
        fetched_at=utils.now_iso(),
        hash=utils.sha256(js),
        schema_json=js,
    )

    utils.ensure_dir(utils.dirname(cache_path))
    utils.write_json(cache_path, asdict(prof))
    logger.info("Cached schema for %s at %s", url, cache_path)

    return prof


def introspect(graphql_url: str, token: Optional[str] = None) -> dict:
    """
    Introspect GraphQL schema via HTTP.

    Args:
        graphql_url: GraphQL endpoint URL
        token: Optional bearer token for authentication

    Returns:
        Introspection result as dict

    Raises:
        RuntimeError: If introspection fails
    """
    headers = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    logger.info("Introspecting %s", graphql_url)
    resp = requests.post(graphql_url, json={"query": utils.INTROSPECTION_QUERY}, headers=headers, timeout=30)

    if resp.status_code != 200:
        raise RuntimeError(f"Introspection failed with status {resp.status_code}")

    payload = utils.safe_json_response(resp, "GraphQL introspection")

    if payload.get("errors"):
        raise RuntimeError(f"Introspection errors: {payload['errors']}")

    return payload["data"]


def cache_path_for(url: str, cfg: Config) -> str:
    """Get cache path for a schema URL."""
    host = utils.sanitize_host(url)
    return utils.join(cfg.schema_cache_dir, f"{host}.json")
