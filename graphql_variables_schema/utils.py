"""File, JSON and URL helpers."""

import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from graphql import get_introspection_query

# Standard GraphQL introspection query
INTROSPECTION_QUERY = get_introspection_query()


# File system utilities
def ensure_dir(path: str) -> None:
    """Ensure directory exists, creating it if necessary."""
    Path(path).mkdir(parents=True, exist_ok=True)


def exists(path: str) -> bool:
    """Check if file exists."""
    return Path(path).exists()


def dirname(path: str) -> str:
    return str(Path(path).parent)


def join(*parts: str) -> str:
    return str(Path(*parts))


def expand_path(path: str) -> str:
    """Expand ~ in path."""
    return str(Path(path).expanduser())


# File I/O
def read_text(path: str) -> str:
    return Path(path).read_text()


def read_json(path: str) -> dict:
    with open(path) as f:
        return json.load(f)


def read_mapping(path: str) -> dict:
    """
    Read a JSON or YAML file that must contain a mapping.

    Raises:
        ValueError: If the top-level value is not a mapping
    """
    with open(path) as f:
        if path.lower().endswith((".yaml", ".yml")):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(data).__name__}")
    return data


def write_json(path: str, data: Any) -> None:
    """Write JSON file with pretty formatting."""
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
        f.write("\n")


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2)


# Hashing & timestamps
def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def sha256(obj: Any) -> str:
    """Short SHA-256 of an object's canonical JSON."""
    s = json.dumps(obj, sort_keys=True)
    return hashlib.sha256(s.encode()).hexdigest()[:16]


def sanitize_host(url: str) -> str:
    """Extract sanitized hostname from URL for use in filenames."""
    parsed = urlparse(url)
    host = parsed.netloc or parsed.path
    host = host.split(":")[0]
    return host.replace("/", "_")


def safe_json_response(response, context: str = "GraphQL request") -> dict:
    """
    Parse JSON from an HTTP response with a readable error.

    Raises:
        RuntimeError: If the body is not JSON
    """
    try:
        return response.json()
    except json.JSONDecodeError as e:
        body_preview = response.text[:300]
        if len(response.text) > 300:
            body_preview += "..."
        content_type = response.headers.get("Content-Type", "unknown")
        raise RuntimeError(
            "\n".join([
                f"{context} failed - server returned non-JSON response",
                "",
                f"  URL: {response.url}",
                f"  Status: {response.status_code}",
                f"  Content-Type: {content_type}",
                "",
                "  Response preview:",
                f"  {body_preview}",
                "",
                "  Suggestions:",
                "  - Verify the URL points to a GraphQL endpoint",
                "  - Authentication may be required - try adding --token YOUR_TOKEN",
                "",
                f"  Original JSON error: {e}",
            ])
        ) from e
