"""Output formatting and reporting."""

from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from . import utils

console = Console()


def schema_kind(fragment: dict[str, Any]) -> str:
    """Short JSON Schema shape of a fragment, e.g. "string|null" or "$ref Filter"."""
    if "$ref" in fragment:
        return f"$ref {fragment['$ref'].rsplit('/', 1)[-1]}"
    if "oneOf" in fragment:
        return " | ".join(schema_kind(alt) for alt in fragment["oneOf"])
    if "enum" in fragment:
        return "enum(" + ", ".join("null" if v is None else str(v) for v in fragment["enum"]) + ")"
    type_ = fragment.get("type")
    if isinstance(type_, list):
        kind = "|".join(type_)
    else:
        kind = type_ or "any"
    if "items" in fragment:
        kind += f" of {schema_kind(fragment['items'])}"
    return kind


def emit(document: dict[str, Any], fmt: str, out: Optional[str] = None) -> None:
    """
    Output a variables JSON Schema document.

    Args:
        document: Generated schema document
        fmt: Output format ("json" or "console")
        out: Optional file path for json output
    """
    if fmt == "json":
        if out:
            utils.write_json(out, document)
        else:
            print(utils.to_json(document))
        return

    console.print("\n[bold cyan]Variables JSON Schema[/bold cyan]\n")

    properties = document.get("properties", {})
    required = set(document.get("required", []))
    if not properties:
        console.print("[dim]No variables declared[/dim]\n")
        return

    table = Table(show_header=True, box=None)
    table.add_column("Variable", style="cyan")
    table.add_column("GraphQL type")
    table.add_column("Schema", style="yellow")
    table.add_column("Required")

    for name, fragment in properties.items():
        # Descriptions always end with the rendered type signature
        signature = (fragment.get("description") or "").splitlines()[-1:] or [""]
        table.add_row(
            f"${name}",
            signature[0],
            schema_kind(fragment),
            "[green]✓[/green]" if name in required else "",
        )

    console.print(table)

    definitions = document.get("definitions", {})
    if definitions:
        console.print("\n[bold cyan]Definitions:[/bold cyan]\n")
        for type_name, definition in definitions.items():
            fields = len(definition.get("properties", {}))
            req = len(definition.get("required", []))
            console.print(f"  [blue]•[/blue] {type_name} [dim]({fields} fields, {req} required)[/dim]")

    if out:
        utils.write_json(out, document)
        console.print(f"\n[green]✓ Written to {out}[/green]")

    console.print()


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs (for schema pull, config init).

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
