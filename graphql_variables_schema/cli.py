"""CLI for gql-vars-schema."""

import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import config, parser, schema_loader, utils, variables
from .jsonschema import get_variables_json_schema
from .report import emit, print_kv

app = typer.Typer(help="Generate JSON Schema for GraphQL operation variables")
schema_app = typer.Typer(help="Schema operations")
config_app = typer.Typer(help="Configuration")
app.add_typer(schema_app, name="schema")
app.add_typer(config_app, name="config")

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class GenerateOptions:
    """Options for generate command."""

    url: Optional[str] = None
    schema_file: Optional[str] = None
    token: Optional[str] = None
    operation: Optional[str] = None
    use_markdown_description: Optional[bool] = None
    scalar_schemas_file: Optional[str] = None
    output: Literal["console", "json"] = "json"
    out: Optional[str] = None
    validate: bool = True


def setup_logging(verbose: bool = False) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def fail(e: Exception, debug: bool) -> None:
    console.print(f"[red]Error: {e}[/red]")
    if debug:
        raise e
    raise typer.Exit(1)


@app.command("generate")
def generate_cmd(
    query_file: str = typer.Argument(..., help="GraphQL operation file"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    schema: Optional[str] = typer.Option(None, help="Schema file (introspection JSON or SDL)"),
    token: Optional[str] = typer.Option(None, help="API token"),
    operation: Optional[str] = typer.Option(None, help="Only collect variables of this operation"),
    markdown: Optional[bool] = typer.Option(
        None, "--markdown/--no-markdown", help="Add markdownDescription fields"
    ),
    scalar_schemas: Optional[str] = typer.Option(
        None, help="JSON/YAML file mapping custom scalar names to JSON Schema"
    ),
    output: str = typer.Option("json", help="Output format (json|console)"),
    out: Optional[str] = typer.Option(None, help="Write the JSON Schema to this file"),
    validate: bool = typer.Option(True, "--validate/--no-validate", help="Validate operation against schema"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress"),
    debug: bool = typer.Option(False, "--debug", help="Re-raise errors with traceback"),
):
    """Generate a JSON Schema describing the variables of a GraphQL operation."""
    setup_logging(verbose)
    try:
        opts = GenerateOptions(
            url=url,
            schema_file=schema,
            token=token,
            operation=operation,
            use_markdown_description=markdown,
            scalar_schemas_file=scalar_schemas,
            output=output,
            out=out,
            validate=validate,
        )
        document = run_generate(query_file, opts)
        emit(document, opts.output, opts.out)
    except typer.Exit:
        raise
    except Exception as e:
        fail(e, debug)


def run_generate(query_path: str, opts: GenerateOptions) -> dict[str, Any]:
    """
    Build the variables JSON Schema for an operation file.

    Args:
        query_path: Path to GraphQL operation file
        opts: Generation options

    Returns:
        JSON Schema document
    """
    cfg = config.load()

    url = opts.url or cfg.default_url
    if opts.schema_file:
        url = None
    profile = schema_loader.load_schema(
        url=url, schema_file=opts.schema_file, cfg=cfg, allow_cache=True, token=opts.token
    )
    schema = parser.build_schema(profile.source)

    doc = parser.parse_query(utils.read_text(query_path))

    if opts.validate:
        for error in parser.validate_query(doc, schema):
            logger.warning("Validation: %s", error.message)

    variable_to_type = variables.collect_variables(schema, doc, opts.operation)
    logger.info("Collected %d variables from %s", len(variable_to_type), query_path)

    scalar_overrides = utils.read_mapping(opts.scalar_schemas_file) if opts.scalar_schemas_file else None
    json_options = cfg.json_schema_options(
        use_markdown_description=opts.use_markdown_description,
        custom_scalar_schemas=scalar_overrides,
    )
    return get_variables_json_schema(variable_to_type, json_options)


@schema_app.command("pull")
def schema_pull(
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    token: Optional[str] = typer.Option(None, help="API token"),
    out: Optional[str] = typer.Option(None, help="Output file path"),
    debug: bool = typer.Option(False, "--debug", help="Re-raise errors with traceback"),
):
    """Fetch and cache a GraphQL schema via introspection."""
    setup_logging()
    try:
        cfg = config.load()
        full_url = url or cfg.default_url

        if not full_url:
            console.print("[red]Error: No URL provided. Use --url or set default_url in config.[/red]")
            raise typer.Exit(1)

        console.print(f"[cyan]Fetching schema from {full_url}...[/cyan]")
        profile = schema_loader.load_schema(url=full_url, cfg=cfg, allow_cache=True, refresh=True, token=token)

        if out:
            utils.write_json(out, profile.schema_json)
            path = out
        else:
            path = schema_loader.cache_path_for(profile.url, cfg)

        print_kv("Schema pulled", {"url": profile.url, "hash": profile.hash, "path": path})
    except typer.Exit:
        raise
    except Exception as e:
        fail(e, debug)


@config_app.command("init")
def config_init(
    path: Optional[str] = typer.Option(None, help="Config file path"),
):
    """Write an example configuration file."""
    written = config.create_example_config(path)
    print_kv("Config written", {"path": written})


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
