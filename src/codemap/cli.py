"""codemap CLI entry point."""

import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from codemap import __version__, cli_logger, exit_codes
from codemap.config import get_schema_dir
from codemap.errors import SchemaError, handle_cli_error
from codemap.manifest_schema import ProjectManifest
from codemap.module_map_schema import ModuleMap
from codemap.registry import SchemaRegistry
from codemap.schema_export import export_json_schema, schema_kinds, write_json_schemas

app = typer.Typer(
    name="codemap",
    help="Validate and inspect versioned codebase module maps and project manifests.",
    no_args_is_help=True,
)

console = Console()

STDIN_PATH = "-"


def _read_document(path: str) -> bytes:
    """Read raw document bytes from a file, or from stdin when path is '-'.

    Decoding is left to the registry so that bad encodings are reported
    as invalid documents.
    """
    if path == STDIN_PATH:
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def load_document(path: str, manifest: bool) -> tuple[ModuleMap, ProjectManifest | None]:
    """Read and load a document for a CLI command.

    Returns:
        Tuple of (module map, manifest). The manifest is None unless
        manifest is True, in which case the module map is the one it wraps.

    Raises:
        typer.Exit: With the exit code matching the load failure.
    """
    registry = SchemaRegistry()
    try:
        raw = _read_document(path)
        if manifest:
            project_manifest = registry.load_manifest(raw)
            return project_manifest.project, project_manifest
        return registry.load(raw), None
    except (SchemaError, OSError) as e:
        raise typer.Exit(handle_cli_error(e)) from e


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        registry = SchemaRegistry()
        cli_logger.info(f"codemap v{__version__} (schema {registry.version()})")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show codemap version and exit.",
    ),
) -> None:
    """Validate and inspect versioned codebase module maps and project manifests."""


@app.command("schema-version")
def schema_version() -> None:
    """Print the schema version this build supports."""
    print(SchemaRegistry().version())


@app.command()
def validate(
    path: Annotated[
        str,
        typer.Argument(help="Document to validate, or '-' to read stdin."),
    ],
    manifest: Annotated[
        bool,
        typer.Option("--manifest", "-m", help="Treat the document as a project manifest."),
    ] = False,
) -> None:
    """Validate a document against the supported schema version.

    Exits non-zero if the document is malformed, declares a malformed
    schema version, or declares an incompatible major version.
    """
    module_map, _ = load_document(path, manifest)
    kind = "project manifest" if manifest else "module map"
    cli_logger.success(
        f"Valid {kind} for '{escape(module_map.project.name)}' "
        f"(schema {escape(module_map.schema_version)}, {len(module_map.modules)} modules)"
    )
    raise typer.Exit(exit_codes.SUCCESS)


@app.command()
def show(
    path: Annotated[
        str,
        typer.Argument(help="Document to show, or '-' to read stdin."),
    ],
    manifest: Annotated[
        bool,
        typer.Option("--manifest", "-m", help="Treat the document as a project manifest."),
    ] = False,
) -> None:
    """Show the modules and groups of a document."""
    module_map, project_manifest = load_document(path, manifest)
    project = module_map.project

    cli_logger.info(
        f"[bold]{escape(project.name)}[/bold] "
        f"({project.project_type.value}, {escape(project.tech_stack.primary_language)})"
    )

    if not module_map.modules:
        cli_logger.info("No modules defined.")
    else:
        table = Table(show_header=True, header_style="bold")
        table.add_column("ID", style="cyan")
        table.add_column("LANGUAGE")
        table.add_column("PRIORITY", justify="right")
        table.add_column("ISSUES", justify="right")
        table.add_column("GROUP")

        for module in module_map.modules:
            group = module_map.find_group_containing(module.id)
            table.add_row(
                escape(module.id),
                escape(module.primary_language),
                f"{module.metrics.priority_score():.2f}",
                str(len(module.known_issues)),
                escape(group.id) if group else "-",
            )
        console.print(table)

    if project_manifest is not None:
        cli_logger.dim(
            f"{len(project_manifest.rules)} rules, "
            f"{len(project_manifest.skills)} skills, "
            f"{len(project_manifest.agents)} agents"
        )


@app.command("export-schema")
def export_schema(
    kind: Annotated[
        str | None,
        typer.Argument(help=f"Document kind to print ({', '.join(schema_kinds())})."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to write all schemas to. Defaults to CODEMAP_SCHEMA_DIR or ./schemas",
        ),
    ] = None,
) -> None:
    """Export JSON Schemas of the document formats.

    With KIND, prints that schema to stdout. Without it, writes every
    schema to the output directory.
    """
    if kind is not None and output is not None:
        cli_logger.error("Cannot specify both KIND and --output")
        raise typer.Exit(exit_codes.INVALID_ARGS)

    if kind is not None:
        if kind not in schema_kinds():
            cli_logger.error(f"Unknown schema kind '{escape(kind)}'")
            cli_logger.dim(f"  Known kinds: {', '.join(schema_kinds())}")
            raise typer.Exit(exit_codes.INVALID_ARGS)
        print(json.dumps(export_json_schema(kind), indent=2))
        raise typer.Exit(exit_codes.SUCCESS)

    target = output if output else get_schema_dir()
    for path in write_json_schemas(target):
        cli_logger.success(f"Wrote {escape(str(path))}")
    raise typer.Exit(exit_codes.SUCCESS)


def main_cli() -> None:
    """CLI entry point with top-level exception handling.

    Wraps the Typer app to catch any unhandled exceptions and format them
    as clean error messages instead of raw tracebacks.
    """
    try:
        app()
    except Exception as e:
        sys.exit(handle_cli_error(e))


if __name__ == "__main__":
    main_cli()
