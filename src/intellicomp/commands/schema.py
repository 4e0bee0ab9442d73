"""Schema commands -- list, show, and validate completion schemas.

Provides the ``intellicomp schema`` sub-command group. Schemas are addressed
either by command name (looked up as ``<name>.yaml`` in the schema
directory) or directly by file path, URL, or ``-`` for stdin.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from intellicomp.exceptions import IntellicompError, SchemaError
from intellicomp.output import (
    OutputFormat,
    error,
    format_response,
    get_output,
    info,
    print_table,
    success,
)

schema_app = typer.Typer(no_args_is_help=True)


def resolve_schema_source(value: str, schema_dir: Optional[str] = None) -> str:
    """Turn a schema name or location into something :func:`load_schema` accepts.

    URLs, ``-`` and existing files are returned unchanged. Anything else is
    treated as a command name and looked up in the schema directory.

    Raises:
        SchemaError: If *value* is a bare name with no schema file.
    """
    from intellicomp.config import resolve_schema_dir
    from intellicomp.schema import list_schemas

    if value == "-" or value.startswith(("http://", "https://")):
        return value
    if Path(value).expanduser().is_file():
        return str(Path(value).expanduser())
    if "/" in value:
        raise SchemaError(f"Schema file not found: {value}")

    directory = resolve_schema_dir(schema_dir)
    schemas = list_schemas(directory)
    if value not in schemas:
        raise SchemaError(f"No schema named '{value}' in {directory}")
    return str(schemas[value])


@schema_app.command("list")
def schema_list(
    schema_dir: Optional[str] = typer.Option(
        None, "--schema-dir", help="Directory holding <command>.yaml schemas."
    ),
) -> None:
    """List the schemas in the schema directory.

    Schemas that fail to load are still listed, with ``invalid`` in place
    of their argument counts.

    Example::

        intellicomp schema list
        intellicomp --json schema list
    """
    from intellicomp.config import resolve_schema_dir
    from intellicomp.schema import list_schemas, load_schema

    try:
        directory = resolve_schema_dir(schema_dir)
    except IntellicompError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    schemas = list_schemas(directory)
    if not schemas:
        info(f"No schemas found in {directory}")
        return

    rows: list[list[str]] = []
    for name, path in schemas.items():
        try:
            command = load_schema(path)
        except SchemaError:
            rows.append([name, str(path), "invalid", "invalid"])
            continue
        rows.append([
            name,
            str(path),
            str(len(command.keyword_arguments)),
            str(len(command.positional_arguments)),
        ])

    print_table(["Command", "Schema", "Keyword", "Positional"], rows, title="Schemas")


@schema_app.command("show")
def schema_show(
    schema: str = typer.Argument(help="Command name, schema file, URL, or '-'."),
    schema_dir: Optional[str] = typer.Option(
        None, "--schema-dir", help="Directory to look schema names up in."
    ),
) -> None:
    """Print a schema in its normalised form.

    YAML by default; ``--json`` prints the same document as JSON.
    """
    from intellicomp.schema import dump_schema, load_schema

    try:
        command = load_schema(resolve_schema_source(schema, schema_dir))
    except IntellicompError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if get_output().format == OutputFormat.JSON:
        format_response(command.model_dump(mode="json", exclude_none=True))
    else:
        format_response(dump_schema(command).rstrip("\n"), syntax="yaml")


@schema_app.command("validate")
def schema_validate(
    schema: str = typer.Argument(help="Command name, schema file, URL, or '-'."),
    schema_dir: Optional[str] = typer.Option(
        None, "--schema-dir", help="Directory to look schema names up in."
    ),
) -> None:
    """Check that a schema loads, reporting the first problem found.

    Example::

        intellicomp schema validate ./git.yaml
        cat git.yaml | intellicomp schema validate -
    """
    from intellicomp.schema import load_schema

    try:
        command = load_schema(resolve_schema_source(schema, schema_dir))
    except IntellicompError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(
        f"Valid schema: {len(command.keyword_arguments)} keyword, "
        f"{len(command.positional_arguments)} positional argument(s)"
    )


@schema_app.command("json-schema")
def schema_json_schema() -> None:
    """Print the JSON Schema describing the schema file format.

    Useful for editor validation of hand-written schemas.
    """
    from intellicomp.schema.loader import command_json_schema

    format_response(command_json_schema())
