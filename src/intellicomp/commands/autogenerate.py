"""The ``autogenerate`` command -- derive a schema from a fish completion script."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from intellicomp.exceptions import IntellicompError
from intellicomp.output import error, success, suggest


def autogenerate_command(
    file: Path = typer.Argument(help="Fish completion script (*.fish) to convert."),
    output_directory: Optional[Path] = typer.Argument(
        None, help="Where to write <command>.yaml. Defaults to the schema directory."
    ),
) -> None:
    """Generate a schema from an existing fish completion script.

    Example::

        intellicomp autogenerate /usr/share/fish/completions/rsync.fish
        intellicomp autogenerate rsync.fish ./schemas
    """
    from intellicomp.config import resolve_schema_dir
    from intellicomp.schema.autogenerate import autogenerate_schema

    try:
        target_dir = output_directory or resolve_schema_dir()
        written = autogenerate_schema(file, target_dir)
    except IntellicompError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(f"Schema written to {written}")
    suggest("Re-run your shell hook to pick it up, e.g. eval \"$(intellicomp hook bash)\"")
