"""The ``complete`` command -- print completion candidates for a shell.

Registered by the bash hook as ``complete -C "intellicomp complete bash
<schema> --" <command>``. Bash then runs it on every tab press with the line in
``COMP_LINE`` and the cursor offset in ``COMP_POINT``, appending the command
name, the current word and the previous word as extra arguments (ignored
here). Candidates are written to stdout one per line; on failure stdout stays
empty and the error goes to stderr.
"""

from __future__ import annotations

from typing import Optional

import typer

from intellicomp.exceptions import IntellicompError, InvalidUsageError
from intellicomp.hooks import Shell
from intellicomp.output import debug, error, print_lines


def complete_command(
    shell: Shell = typer.Argument(help="Shell requesting completions (bash, fish)."),
    schema: str = typer.Argument(
        help="Schema file, URL, or name of a schema in the schema directory."
    ),
    extra: Optional[list[str]] = typer.Argument(None, hidden=True),
    line: Optional[str] = typer.Option(
        None, "--line", envvar="COMP_LINE", help="Full command line typed so far."
    ),
    point: Optional[int] = typer.Option(
        None, "--point", envvar="COMP_POINT", help="Cursor offset within the line."
    ),
    schema_dir: Optional[str] = typer.Option(
        None, "--schema-dir", help="Directory to look schema names up in."
    ),
) -> None:
    """Print completion candidates for the line being typed.

    Example::

        COMP_LINE="git --enum ba" COMP_POINT=13 intellicomp complete bash git.yaml
        intellicomp complete fish git --line "git --enum " --point 11
    """
    from intellicomp.commands.schema import resolve_schema_source
    from intellicomp.completion import generate_completions
    from intellicomp.schema import load_schema

    try:
        if shell not in (Shell.BASH, Shell.FISH):
            raise InvalidUsageError(
                f"Unsupported shell: {shell.value}. Supported: bash, fish"
            )
        if line is None or point is None:
            raise InvalidUsageError(
                "No command line to complete: set COMP_LINE and COMP_POINT "
                "or pass --line and --point"
            )

        command = load_schema(resolve_schema_source(schema, schema_dir))
        debug(f"Completing {line!r} at {point} for {shell.value}")
        candidates = generate_completions(command, line, point)
    except IntellicompError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    print_lines(candidates)
