"""The ``hook`` command -- print shell registration commands.

Meant to be evaluated from the user's shell startup file::

    # ~/.bashrc
    eval "$(intellicomp hook bash)"

    # ~/.config/fish/config.fish
    intellicomp hook fish | source
"""

from __future__ import annotations

from typing import Optional

import typer

from intellicomp.exceptions import IntellicompError
from intellicomp.hooks import Shell, get_shell
from intellicomp.output import debug, error, print_data, print_lines, warning


def hook_command(
    shell: Shell = typer.Argument(help="Shell to generate the hook for (bash, fish)."),
    schema_dir: Optional[str] = typer.Option(
        None, "--schema-dir", help="Directory holding <command>.yaml schemas."
    ),
) -> None:
    """Print the commands that register intellicomp with a shell.

    One registration is emitted per schema in the schema directory, which
    is created if it does not exist yet.
    """
    from intellicomp.config import resolve_schema_dir

    try:
        directory = resolve_schema_dir(schema_dir)
        directory.mkdir(parents=True, exist_ok=True)
        debug(f"Schema directory: {directory}")

        commands = get_shell(shell).generate_completion_commands(directory)
    except IntellicompError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except OSError as exc:
        error(f"Cannot use schema directory: {exc}")
        raise typer.Exit(code=1) from None

    if not commands:
        warning(f"No schemas found in {directory}")

    print_lines(commands)
    print_data("echo 'Intellicomp configured!'")
