"""Typer application and CLI entry point for intellicomp.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``complete``, ``hook``, ``autogenerate``, ``schema``,
``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`intellicomp.config`: Schema directory and global configuration.
    :mod:`intellicomp.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from intellicomp import __version__
from intellicomp.exit_codes import EXIT_GENERIC_FAILURE

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="intellicomp",
    help="Schema-driven tab completion for bash and fish.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# ------------------------------------------------------------------ #
# Built-in commands
# ------------------------------------------------------------------ #

from intellicomp.commands.autogenerate import autogenerate_command  # noqa: E402
from intellicomp.commands.complete import complete_command  # noqa: E402
from intellicomp.commands.config import config_app  # noqa: E402
from intellicomp.commands.hook import hook_command  # noqa: E402
from intellicomp.commands.schema import schema_app  # noqa: E402

app.command(
    "complete",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)(complete_command)
app.command("hook")(hook_command)
app.command("autogenerate")(autogenerate_command)
app.add_typer(schema_app, name="schema", help="Inspect and validate completion schemas.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"intellicomp {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~intellicomp.output.OutputManager` from
    CLI flags (falling back to ``output.format`` in the global config),
    routes the ``intellicomp`` logger to stderr, and stores the shared flags
    in the Typer context.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
    """
    from intellicomp.output import OutputFormat, OutputManager, configure_logging, set_output

    fmt = OutputFormat.AUTO
    config_problem = None
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt, config_problem = _configured_format()

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    configure_logging(output)
    if config_problem:
        output.warning(config_problem)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["verbose"] = verbose


def _configured_format() -> tuple[Any, Optional[str]]:
    """Return the output format from the global config and any load problem.

    Problems come back as a message for the caller to warn about; they are
    never raised.
    """
    from intellicomp.config import load_global_config
    from intellicomp.exceptions import ConfigError
    from intellicomp.output import OutputFormat

    try:
        configured = load_global_config().output.format
    except ConfigError as exc:
        return OutputFormat.AUTO, str(exc)
    try:
        return OutputFormat(configured), None
    except ValueError:
        return OutputFormat.AUTO, f"Ignoring unknown output.format '{configured}' in config"


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from intellicomp.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``intellicomp`` console script.

    Unhandled :class:`~intellicomp.exceptions.IntellicompError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from intellicomp.exceptions import IntellicompError
        from intellicomp.output import error

        if isinstance(exc, IntellicompError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            logger.debug("Unhandled exception", exc_info=exc)
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
