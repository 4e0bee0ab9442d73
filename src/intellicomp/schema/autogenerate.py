"""Generate a completion schema from an existing fish completion script.

Fish completion scripts are a sequence of ``complete`` invocations, one per
option::

    complete -c fla -l path -s C -d 'Repository path' -r -F
    complete -c fla -l format -d 'Output format' -x -a 'json plain'

Each line is split shell-style and parsed with the same option grammar fish
uses, then turned into a :class:`~intellicomp.models.KeywordArgument`:

* name: the long option, else the old-style option, else the short option
  (which then is not repeated as a shorthand);
* style: ``Standard`` for long options, ``Old`` for anything else;
* value type: ``Enumeration`` of the static ``-a`` words, ``Path`` when
  files are offered (``-F``, or ``-r`` without ``-f``), ``String`` when a
  parameter is required, ``Flag`` otherwise.
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Any, Optional

import click

from intellicomp.exceptions import SchemaError
from intellicomp.models import (
    Command,
    EnumerationValue,
    FlagValue,
    KeywordArgument,
    KeywordArgumentStyle,
    PathValue,
    StringValue,
    ValueType,
)
from intellicomp.schema.loader import save_schema

logger = logging.getLogger(__name__)

# fish accepts `\'` inside single quotes; POSIX splitting does not.
_APOSTROPHE_MARKER = "<ApO-MaRkEr>"
_ESCAPED_APOSTROPHE = "\\'"


def _fish_complete_command() -> click.Command:
    """Build a click command mirroring the options of fish's ``complete``."""

    def _collect(**kwargs: Any) -> dict[str, Any]:
        return kwargs

    return click.Command(
        "complete",
        callback=_collect,
        context_settings={
            "ignore_unknown_options": True,
            "allow_extra_args": True,
            "help_option_names": [],
        },
        params=[
            click.Option(["-c", "--command"]),
            click.Option(["-s", "--short-option"]),
            click.Option(["-l", "--long-option"]),
            click.Option(["-o", "--old-option"]),
            click.Option(["-d", "--description"], default=""),
            click.Option(["-a", "--arguments"]),
            click.Option(["-n", "--condition"]),
            click.Option(["-w", "--wraps"]),
            click.Option(["-r", "--require-parameter"], is_flag=True),
            click.Option(["-x", "--exclusive"], is_flag=True),
            click.Option(["-f", "--no-files"], is_flag=True),
            click.Option(["-F", "--force-files"], is_flag=True),
        ],
    )


def _split_line(line: str) -> list[str]:
    masked = line.replace(_ESCAPED_APOSTROPHE, _APOSTROPHE_MARKER)
    try:
        words = shlex.split(masked)
    except ValueError as exc:
        raise SchemaError(f"Cannot split completion line {line!r}: {exc}") from exc
    return [word.replace(_APOSTROPHE_MARKER, "'") for word in words]


def _parse_complete_line(line: str) -> dict[str, Any]:
    words = _split_line(line)
    command = _fish_complete_command()
    try:
        with command.make_context("complete", words[1:]) as ctx:
            return command.invoke(ctx)
    except click.ClickException as exc:
        raise SchemaError(f"Cannot parse completion line {line!r}: {exc.format_message()}") from exc


def _value_type(options: dict[str, Any]) -> ValueType:
    arguments: Optional[str] = options["arguments"]
    if arguments and "(" not in arguments and "$" not in arguments:
        try:
            return EnumerationValue(content=shlex.split(arguments))
        except ValueError:
            logger.debug("Cannot split static arguments %r", arguments)
    if options["force_files"] or (
        options["require_parameter"] and not options["no_files"]
    ):
        return PathValue()
    if options["require_parameter"] or options["exclusive"] or arguments:
        return StringValue()
    return FlagValue()


def schema_from_fish_script(text: str) -> tuple[str, Command]:
    """Convert the text of a fish completion script into a schema.

    Args:
        text: Contents of a ``*.fish`` completion script.

    Returns:
        A ``(binary_name, Command)`` tuple. Later definitions of the same
        option replace earlier ones.

    Raises:
        SchemaError: If a ``complete`` line cannot be parsed or the script
            names no command.
    """
    keyword_arguments: dict[str, KeywordArgument] = {}
    binary_name: Optional[str] = None

    for line in text.splitlines():
        line = line.strip()
        if not line.startswith("complete"):
            continue

        options = _parse_complete_line(line)
        if options["command"]:
            binary_name = options["command"]

        shorthand: Optional[str] = options["short_option"]
        if options["long_option"]:
            name = options["long_option"]
            style = KeywordArgumentStyle.STANDARD
        elif options["old_option"]:
            name = options["old_option"]
            style = KeywordArgumentStyle.OLD
        elif shorthand:
            name, shorthand = shorthand, None
            style = KeywordArgumentStyle.OLD
        else:
            logger.debug("Skipping completion line without an option: %s", line)
            continue

        keyword_arguments[name] = KeywordArgument(
            name=name,
            description=options["description"] or "",
            shorthand=shorthand,
            style=style,
            value_type=_value_type(options),
        )

    if binary_name is None:
        raise SchemaError("No 'complete -c <command>' lines found in script")

    return binary_name, Command(keyword_arguments=list(keyword_arguments.values()))


def autogenerate_schema(file: Path, output_directory: Path) -> Path:
    """Convert the fish completion script *file* into ``<binary>.yaml``.

    Args:
        file: Path to a ``*.fish`` completion script.
        output_directory: Directory the schema is written to (created if
            missing).

    Returns:
        Path of the written schema file.

    Raises:
        SchemaError: If *file* is not a fish script or cannot be converted.
    """
    if file.suffix != ".fish":
        raise SchemaError(
            f"Unsupported completion script {file}: only fish scripts (*.fish) are supported"
        )
    try:
        text = file.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaError(f"Failed to read {file}: {exc}") from exc

    binary_name, command = schema_from_fish_script(text)
    target = output_directory / f"{binary_name}.yaml"
    save_schema(command, target)
    logger.debug("Wrote %d keyword argument(s) to %s", len(command.keyword_arguments), target)
    return target
