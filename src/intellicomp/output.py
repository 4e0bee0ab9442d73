"""Terminal output for intellicomp, split strictly between stdout and stderr.

Shells read ``intellicomp complete`` and ``intellicomp hook`` output verbatim,
so stdout is reserved for data: completion candidates, hook commands and
schema documents. Everything meant for a human (status, warnings, errors,
hints, debug traces) goes to stderr.

Rendering follows `clig.dev <https://clig.dev/>`_:

* Rich styling only when stdout is a terminal; plain text when piped.
* ``NO_COLOR`` (any value), ``TERM=dumb`` and ``--no-color`` switch colour off.
* ``--json`` / ``--plain`` force a format for structured output.

:class:`OutputManager` holds the resolved preferences and is installed once
per process by :func:`~intellicomp.app.main_callback` through
:func:`set_output`. Module-level helpers (:func:`print_lines`, :func:`error`,
...) forward to that instance.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Formats for structured stdout data.

    ``AUTO`` becomes ``RICH`` on an interactive, colour-capable terminal and
    ``PLAIN`` everywhere else.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Holds output preferences and the two Rich consoles.

    Args:
        format: Requested format; ``AUTO`` is resolved at construction.
        no_color: Force colour off in addition to the environment checks.
        quiet: Drop info, success and suggestion messages.
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        rich_stdout = self._format == OutputFormat.RICH
        self._stdout = Console(file=sys.stdout, no_color=self._no_color, force_terminal=rich_stdout)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        """Console bound to stderr; shared with the logging handler."""
        return self._stderr

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* and a newline to stdout untouched."""
        print(text, file=sys.stdout, flush=True)

    def print_lines(self, lines: list[str]) -> None:
        """Write one entry per line. An empty list writes nothing at all.

        Used for completion candidates and hook commands, where even a
        stray blank line would be read by the shell.
        """
        if lines:
            self.print_data("\n".join(lines))

    def format_response(self, data: Any, syntax: str = "json") -> None:
        """Render structured *data* in the active format.

        Args:
            data: A dict, list or pre-rendered string.
            syntax: Highlighting lexer for strings in Rich mode, e.g. ``"yaml"``.
        """
        if self._format == OutputFormat.JSON:
            if isinstance(data, str):
                try:
                    data = json.loads(data)
                except (json.JSONDecodeError, TypeError):
                    self.print_data(data)
                    return
            self.print_data(_to_json(data))
        elif self._format == OutputFormat.PLAIN:
            if isinstance(data, dict):
                self.print_lines([f"{key}\t{value}" for key, value in data.items()])
            elif isinstance(data, list):
                self.print_lines([str(item) for item in data])
            else:
                self.print_data(str(data))
        elif isinstance(data, (dict, list)):
            self._stdout.print(Syntax(_to_json(data), "json", theme="monokai", word_wrap=True))
        elif isinstance(data, str):
            self._stdout.print(Syntax(data, syntax, theme="monokai", word_wrap=True))
        else:
            self._stdout.print(str(data))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Render rows as a Rich table, a JSON array of objects, or TSV."""
        if self._format == OutputFormat.JSON:
            self.print_data(_to_json([dict(zip(headers, row)) for row in rows]))
            return
        if self._format == OutputFormat.PLAIN:
            self.print_lines(["\t".join(headers)] + ["\t".join(row) for row in rows])
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        """Status message. Hidden by ``--quiet``."""
        if not self._quiet:
            self._emit(message)

    def success(self, message: str) -> None:
        """Green confirmation. Hidden by ``--quiet``."""
        if not self._quiet:
            self._emit(message, style="green")

    def warning(self, message: str) -> None:
        """Yellow warning. Always shown."""
        self._emit(message, label="Warning:", label_style="yellow")

    def error(self, message: str) -> None:
        """Bold red error. Always shown."""
        self._emit(message, label="Error:", label_style="bold red")

    def suggest(self, message: str) -> None:
        """Dimmed next-step hint. Hidden by ``--quiet``."""
        if not self._quiet:
            self._emit(f"→ {message}", style="dim")

    def debug(self, message: str) -> None:
        """Debug trace. Shown only with ``--verbose``."""
        if self._verbose:
            self._emit(message, label="[debug]", label_style="dim", style="dim")

    def _emit(
        self,
        message: str,
        label: str = "",
        label_style: str = "",
        style: str = "",
    ) -> None:
        if self._no_color:
            text = f"{label} {message}" if label else message
            print(text, file=sys.stderr, flush=True)
            return

        markup = escape(message)
        if style:
            markup = f"[{style}]{markup}[/{style}]"
        if label:
            markup = f"[{label_style}]{escape(label)}[/{label_style}] {markup}"
        self._stderr.print(markup)


# ------------------------------------------------------------------ #
# Environment checks
# ------------------------------------------------------------------ #


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _is_tty() -> bool:
    """True when stdout is attached to a terminal."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


def configure_logging(output: OutputManager) -> None:
    """Route the ``intellicomp`` logger hierarchy to stderr.

    ``--verbose`` enables DEBUG records rendered by a
    :class:`~rich.logging.RichHandler`; otherwise only warnings pass.
    Calling it again replaces the previous handler.
    """
    logger = logging.getLogger("intellicomp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(
        RichHandler(
            console=output.stderr_console,
            show_time=False,
            show_path=False,
            markup=False,
        )
    )
    logger.setLevel(logging.DEBUG if output.is_verbose else logging.WARNING)
    logger.propagate = False


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the process-wide manager."""
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; tests call this between cases."""
    global _output
    _output = None


def format_response(data: Any, syntax: str = "json") -> None:
    get_output().format_response(data, syntax)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_lines(lines: list[str]) -> None:
    get_output().print_lines(lines)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
