"""Bash hook: delegate completion of each command to ``intellicomp complete``.

For every schema ``<dir>/git.yaml`` one line is emitted::

    complete -C '/usr/bin/intellicomp complete bash /home/me/.local/share/intellicomp/schemas/git.yaml --' git

``complete -C`` makes bash run that command on each tab press with
``COMP_LINE`` and ``COMP_POINT`` set, and read candidates from its stdout.
The trailing ``--`` keeps the words bash appends (command name, current
word, previous word) from being parsed as options of ``complete``.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from intellicomp.hooks.base import CompletableShell


class BashShell(CompletableShell):
    """Generates ``complete -C`` registrations.

    Args:
        executable: Shell-quoted command prefix that runs intellicomp.
    """

    def __init__(self, executable: str) -> None:
        self.executable = executable

    def generate_completions_from_schema(self, schema_file: Path) -> list[str]:
        completer = f"{self.executable} complete bash {shlex.quote(str(schema_file))} --"
        return [f"complete -C {shlex.quote(completer)} {shlex.quote(schema_file.stem)}"]
