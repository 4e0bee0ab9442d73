"""Per-shell hook generation.

``intellicomp hook <shell>`` prints the commands that register intellicomp as
the completer for every command with a schema in the schema directory; users
``eval`` that output from their shell's rc file.

Each supported shell implements the
:class:`~intellicomp.hooks.base.CompletableShell` interface, and callers pick
one through the closed :class:`~intellicomp.hooks.base.Shell` enum with
:func:`get_shell`.
"""

from __future__ import annotations

import shlex
import shutil
import sys
from pathlib import Path
from typing import Optional

from intellicomp.exceptions import InvalidUsageError
from intellicomp.hooks.base import CompletableShell, Shell
from intellicomp.hooks.bash import BashShell
from intellicomp.hooks.fish import FishShell

__all__ = ["BashShell", "CompletableShell", "FishShell", "Shell", "current_executable", "get_shell"]


def current_executable() -> str:
    """Shell-quoted command that runs this intellicomp installation."""
    argv0 = Path(sys.argv[0])
    if argv0.name.startswith("intellicomp") and argv0.exists():
        return shlex.quote(str(argv0.resolve()))
    found = shutil.which("intellicomp")
    if found:
        return shlex.quote(found)
    return f"{shlex.quote(sys.executable)} -m intellicomp"


def get_shell(shell: Shell, executable: Optional[str] = None) -> CompletableShell:
    """Return the hook generator for *shell*.

    Raises:
        InvalidUsageError: If *shell* has no hook support.
    """
    if shell is Shell.BASH:
        return BashShell(executable or current_executable())
    if shell is Shell.FISH:
        return FishShell()
    raise InvalidUsageError(
        f"Unsupported shell: {shell.value}. Supported: bash, fish"
    )
