"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~intellicomp.exceptions.IntellicompError` subclass.
Shell hooks only look at stdout, but wrappers and tests can inspect the exit
code to tell a bad request apart from a broken schema without parsing stderr.

Example::

    $ COMP_LINE="git --enum" COMP_POINT=99 intellicomp complete bash git.yaml
    $ echo $?
    3   # EXIT_COMPLETION_FAILURE -- cursor out of range
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unsupported shell."""

EXIT_COMPLETION_FAILURE = 3
"""Completion candidates could not be computed for the given line."""

EXIT_SCHEMA_ERROR = 4
"""A schema document could not be loaded, parsed or validated."""
