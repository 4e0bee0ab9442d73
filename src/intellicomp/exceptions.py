"""Exception hierarchy for intellicomp.

All exceptions inherit from :class:`IntellicompError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`intellicomp.exit_codes`.
The top-level error handler in :func:`intellicomp.app.main` catches
``IntellicompError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    IntellicompError (exit 1)
    +-- InvalidUsageError              (exit 2)
    +-- CompletionError                (exit 3)
    |   +-- CursorOutOfRangeError
    |   +-- UnparseableCommandError
    |   +-- ArgumentMissingValueError
    |   +-- PathCompletionError
    +-- SchemaError                    (exit 4)
    +-- ConfigError                    (exit 1)
"""

from intellicomp.exit_codes import (
    EXIT_COMPLETION_FAILURE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SCHEMA_ERROR,
)


class IntellicompError(Exception):
    """Base exception for all intellicomp errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`intellicomp.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(IntellicompError):
    """Raised for invalid CLI arguments or a shell without hook support."""

    exit_code = EXIT_INVALID_USAGE


class CompletionError(IntellicompError):
    """Base class for failures while computing completion candidates.

    None of these are transient: an identical request always fails the same
    way, so callers report them instead of retrying.
    """

    exit_code = EXIT_COMPLETION_FAILURE


class CursorOutOfRangeError(CompletionError):
    """Raised when the cursor offset lies outside the supplied line.

    Args:
        offset: The offending cursor offset.
    """

    def __init__(self, offset: int):
        super().__init__(
            f"The cursor is at position {offset} which is out of range for the input."
        )
        self.offset = offset


class UnparseableCommandError(CompletionError):
    """Raised when the line cannot be split into words, even after quote repair."""

    def __init__(self, message: str = "The command input is invalid"):
        super().__init__(message)


class ArgumentMissingValueError(CompletionError):
    """Raised when a value-taking keyword argument is the last token of the line.

    Args:
        name: The keyword argument token as typed (e.g. ``--file``).
    """

    def __init__(self, name: str):
        super().__init__(f"The argument {name} is missing a value")
        self.name = name


class PathCompletionError(CompletionError):
    """Raised when the directory listing behind path completion fails."""


class SchemaError(IntellicompError):
    """Raised when a schema document cannot be loaded, parsed or validated."""

    exit_code = EXIT_SCHEMA_ERROR


class ConfigError(IntellicompError):
    """Raised for configuration problems (invalid JSON, bad keys or values)."""

    exit_code = EXIT_GENERIC_FAILURE
