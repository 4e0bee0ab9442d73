"""Built-in CLI sub-commands for intellicomp.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~intellicomp.commands.complete` -- print candidates for the line
  being typed (invoked by shell hooks on every tab press).
* :mod:`~intellicomp.commands.hook` -- print per-shell registration commands.
* :mod:`~intellicomp.commands.autogenerate` -- convert a fish completion
  script into a schema.
* :mod:`~intellicomp.commands.schema` -- list, show and validate schemas.
* :mod:`~intellicomp.commands.config` -- view and modify global settings.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``schema`` and ``config``) or a plain callback
function registered directly on the root app (for single commands like
``complete``).
"""
