"""intellicomp -- schema-driven tab completion for any shell command.

A completion schema is a YAML file describing one command's keyword and
positional arguments. intellicomp registers itself with the user's shell as
the completer for every command that has a schema, then answers each tab
press by replaying the typed line against that schema.

Typical workflow::

    intellicomp autogenerate /usr/share/fish/completions/rsync.fish
    eval "$(intellicomp hook bash)"      # in ~/.bashrc

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for schemas and configuration.
    completion: Line lexing and candidate resolution.
    schema: Schema loading, listing and generation from fish scripts.
    hooks: Per-shell registration commands.
    config: XDG-aware configuration and schema directory resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
