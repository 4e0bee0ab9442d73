"""Config commands -- view and modify global configuration.

Provides the ``intellicomp config`` sub-command group for reading and
updating the user's global configuration file
(:class:`~intellicomp.models.GlobalConfig`).
"""

from __future__ import annotations

import typer

from intellicomp.exceptions import IntellicompError
from intellicomp.output import error, format_response, info, print_data, success

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show current configuration.

    Prints the config directory and the effective schema directory to
    stderr, followed by the stored configuration.

    Example::

        intellicomp config show
        intellicomp --json config show
    """
    from intellicomp.config import get_config_dir, load_global_config, resolve_schema_dir

    try:
        config = load_global_config()
        schema_dir = resolve_schema_dir(config=config)
    except IntellicompError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Config directory: {get_config_dir()}")
    info(f"Schema directory: {schema_dir}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'output.format')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys. The updated config is validated
    against :class:`~intellicomp.models.GlobalConfig` before saving.

    Raises:
        typer.Exit: With code 2 if the key path is unknown or the value
            fails validation.

    Example::

        intellicomp config set schema_dir ~/dotfiles/schemas
        intellicomp config set output.format plain
    """
    from pydantic import ValidationError

    from intellicomp.config import load_global_config, save_global_config
    from intellicomp.models import GlobalConfig
    from intellicomp.output import OutputFormat

    try:
        config = load_global_config()
    except IntellicompError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    data = config.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    if key == "output.format" and value not in {f.value for f in OutputFormat}:
        error(f"Invalid output format: {value}. Choose from: auto, json, plain, rich")
        raise typer.Exit(code=2)

    target[final_key] = value

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {value}")


@config_app.command("path")
def config_path() -> None:
    """Print the path of the global config file."""
    from intellicomp.config import global_config_path

    print_data(str(global_config_path()))
