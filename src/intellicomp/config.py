"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for intellicomp:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.intellicomp/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~intellicomp.models.GlobalConfig`
  JSON file storing defaults (schema directory, output format).
* **Schema directory** -- :func:`resolve_schema_dir` merges the CLI flag,
  the ``INTELLICOMP_SCHEMA_DIR`` environment variable and the global config
  into the directory that holds one ``<command>.yaml`` per completable
  command.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so a crash never leaves a truncated config behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from intellicomp.exceptions import ConfigError
from intellicomp.models import GlobalConfig

_APP_NAME = "intellicomp"
_CONFIG_FILENAME = "config.json"
_SCHEMA_DIR_ENV = "INTELLICOMP_SCHEMA_DIR"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True on platforms that follow the XDG Base Directory layout (Linux/BSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/intellicomp/`` (default
    ``~/.config/intellicomp/``). On macOS/Windows: ``~/.intellicomp/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (schemas, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/intellicomp/`` (default
    ``~/.local/share/intellicomp/``). On macOS/Windows: ``~/.intellicomp/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the original file is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~intellicomp.models.GlobalConfig`, or a
        default instance if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Schema directory ---


def default_schema_dir() -> Path:
    """The schema directory used when nothing else is configured."""
    return get_data_dir() / "schemas"


def resolve_schema_dir(
    cli_schema_dir: Optional[str] = None,
    config: Optional[GlobalConfig] = None,
) -> Path:
    """Resolve the schema directory with full precedence chain.

    Precedence (high to low):
        1. CLI flag (``cli_schema_dir``)
        2. Environment variable (``INTELLICOMP_SCHEMA_DIR``)
        3. User config (``schema_dir`` in ``config.json``)
        4. Default (``<data dir>/schemas``)

    Args:
        cli_schema_dir: Value of a ``--schema-dir`` flag, if given.
        config: Already loaded global config; loaded from disk when ``None``.

    Returns:
        The resolved directory with ``~`` expanded. It is not created.
    """
    if cli_schema_dir:
        return Path(cli_schema_dir).expanduser()

    env_value = os.environ.get(_SCHEMA_DIR_ENV)
    if env_value:
        return Path(env_value).expanduser()

    if config is None:
        config = load_global_config()
    if config.schema_dir:
        return Path(config.schema_dir).expanduser()

    return default_schema_dir()
