"""Shared test fixtures for intellicomp.

Provides reusable fixtures for loading schema fixtures, creating isolated
config environments, managing output state, and running CLI commands.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from intellicomp.models import Command
from intellicomp.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Schema fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_command_path() -> Path:
    """Path of the mock command schema fixture."""
    return FIXTURES_DIR / "mock_command.yaml"


@pytest.fixture
def mock_command(mock_command_path: Path) -> Command:
    """The mock command: ``--enum`` (foo/bar/baz), ``--file`` (Path), one positional (1/2/3)."""
    from intellicomp.schema import load_schema

    return load_schema(mock_command_path)


@pytest.fixture
def fish_script_path() -> Path:
    """Path of the sample fish completion script fixture."""
    return FIXTURES_DIR / "rsync.fish"


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config, forces the XDG layout,
    clears INTELLICOMP_SCHEMA_DIR and changes the working directory to
    tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("intellicomp.config._is_xdg_platform", lambda: True)
    monkeypatch.delenv("INTELLICOMP_SCHEMA_DIR", raising=False)
    monkeypatch.delenv("COMP_LINE", raising=False)
    monkeypatch.delenv("COMP_POINT", raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def schema_dir(isolated_config: Path, mock_command_path: Path) -> Path:
    """A schema directory holding the mock command as ``mock.yaml``."""
    directory = isolated_config / "schemas"
    directory.mkdir()
    shutil.copy(mock_command_path, directory / "mock.yaml")
    return directory


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Set up a quiet output manager for tests that don't care about output.

    Installs a PLAIN-format, quiet OutputManager as the global output
    and resets it after the test completes.
    """
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    Returns a CliRunner instance that captures stdout/stderr and
    provides a consistent interface for invoking Typer apps in tests.
    """
    from typer.testing import CliRunner

    return CliRunner()
