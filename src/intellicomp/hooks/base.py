"""Shell selection and the base class every shell hook implements."""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from intellicomp.schema.loader import list_schemas

logger = logging.getLogger(__name__)


class Shell(str, enum.Enum):
    """Shells intellicomp knows about. Hooks exist for bash and fish only."""

    BASH = "bash"
    FISH = "fish"
    ZSH = "zsh"
    CSH = "csh"


class CompletableShell(ABC):
    """Registration-command generator for one shell.

    Subclasses implement :meth:`generate_completions_from_schema` for a
    single schema file; :meth:`generate_completion_commands` applies it to
    every schema in a directory.
    """

    def generate_completion_commands(self, schema_dir: Path) -> list[str]:
        """Return the commands registering every schema in *schema_dir*.

        Schemas are visited in command-name order. A missing directory
        yields no commands.
        """
        commands: list[str] = []
        for name, schema_file in list_schemas(schema_dir).items():
            logger.debug("Generating hook for %s from %s", name, schema_file)
            commands.extend(self.generate_completions_from_schema(schema_file))
        return commands

    @abstractmethod
    def generate_completions_from_schema(self, schema_file: Path) -> list[str]:
        """Return the commands registering the single schema *schema_file*.

        The command being completed is named after the file stem.
        """
        ...
