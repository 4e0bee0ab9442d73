"""Fish hook: static ``complete`` definitions generated from each schema.

Fish has no equivalent of bash's ``complete -C``, so every keyword argument
becomes its own ``complete`` line. Value types map onto fish's own switches:

* ``Enumeration`` -> ``-x -a '<values>'``, each value quoted as its own word
* ``Path`` -> ``-r -F``
* ``String`` -> ``-x``
* ``Flag`` and unknown types -> no switch
"""

from __future__ import annotations

import re
from pathlib import Path

from intellicomp.hooks.base import CompletableShell
from intellicomp.models import (
    EnumerationValue,
    KeywordArgument,
    KeywordArgumentStyle,
    PathValue,
    StringValue,
)
from intellicomp.schema.loader import load_schema

_PLAIN_WORD = re.compile(r"[A-Za-z0-9_.,:+=@/-]+")


def fish_quote(text: str) -> str:
    """Quote *text* as a fish single-quoted string."""
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def fish_word(text: str) -> str:
    """Return *text* as one fish word, quoting it only when needed."""
    if text and _PLAIN_WORD.fullmatch(text):
        return text
    return fish_quote(text)


class FishShell(CompletableShell):
    """Generates one ``complete -c`` line per keyword argument."""

    def generate_completions_from_schema(self, schema_file: Path) -> list[str]:
        schema = load_schema(schema_file)
        base_command = f"complete -c {fish_quote(schema_file.stem)}"
        return [
            f"{base_command} {self._describe(argument)}"
            for argument in schema.keyword_arguments
        ]

    def _describe(self, argument: KeywordArgument) -> str:
        option = "-l" if argument.style is KeywordArgumentStyle.STANDARD else "-o"
        parts = [f"{option} {fish_quote(argument.name)}", f"-d {fish_quote(argument.description)}"]

        if argument.shorthand:
            parts.append(f"-s {fish_quote(argument.shorthand.lstrip('-'))}")

        value_type = argument.value_type
        if isinstance(value_type, EnumerationValue):
            candidates = " ".join(fish_word(value) for value in value_type.values)
            parts.append(f"-x -a {fish_quote(candidates)}")
        elif isinstance(value_type, PathValue):
            parts.append("-r -F")
        elif isinstance(value_type, StringValue):
            parts.append("-x")

        return " ".join(parts)
