"""Resolve the completion candidates for a command line against a schema.

The resolver makes one left-to-right pass over the lexed words (skipping the
program name) and classifies each one:

* a word naming a keyword argument consumes the following word as its value
  (``Flag`` arguments consume nothing and are not recorded);
* otherwise the word fills the next unfilled positional slot;
* otherwise it is taken to be a keyword argument still being typed.

Only the *last* classified token decides what is offered:

=============================== ==============================================
Last token                      Candidates
=============================== ==============================================
:class:`PopulatedKeywordArgument`   completions of the argument's value type
:class:`PopulatedPositionalArgument` still-valid keyword names, then completions
                                    of the positional argument's value type
:class:`PartialKeywordArgument`     still-valid keyword names with that prefix
=============================== ==============================================

A keyword argument is *still valid* when it is repeatable or has not already
been populated earlier on the same line.

Example::

    resolver = CompletionResolver(schema)
    resolver.generate_completions("git --enum ba", 13)   # ['bar', 'baz']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from intellicomp.completion.lexer import parse_words
from intellicomp.completion.paths import PathCompleter, PathProvider
from intellicomp.exceptions import ArgumentMissingValueError, CursorOutOfRangeError
from intellicomp.models import (
    Command,
    EnumerationValue,
    FlagValue,
    KeywordArgument,
    PathValue,
    PositionalArgument,
    StringValue,
    ValueType,
)

logger = logging.getLogger(__name__)


# --- Classified tokens ---


@dataclass(frozen=True)
class PopulatedKeywordArgument:
    """A keyword argument that was matched and had its value consumed."""

    argument: KeywordArgument
    value: str


@dataclass(frozen=True)
class PopulatedPositionalArgument:
    """A bare word bound to the next unfilled positional slot."""

    argument: PositionalArgument
    value: str


@dataclass(frozen=True)
class PartialKeywordArgument:
    """A word matching nothing; treated as a flag name being typed."""

    text: str


Token = Union[PopulatedKeywordArgument, PopulatedPositionalArgument, PartialKeywordArgument]


class CompletionResolver:
    """Compute completion candidates for one schema.

    Holds no state between calls; every :meth:`generate_completions` call
    rebuilds its token sequence from scratch.

    Args:
        schema: The command schema to complete against.
        path_completer: Provider for ``Path`` values. Defaults to a
            :class:`~intellicomp.completion.paths.PathCompleter` anchored at
            the current working directory.
    """

    def __init__(
        self,
        schema: Command,
        path_completer: Optional[PathProvider] = None,
    ) -> None:
        self.schema = schema
        self.path_completer = path_completer or PathCompleter()

    def generate_completions(self, line: str, cursor_position: int) -> list[str]:
        """Return the candidates that may follow *line* at *cursor_position*.

        Args:
            line: The full command line typed so far, program name included.
            cursor_position: Offset of the cursor in *line*, in characters.

        Returns:
            Candidates in match order: enumeration declaration order,
            directory-listing order, or schema order for keyword names.

        Raises:
            CursorOutOfRangeError: If the cursor lies outside *line*.
            UnparseableCommandError: If the line cannot be split into words.
            ArgumentMissingValueError: If a value-taking keyword argument has
                no word after it.
            PathCompletionError: If path completion cannot list a directory.
        """
        if cursor_position < 0 or cursor_position > len(line):
            raise CursorOutOfRangeError(cursor_position)

        words = parse_words(line[:cursor_position])
        if not words:
            return []

        tokens, next_positional = self._classify(words[1:])
        logger.debug("Classified tokens: %r", tokens)

        if not tokens:
            results = self._valid_keyword_arguments(tokens, "")
            if next_positional < len(self.schema.positional_arguments):
                argument = self.schema.positional_arguments[next_positional]
                results.extend(self._complete_value(argument.value_type, ""))
            return results

        last = tokens[-1]
        if isinstance(last, PopulatedKeywordArgument):
            return self._complete_value(last.argument.value_type, last.value)
        if isinstance(last, PopulatedPositionalArgument):
            results = self._valid_keyword_arguments(tokens, last.value)
            results.extend(self._complete_value(last.argument.value_type, last.value))
            return results
        return self._valid_keyword_arguments(tokens, last.text)

    # ------------------------------------------------------------------ #
    # Classification
    # ------------------------------------------------------------------ #

    def _find_keyword_argument(self, word: str) -> Optional[KeywordArgument]:
        name = word.lstrip("-")
        for argument in self.schema.keyword_arguments:
            if argument.name == name:
                return argument
        return None

    def _classify(self, words: Sequence[str]) -> tuple[list[Token], int]:
        """Replay *words* against the schema.

        Returns:
            The classified tokens and the index of the next unfilled
            positional slot.
        """
        tokens: list[Token] = []
        positional_index = 0
        iterator = iter(words)

        for word in iterator:
            argument = self._find_keyword_argument(word)
            if argument is not None:
                if isinstance(argument.value_type, FlagValue):
                    continue
                value = next(iterator, None)
                if value is None:
                    raise ArgumentMissingValueError(word)
                tokens.append(PopulatedKeywordArgument(argument, value))
            elif positional_index < len(self.schema.positional_arguments):
                positional = self.schema.positional_arguments[positional_index]
                positional_index += 1
                tokens.append(PopulatedPositionalArgument(positional, word))
            else:
                tokens.append(PartialKeywordArgument(word.lstrip("-")))

        return tokens, positional_index

    # ------------------------------------------------------------------ #
    # Candidate generation
    # ------------------------------------------------------------------ #

    def _valid_keyword_arguments(self, tokens: Sequence[Token], query: str) -> list[str]:
        used = {
            token.argument.name
            for token in tokens
            if isinstance(token, PopulatedKeywordArgument)
        }
        return [
            argument.display_name
            for argument in self.schema.keyword_arguments
            if argument.name.startswith(query)
            and (argument.repeatable or argument.name not in used)
        ]

    def _complete_value(self, value_type: ValueType, value: str) -> list[str]:
        if isinstance(value_type, EnumerationValue):
            return [member for member in value_type.values if member.startswith(value)]
        if isinstance(value_type, PathValue):
            return self.path_completer.complete(value)
        if isinstance(value_type, (StringValue, FlagValue)):
            return []
        logger.debug("No completions for value type %r", value_type)
        return []


def generate_completions(
    schema: Command,
    line: str,
    cursor_position: int,
    path_completer: Optional[PathProvider] = None,
) -> list[str]:
    """Compute completion candidates for *line* against *schema*.

    Convenience wrapper around :class:`CompletionResolver`.
    """
    return CompletionResolver(schema, path_completer).generate_completions(
        line, cursor_position
    )
