"""Quote-tolerant word splitting for partially typed command lines.

The text handed to the lexer is a prefix of a line that is still being typed,
so a quote the user means to close may not be closed yet. Rather than failing,
:func:`parse_words` closes the dangling quote synthetically and then delegates
to POSIX shell-word splitting (:func:`shlex.split`)::

    >>> parse_words("cmd --flag 'partial")
    ['cmd', '--flag', 'partial']
    >>> parse_words("cmd 'a b' --flag ")
    ['cmd', 'a b', '--flag', '']

The trailing empty string in the second example marks a word that has started
but has no characters yet: the cursor sits right after a space.
"""

from __future__ import annotations

import enum
import logging
import shlex

from intellicomp.exceptions import UnparseableCommandError

logger = logging.getLogger(__name__)


class QuotingState(enum.Enum):
    """Quoting state of a line at its end."""

    BALANCED = "balanced"
    UNBALANCED_SINGLE_QUOTE = "unbalanced_single_quote"
    UNBALANCED_DOUBLE_QUOTE = "unbalanced_double_quote"


def get_quoting_state(text: str) -> QuotingState:
    """Classify which quote, if any, is still open at the end of *text*.

    A quote character only toggles its own balance while the other kind of
    quote is balanced, since one quote type is inert inside the other.

    Args:
        text: The (possibly truncated) command line.

    Returns:
        The :class:`QuotingState` at the end of *text*.
    """
    single_balanced = True
    double_balanced = True

    for char in text:
        if char == "'" and double_balanced:
            single_balanced = not single_balanced
        elif char == '"' and single_balanced:
            double_balanced = not double_balanced

    if not single_balanced:
        return QuotingState.UNBALANCED_SINGLE_QUOTE
    if not double_balanced:
        return QuotingState.UNBALANCED_DOUBLE_QUOTE
    return QuotingState.BALANCED


def repair_quoting(text: str) -> str:
    """Return *text* with its dangling quote, if any, closed."""
    state = get_quoting_state(text)
    if state is QuotingState.UNBALANCED_SINGLE_QUOTE:
        return text + "'"
    if state is QuotingState.UNBALANCED_DOUBLE_QUOTE:
        return text + '"'
    return text


def _ends_with_word_break(text: str) -> bool:
    """True when *text* ends in a space that is not backslash-escaped."""
    if not text.endswith(" "):
        return False
    backslashes = len(text[:-1]) - len(text[:-1].rstrip("\\"))
    return backslashes % 2 == 0


def parse_words(command: str) -> list[str]:
    """Split a partially typed command line into shell words.

    Args:
        command: The command text up to the cursor.

    Returns:
        The words of *command* with quotes removed. When the line ends in an
        unquoted space, a final empty string stands for the word about to be
        typed.

    Raises:
        UnparseableCommandError: If the line cannot be split even after the
            dangling quote is closed, e.g. it ends in a lone backslash.
    """
    new_word_started = False

    if get_quoting_state(command) is QuotingState.BALANCED:
        new_word_started = _ends_with_word_break(command)
    else:
        command = repair_quoting(command)

    try:
        words = shlex.split(command)
    except ValueError as exc:
        raise UnparseableCommandError(f"The command input is invalid: {exc}") from exc

    if new_word_started:
        words.append("")

    logger.debug("Lexed %r into %r", command, words)
    return words
