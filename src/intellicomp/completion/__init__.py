"""The completion engine: lexing, classification and candidate generation.

Typical usage::

    from intellicomp.completion import generate_completions
    from intellicomp.schema import load_schema

    schema = load_schema("git.yaml")
    for candidate in generate_completions(schema, "git --enum ba", 13):
        print(candidate)

Sub-modules:

* :mod:`~intellicomp.completion.lexer` -- quote-tolerant word splitting.
* :mod:`~intellicomp.completion.paths` -- filesystem path candidates.
* :mod:`~intellicomp.completion.resolver` -- token classification and
  candidate generation.
"""

from intellicomp.completion.lexer import QuotingState, get_quoting_state, parse_words
from intellicomp.completion.paths import PathCompleter
from intellicomp.completion.resolver import CompletionResolver, generate_completions

__all__ = [
    "CompletionResolver",
    "PathCompleter",
    "QuotingState",
    "generate_completions",
    "get_quoting_state",
    "parse_words",
]
