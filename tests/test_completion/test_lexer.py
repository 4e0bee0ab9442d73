"""Tests for intellicomp.completion.lexer -- quote repair and word splitting."""

from __future__ import annotations

import pytest

from intellicomp.completion.lexer import (
    QuotingState,
    get_quoting_state,
    parse_words,
    repair_quoting,
)
from intellicomp.exceptions import CompletionError, UnparseableCommandError


class TestQuotingState:
    def test_balanced(self) -> None:
        assert get_quoting_state("cmd 'a b' \"c d\"") is QuotingState.BALANCED

    def test_no_quotes(self) -> None:
        assert get_quoting_state("cmd --flag value") is QuotingState.BALANCED

    def test_unbalanced_single(self) -> None:
        assert get_quoting_state("cmd 'partial") is QuotingState.UNBALANCED_SINGLE_QUOTE

    def test_unbalanced_double(self) -> None:
        assert get_quoting_state('cmd "partial') is QuotingState.UNBALANCED_DOUBLE_QUOTE

    def test_single_quote_inside_double_is_inert(self) -> None:
        assert get_quoting_state('cmd "it\'s') is QuotingState.UNBALANCED_DOUBLE_QUOTE

    def test_double_quote_inside_single_is_inert(self) -> None:
        assert get_quoting_state("cmd 'say \"hi'") is QuotingState.BALANCED

    @pytest.mark.parametrize(
        ("quote", "state"),
        [
            ("'", QuotingState.UNBALANCED_SINGLE_QUOTE),
            ('"', QuotingState.UNBALANCED_DOUBLE_QUOTE),
        ],
    )
    @pytest.mark.parametrize("text", ["", "cmd", "cmd 'a b' ", 'cmd "x" --flag'])
    def test_quote_toggles_balance(self, text: str, quote: str, state: QuotingState) -> None:
        assert get_quoting_state(text) is QuotingState.BALANCED
        opened = text + quote
        assert get_quoting_state(opened) is state
        assert get_quoting_state(opened + quote) is QuotingState.BALANCED


class TestRepairQuoting:
    def test_closes_single_quote(self) -> None:
        assert repair_quoting("cmd 'abc") == "cmd 'abc'"

    def test_closes_double_quote(self) -> None:
        assert repair_quoting('cmd "abc') == 'cmd "abc"'

    def test_balanced_unchanged(self) -> None:
        assert repair_quoting("cmd 'abc'") == "cmd 'abc'"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "cmd --flag value",
            "cmd 'abc",
            'cmd "abc',
            "cmd \"it's",
            "cmd 'say \"hi",
            "cmd 'a' \"b",
        ],
    )
    def test_repaired_text_is_balanced(self, text: str) -> None:
        repaired = repair_quoting(text)
        assert get_quoting_state(repaired) is QuotingState.BALANCED
        assert repair_quoting(repaired) == repaired


class TestParseWords:
    def test_quoted_word_kept_together(self) -> None:
        assert parse_words("cmd 'a b' --flag") == ["cmd", "a b", "--flag"]

    def test_trailing_space_starts_new_word(self) -> None:
        assert parse_words("cmd 'a b' --flag ") == ["cmd", "a b", "--flag", ""]

    def test_unterminated_single_quote(self) -> None:
        assert parse_words("cmd --flag 'partial") == ["cmd", "--flag", "partial"]

    def test_unterminated_double_quote(self) -> None:
        assert parse_words('cmd "it\'s') == ["cmd", "it's"]

    def test_space_inside_open_quote_is_not_a_word_break(self) -> None:
        assert parse_words("cmd 'a ") == ["cmd", "a "]

    def test_escaped_trailing_space_is_not_a_word_break(self) -> None:
        assert parse_words("cmd a\\ ") == ["cmd", "a "]

    def test_empty_line(self) -> None:
        assert parse_words("") == []

    def test_program_name_only(self) -> None:
        assert parse_words("cmd") == ["cmd"]

    def test_program_name_and_space(self) -> None:
        assert parse_words("cmd ") == ["cmd", ""]

    def test_repeated_spaces_collapse(self) -> None:
        assert parse_words("cmd   --flag   ") == ["cmd", "--flag", ""]

    def test_lone_trailing_backslash_is_unparseable(self) -> None:
        with pytest.raises(UnparseableCommandError):
            parse_words("cmd \\")

    def test_unparseable_is_a_completion_error(self) -> None:
        with pytest.raises(CompletionError) as exc_info:
            parse_words("cmd \\")
        assert exc_info.value.exit_code == 3
