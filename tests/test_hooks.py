"""Tests for intellicomp.hooks -- bash and fish registration commands."""

from __future__ import annotations

import shlex
import shutil
from pathlib import Path

import pytest

from intellicomp.exceptions import InvalidUsageError, SchemaError
from intellicomp.hooks import BashShell, FishShell, Shell, current_executable, get_shell
from intellicomp.hooks.fish import fish_quote, fish_word


class TestGetShell:
    def test_bash(self) -> None:
        assert isinstance(get_shell(Shell.BASH, executable="intellicomp"), BashShell)

    def test_fish(self) -> None:
        assert isinstance(get_shell(Shell.FISH), FishShell)

    @pytest.mark.parametrize("shell", [Shell.ZSH, Shell.CSH])
    def test_unsupported(self, shell: Shell) -> None:
        with pytest.raises(InvalidUsageError, match="Unsupported shell"):
            get_shell(shell)

    def test_unsupported_exit_code(self) -> None:
        with pytest.raises(InvalidUsageError) as exc_info:
            get_shell(Shell.ZSH)
        assert exc_info.value.exit_code == 2


class TestBashShell:
    def test_one_line_per_schema(self, schema_dir: Path) -> None:
        shutil.copy(schema_dir / "mock.yaml", schema_dir / "other.yml")
        commands = BashShell("intellicomp").generate_completion_commands(schema_dir)
        assert len(commands) == 2
        assert commands[0].endswith(" mock")
        assert commands[1].endswith(" other")

    def test_command_shape(self, schema_dir: Path) -> None:
        schema_file = schema_dir / "mock.yaml"
        [line] = BashShell("/usr/bin/intellicomp").generate_completions_from_schema(schema_file)

        words = shlex.split(line)
        assert words[:2] == ["complete", "-C"]
        assert words[2] == f"/usr/bin/intellicomp complete bash {schema_file} --"
        assert words[3] == "mock"

    def test_paths_with_spaces_are_quoted(self, tmp_path: Path) -> None:
        directory = tmp_path / "my schemas"
        directory.mkdir()
        schema_file = directory / "tool.yaml"
        schema_file.write_text("{}")

        [line] = BashShell("intellicomp").generate_completions_from_schema(schema_file)
        completer = shlex.split(line)[2]
        assert shlex.split(completer) == [
            "intellicomp", "complete", "bash", str(schema_file), "--"
        ]

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert BashShell("intellicomp").generate_completion_commands(tmp_path) == []


class TestFishShell:
    def test_one_line_per_keyword_argument(self, schema_dir: Path) -> None:
        commands = FishShell().generate_completion_commands(schema_dir)
        assert commands == [
            "complete -c 'mock' -l 'enum' -d 'Some argument' -s 's' -x -a 'foo bar baz'",
            "complete -c 'mock' -l 'file' -d 'Some argument' -s 's' -r -F",
        ]

    def test_old_style_and_string(self, tmp_path: Path) -> None:
        schema_file = tmp_path / "find.yaml"
        schema_file.write_text(
            "keyword_arguments:\n"
            "  - name: name\n"
            "    description: Base of file name\n"
            "    style: Old\n"
            "    value_type: {type: String}\n"
            "  - name: depth\n"
            "    value_type: {type: Flag}\n"
        )
        assert FishShell().generate_completions_from_schema(schema_file) == [
            "complete -c 'find' -o 'name' -d 'Base of file name' -x",
            "complete -c 'find' -l 'depth' -d ''",
        ]

    def test_enumeration_values_stay_separate_words(self, tmp_path: Path) -> None:
        schema_file = tmp_path / "tool.yaml"
        schema_file.write_text(
            "keyword_arguments:\n"
            "  - name: mode\n"
            "    value_type: {type: Enumeration, content: [fast, two words, it's]}\n"
        )
        [line] = FishShell().generate_completions_from_schema(schema_file)
        candidates = line.split(" -x -a ", 1)[1]
        assert candidates == "'fast \\'two words\\' \\'it\\\\\\'s\\''"

    def test_invalid_schema_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text("keyword_arguments: 3\n")
        with pytest.raises(SchemaError):
            FishShell().generate_completions_from_schema(bad)


class TestFishQuote:
    def test_plain(self) -> None:
        assert fish_quote("abc") == "'abc'"

    def test_apostrophe(self) -> None:
        assert fish_quote("it's") == "'it\\'s'"

    def test_backslash(self) -> None:
        assert fish_quote("a\\b") == "'a\\\\b'"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("zstd", "zstd"), ("a b", "'a b'"), ("", "''"), ("$HOME", "'$HOME'")],
    )
    def test_fish_word(self, text: str, expected: str) -> None:
        assert fish_word(text) == expected


class TestCurrentExecutable:
    def test_falls_back_to_module_invocation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.argv", ["/nonexistent/pytest"])
        monkeypatch.setattr("intellicomp.hooks.shutil.which", lambda name: None)
        assert current_executable().endswith(" -m intellicomp")

    def test_uses_path_lookup(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.argv", ["/nonexistent/pytest"])
        monkeypatch.setattr(
            "intellicomp.hooks.shutil.which", lambda name: "/opt/bin/intellicomp"
        )
        assert current_executable() == "/opt/bin/intellicomp"
