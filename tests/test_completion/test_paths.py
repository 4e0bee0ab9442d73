"""Tests for intellicomp.completion.paths -- single-directory path listing."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from intellicomp.completion.paths import PathCompleter
from intellicomp.exceptions import PathCompletionError


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """A small directory tree to complete against."""
    (tmp_path / "alpha.txt").write_text("a")
    (tmp_path / "alpine").mkdir()
    (tmp_path / "beta").write_text("b")
    (tmp_path / ".hidden").write_text("h")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "inner.py").write_text("")
    (sub / "other.py").write_text("")
    return tmp_path


class TestPathCompleter:
    def test_prefix_in_root(self, tree: Path) -> None:
        completer = PathCompleter(root=tree)
        assert sorted(completer.complete("al")) == ["alpha.txt", "alpine"]

    def test_empty_prefix_lists_everything_including_hidden(self, tree: Path) -> None:
        completer = PathCompleter(root=tree)
        assert sorted(completer.complete("")) == [
            ".hidden",
            "alpha.txt",
            "alpine",
            "beta",
            "sub",
        ]

    def test_directory_part_is_kept(self, tree: Path) -> None:
        completer = PathCompleter(root=tree)
        assert completer.complete("sub/in") == ["sub/inner.py"]

    def test_trailing_slash_lists_directory(self, tree: Path) -> None:
        completer = PathCompleter(root=tree)
        assert sorted(completer.complete("sub/")) == ["sub/inner.py", "sub/other.py"]

    def test_no_match(self, tree: Path) -> None:
        assert PathCompleter(root=tree).complete("zzz") == []

    def test_absolute_path(self, tree: Path) -> None:
        completer = PathCompleter(root=Path("/nonexistent"))
        assert completer.complete(f"{tree}/be") == [f"{tree}/beta"]

    def test_defaults_to_working_directory(
        self, tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tree)
        assert PathCompleter().complete("bet") == ["beta"]

    def test_missing_directory_matches_nothing(self, tree: Path) -> None:
        assert PathCompleter(root=tree).complete("missing/x") == []

    def test_file_as_directory_matches_nothing(self, tree: Path) -> None:
        assert PathCompleter(root=tree).complete("beta/x") == []

    def test_unexpanded_home_matches_nothing(self, tree: Path) -> None:
        assert PathCompleter(root=tree).complete("~/") == []

    def test_unreadable_directory_raises(self, tree: Path) -> None:
        with patch("os.scandir", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(PathCompletionError, match="Permission denied"):
                PathCompleter(root=tree).complete("sub/")
