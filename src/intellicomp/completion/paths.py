"""Filesystem path candidates for ``Path``-typed arguments."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from intellicomp.exceptions import PathCompletionError

logger = logging.getLogger(__name__)


class PathProvider(Protocol):
    """Anything that can turn a partial path into matching path strings."""

    def complete(self, partial: str) -> list[str]:
        ...


class PathCompleter:
    """Complete partial paths by listing a single directory.

    Everything up to the last ``/`` of the partial path names the directory
    to list (relative to *root* unless absolute); the remainder is the name
    prefix. Matches keep the directory part exactly as typed, so
    ``"src/ma"`` yields ``"src/main.py"``. Hidden entries are included, and
    results come back in directory-listing order.

    Args:
        root: Directory relative paths are anchored at. Defaults to the
            current working directory at the time of each call.
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root

    def complete(self, partial: str) -> list[str]:
        """Return every path whose name starts with the last segment of *partial*.

        A directory part that does not exist, or names a file, matches
        nothing.

        Raises:
            PathCompletionError: If the directory exists but cannot be listed.
        """
        directory, sep, prefix = partial.rpartition("/")
        directory = directory + sep
        base = self._root if self._root is not None else Path.cwd()
        target = base / directory if directory else base

        try:
            with os.scandir(target) as entries:
                matches = [
                    directory + entry.name
                    for entry in entries
                    if entry.name.startswith(prefix)
                ]
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("Path completion for %r: no directory %s", partial, target)
            return []
        except OSError as exc:
            raise PathCompletionError(f"Failed to list {target}: {exc}") from exc

        logger.debug("Path completion for %r in %s: %d match(es)", partial, target, len(matches))
        return matches
