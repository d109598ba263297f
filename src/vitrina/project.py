"""Project roots for resolving root-relative image references.

An image written as ``/images/fig.png`` in a document usually means "from
the project root", not "from the filesystem root". ProjectRoots answers
which open project a document belongs to.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import Protocol


class ProjectResolver(Protocol):
    """Maps a path to its project root."""

    def relativize(self, path: str) -> tuple[str | None, str]:
        """Return ``(project_root, relative_path)``, or ``(None, path)``."""
        ...


class ProjectRoots:
    """The set of project root directories the host has open.

    Example:
        >>> roots = ProjectRoots(["/work/site"])
        >>> roots.relativize("/work/site/docs/index.md")
        ('/work/site', 'docs/index.md')
        >>> roots.relativize("/elsewhere/notes.md")
        (None, '/elsewhere/notes.md')
    """

    __slots__ = ("_paths",)

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths: list[str] = []
        for path in paths:
            self.add_path(path)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self._paths)

    def add_path(self, path: str) -> None:
        path = os.path.normpath(os.path.abspath(path))
        if path not in self._paths:
            self._paths.append(path)

    def relativize(self, path: str) -> tuple[str | None, str]:
        """Find the deepest project root containing ``path``.

        Args:
            path: Absolute file path (empty string for unsaved documents)

        Returns:
            The containing root and the path relative to it, or
            ``(None, path)`` when no root contains it.
        """
        if not path:
            return None, path
        best: str | None = None
        for root in self._paths:
            if path == root or path.startswith(root.rstrip(os.sep) + os.sep):
                if best is None or len(root) > len(best):
                    best = root
        if best is None:
            return None, path
        return best, os.path.relpath(path, best)


__all__ = [
    "ProjectResolver",
    "ProjectRoots",
]
