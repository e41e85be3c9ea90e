"""Working-copy backends and backend selection."""

from __future__ import annotations

from pathlib import Path

from precheck.errors import ConfigError
from precheck.vcs.base import StatusEntry, WorkingCopy
from precheck.vcs.fs import ExplicitPathsWorkingCopy, FilesystemWorkingCopy
from precheck.vcs.git import GitWorkingCopy
from precheck.vcs.svn import SubversionWorkingCopy

__all__ = [
    "ExplicitPathsWorkingCopy",
    "FilesystemWorkingCopy",
    "GitWorkingCopy",
    "StatusEntry",
    "SubversionWorkingCopy",
    "WorkingCopy",
    "detect_backend",
    "make_working_copy",
]


def detect_backend(root: Path) -> str:
    """Pick a backend from the nearest .svn or .git marker at or above ``root``."""
    current = root.resolve()
    while True:
        if (current / ".svn").exists():
            return "svn"
        if (current / ".git").exists():
            return "git"
        parent = current.parent
        if parent == current:
            return "fs"
        current = parent


def make_working_copy(
    backend: str,
    root: Path,
    paths: list[Path] | None = None,
) -> WorkingCopy:
    """Build the working-copy collaborator for ``backend``.

    With ``paths``, only those files are visited; metadata still comes from ``backend``.
    """
    if backend == "auto":
        backend = detect_backend(root)

    working_copy: WorkingCopy
    if backend == "svn":
        working_copy = SubversionWorkingCopy()
    elif backend == "git":
        working_copy = GitWorkingCopy()
    elif backend == "fs":
        working_copy = FilesystemWorkingCopy()
    else:
        raise ConfigError(f"Unknown backend: {backend}")

    if paths is not None:
        return ExplicitPathsWorkingCopy(paths, working_copy)
    return working_copy
