"""Working copies that are not driven by a VCS status listing."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from precheck.errors import NotUnderVersionControl, StatusWalkError
from precheck.vcs.base import StatusEntry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from precheck.vcs.base import WorkingCopy

logger = logging.getLogger(__name__)

SKIP_DIRS = {".git", ".svn", ".hg", "__pycache__", ".venv", "node_modules"}


class FilesystemWorkingCopy:
    """Walk a plain directory tree; no file carries metadata."""

    name = "fs"

    def list_status(self, root: Path) -> Iterator[StatusEntry]:
        if not root.is_dir():
            raise StatusWalkError(f"Scan root is not a directory: {root}")

        def _raise(err: OSError) -> None:
            raise StatusWalkError(f"Directory walk failed under {root}: {err}") from err

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
            for filename in sorted(filenames):
                yield StatusEntry(path=Path(dirpath) / filename)

    def get_property(self, path: Path, name: str) -> str | None:
        raise NotUnderVersionControl(path, f"no metadata for {name}")


class ExplicitPathsWorkingCopy:
    """Visit a caller-supplied path list, reading metadata from another backend."""

    def __init__(self, paths: list[Path], metadata: WorkingCopy) -> None:
        self.paths = paths
        self.metadata = metadata
        self.name = f"{metadata.name}+paths"

    def list_status(self, root: Path) -> Iterator[StatusEntry]:
        for path in self.paths:
            target = path if path.is_absolute() else root / path
            if not target.exists():
                logger.warning("Explicit path does not exist: %s", target)
            yield StatusEntry(path=target)

    def get_property(self, path: Path, name: str) -> str | None:
        return self.metadata.get_property(path, name)
