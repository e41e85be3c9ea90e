"""Subversion working-copy backend driven through the ``svn`` client."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

from precheck.errors import NotUnderVersionControl, StatusWalkError
from precheck.vcs import exec as vcs_exec
from precheck.vcs.base import StatusEntry

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

# svn: warning: W200017: Property 'x' not found on 'y'
_PROPERTY_NOT_FOUND = "W200017"


class SubversionWorkingCopy:
    """Status and property lookups against an svn checkout."""

    name = "svn"

    def list_status(self, root: Path) -> Iterator[StatusEntry]:
        """List locally modified, added and unversioned entries under ``root``."""
        try:
            result = vcs_exec.run_command(
                ["svn", "status", "--xml", "--depth", "infinity", "."],
                cwd=root,
            )
        except (vcs_exec.ExecError, OSError) as e:
            raise StatusWalkError(f"svn status failed under {root}: {e}") from e

        try:
            document = ET.fromstring(result.stdout)
        except ET.ParseError as e:
            raise StatusWalkError(f"Unreadable svn status output under {root}: {e}") from e

        for entry in document.iter("entry"):
            rel_path = entry.get("path")
            if not rel_path:
                continue
            wc_status = entry.find("wc-status")
            item = wc_status.get("item", "") if wc_status is not None else ""
            yield StatusEntry(path=root / rel_path, status=item)

    def get_property(self, path: Path, name: str) -> str | None:
        """Read ``name`` as currently set in the working tree."""
        try:
            result = vcs_exec.run_command(
                # trailing "@" stops svn from reading "@" in the name as a peg revision
                ["svn", "propget", name, "--", f"{path.name}@"],
                cwd=path.parent,
                check=False,
            )
        except vcs_exec.ExecError as e:
            raise NotUnderVersionControl(path, e.result.detail) from e

        if result.ok:
            value = result.stdout.rstrip("\r\n")
            return value or None
        if _PROPERTY_NOT_FOUND in result.stderr:
            return None
        raise NotUnderVersionControl(path, result.detail)
