"""Git working-copy backend.

Git has no per-file eol-style property; the ``text`` and ``eol`` attributes
from .gitattributes are translated onto the svn:eol-style vocabulary so the
same policy applies to both.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from precheck.config import DEFAULT_EOL_PROPERTY
from precheck.errors import NotUnderVersionControl, StatusWalkError
from precheck.vcs import exec as vcs_exec
from precheck.vcs.base import StatusEntry

if TYPE_CHECKING:
    from collections.abc import Iterator

_UNSET_VALUES = {"unspecified", "unset"}


class GitWorkingCopy:
    """Status and attribute lookups against a git checkout."""

    name = "git"

    def list_status(self, root: Path) -> Iterator[StatusEntry]:
        """List modified, staged and untracked files under ``root``."""
        try:
            toplevel = vcs_exec.run_command(["git", "rev-parse", "--show-toplevel"], cwd=root)
            result = vcs_exec.run_command(
                ["git", "status", "--porcelain=v1", "-z", "--untracked-files=all", "--", "."],
                cwd=root,
            )
        except (vcs_exec.ExecError, OSError) as e:
            raise StatusWalkError(f"git status failed under {root}: {e}") from e

        repo_root = Path(toplevel.stdout.strip())
        for code, rel_path in parse_porcelain_z(result.stdout):
            yield StatusEntry(path=repo_root / rel_path, status=code)

    def get_property(self, path: Path, name: str) -> str | None:
        """Resolve attribute ``name`` for ``path``; svn:eol-style is translated."""
        self._query(path, ["ls-files", "--error-unmatch", "--", path.name])

        if name == DEFAULT_EOL_PROPERTY:
            attrs = self._check_attr(path, ["text", "eol"])
            return eol_style_from_attributes(attrs.get("text"), attrs.get("eol"))

        value = self._check_attr(path, [name]).get(name)
        return None if value is None or value in _UNSET_VALUES else value

    def _query(self, path: Path, args: list[str]) -> vcs_exec.ExecResult:
        try:
            return vcs_exec.run_command(["git", *args], cwd=path.parent)
        except vcs_exec.ExecError as e:
            raise NotUnderVersionControl(path, e.result.detail) from e

    def _check_attr(self, path: Path, names: list[str]) -> dict[str, str]:
        result = self._query(path, ["check-attr", "-z", *names, "--", path.name])
        # -z output: <path> NUL <attribute> NUL <value> NUL
        fields = result.stdout.split("\0")
        attrs: dict[str, str] = {}
        for i in range(0, len(fields) - 2, 3):
            attrs[fields[i + 1]] = fields[i + 2]
        return attrs


def eol_style_from_attributes(text: str | None, eol: str | None) -> str | None:
    """Map git ``text``/``eol`` attribute values to an svn:eol-style value."""
    if eol == "lf":
        return "LF"
    if eol == "crlf":
        return "CRLF"
    if text in {"auto", "set"}:
        return "native"
    return None


def parse_porcelain_z(stdout: str) -> list[tuple[str, str]]:
    """Parse ``git status --porcelain -z`` output into (XY, path) pairs.

    Renames and copies report the new path; the original path that follows is skipped.
    """
    entries: list[tuple[str, str]] = []
    records = stdout.split("\0")
    i = 0
    while i < len(records):
        record = records[i]
        i += 1
        if len(record) < 4:
            continue
        code, rel_path = record[:2], record[3:]
        if code[0] in "RC":
            i += 1
        entries.append((code, rel_path))
    return entries
