"""Command runner shared by the svn and git backends."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

# Client messages are matched on their text and warning codes.
_STABLE_LOCALE = {"LC_ALL": "C", "LANG": "C"}


@dataclass(frozen=True)
class ExecResult:
    """Captured output of one VCS client invocation."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def detail(self) -> str:
        return (self.stderr or self.stdout).strip()


class ExecError(RuntimeError):
    """Raised when a client call fails in check mode or the client is missing."""

    def __init__(self, result: ExecResult):
        rendered = " ".join(result.argv)
        super().__init__(f"command failed ({result.returncode}): {rendered}\n{result.detail}")
        self.result = result


def run_command(
    argv: list[str],
    *,
    cwd: Path,
    check: bool = True,
) -> ExecResult:
    """Run a VCS client under the C locale and return its captured output."""
    env = {**os.environ, **_STABLE_LOCALE}
    try:
        completed = subprocess.run(argv, cwd=cwd, env=env, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        # 127 mirrors the shell's "command not found".
        missing = ExecResult(argv=tuple(argv), cwd=cwd, returncode=127, stdout="", stderr=str(e))
        raise ExecError(missing) from e

    result = ExecResult(
        argv=tuple(argv),
        cwd=cwd,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    if check and not result.ok:
        raise ExecError(result)
    return result
