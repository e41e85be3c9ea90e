"""Precheck result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class CheckKind(str, Enum):
    """Independent check categories."""

    EOL_STYLE = "eol_style"
    COPYRIGHT_YEAR = "copyright_year"


class CheckResult(str, Enum):
    """Per-file, per-kind outcome."""

    COMPLIANT = "compliant"
    VIOLATION = "violation"
    INDETERMINATE = "indeterminate"  # EOL metadata unavailable; never blocks


class Verdict(str, Enum):
    """Overall run outcome."""

    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class ScanTarget:
    """A visited path and whether it is in scope."""

    path: Path
    eligible: bool


@dataclass(frozen=True)
class FileEvaluation:
    """Both check results for one eligible file."""

    path: Path
    eol: CheckResult
    copyright: CheckResult


@dataclass(frozen=True)
class ViolationRecord:
    """A violating file, relative to the scan root."""

    path: str
    kind: CheckKind


@dataclass(frozen=True)
class PolicyOverride:
    """Resolved ignore flags, one per check kind."""

    ignore_eol: bool = False
    ignore_copyright: bool = False

    def ignores(self, kind: CheckKind) -> bool:
        if kind is CheckKind.EOL_STYLE:
            return self.ignore_eol
        return self.ignore_copyright


@dataclass
class RunSummary:
    """Outcome of a complete precheck run."""

    verdict: Verdict
    year: str
    root: Path
    overrides: PolicyOverride
    files_visited: int = 0
    files_checked: int = 0
    files_skipped: int = 0
    eol_indeterminate: int = 0
    eol_violations: list[str] = field(default_factory=list)
    copyright_violations: list[str] = field(default_factory=list)
    blocking_kinds: list[CheckKind] = field(default_factory=list)
