"""Reporting boundary: log messages and optional report files."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, TextIO

from precheck import __version__
from precheck.config import IGNORE_COPYRIGHT_ERRORS_KEY, IGNORE_EOL_STYLE_ERRORS_KEY
from precheck.types import CheckKind, RunSummary, Verdict

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

REPORT_JSON_FILENAME = "PRECHECK_REPORT.json"
REPORT_MD_FILENAME = "PRECHECK_REPORT.md"

_WARNING_HEADERS = {
    CheckKind.EOL_STYLE: "Potential svn:eol-style updates needed for the following files:",
    CheckKind.COPYRIGHT_YEAR: "Potential copyright year updates needed for the following files:",
}


def remediation(kind: CheckKind) -> str:
    """Return the guidance shown when violations of ``kind`` block the run."""
    if kind is CheckKind.EOL_STYLE:
        return (
            "Fix svn:eol-style problems before proceeding, or use "
            f"'-D {IGNORE_EOL_STYLE_ERRORS_KEY}=true' (or set it in the environment) "
            "to ignore svn eol-style warnings."
        )
    return (
        "Fix copyright date problems before proceeding, or use "
        f"'-D {IGNORE_COPYRIGHT_ERRORS_KEY}=true' (or set it in the environment) "
        "to ignore copyright warnings."
    )


def violations_for(summary: RunSummary, kind: CheckKind) -> list[str]:
    if kind is CheckKind.EOL_STYLE:
        return summary.eol_violations
    return summary.copyright_violations


def log_summary(summary: RunSummary) -> None:
    """Emit warnings for every violating file and errors for blocking kinds.

    Overridden kinds are still listed; an override only suppresses failure.
    """
    for kind in CheckKind:
        paths = violations_for(summary, kind)
        if not paths:
            continue
        logger.warning(_WARNING_HEADERS[kind])
        for path in paths:
            logger.warning("     %s", path)
        if kind in summary.blocking_kinds:
            logger.error(remediation(kind))

    if summary.eol_indeterminate:
        logger.debug("EOL style not determinable for %d untracked file(s)", summary.eol_indeterminate)


def summary_to_dict(summary: RunSummary) -> dict:
    """Serialize a run summary for PRECHECK_REPORT.json."""
    return {
        "schema_version": "1.0",
        "precheck_version": __version__,
        "status": "passed" if summary.verdict is Verdict.PASS else "failed",
        "year": summary.year,
        "root": str(summary.root),
        "files": {
            "visited": summary.files_visited,
            "checked": summary.files_checked,
            "skipped": summary.files_skipped,
            "eol_indeterminate": summary.eol_indeterminate,
        },
        "overrides": {
            "ignore_eol": summary.overrides.ignore_eol,
            "ignore_copyright": summary.overrides.ignore_copyright,
        },
        "violations": {
            kind.value: {
                "count": len(violations_for(summary, kind)),
                "blocking": kind in summary.blocking_kinds,
                "files": violations_for(summary, kind),
            }
            for kind in CheckKind
        },
    }


def write_reports(summary: RunSummary, out_dir: Path) -> tuple[Path, Path]:
    """Write PRECHECK_REPORT.json and PRECHECK_REPORT.md into ``out_dir``."""
    out_dir.mkdir(parents=True, exist_ok=True)

    json_path = out_dir / REPORT_JSON_FILENAME
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(summary_to_dict(summary), f, indent=2, sort_keys=True)
        f.write("\n")

    md_path = out_dir / REPORT_MD_FILENAME
    with open(md_path, "w", encoding="utf-8") as f:
        _write_markdown_report(f, summary)

    return json_path, md_path


def _write_markdown_report(f: TextIO, summary: RunSummary) -> None:
    """Write human-readable markdown report."""
    f.write("# Precheck Report\n\n")

    status_emoji = "✅" if summary.verdict is Verdict.PASS else "❌"
    f.write(f"**Status**: {status_emoji} {summary.verdict.value.upper()}\n\n")
    f.write(f"**Root**: `{summary.root}`\n\n")
    f.write(f"**Year**: {summary.year}\n\n")

    f.write("## Summary\n\n")
    f.write(f"- Files visited: {summary.files_visited}\n")
    f.write(f"- Files checked: {summary.files_checked}\n")
    f.write(f"- Files skipped: {summary.files_skipped}\n")
    f.write(f"- EOL style not determinable: {summary.eol_indeterminate}\n\n")

    titles = {
        CheckKind.EOL_STYLE: "EOL Style",
        CheckKind.COPYRIGHT_YEAR: "Copyright Year",
    }
    for kind in CheckKind:
        paths = violations_for(summary, kind)
        ignored = summary.overrides.ignores(kind)
        f.write(f"## {titles[kind]}\n\n")
        f.write(f"**Ignored**: {'Yes' if ignored else 'No'}\n\n")
        if not paths:
            f.write("*(no violations)*\n\n")
            continue
        for path in paths:
            f.write(f"- `{path}`\n")
        f.write("\n")
        if kind in summary.blocking_kinds:
            f.write(f"**Remediation:** {remediation(kind)}\n\n")

    f.write("## Exit Code\n\n")
    if summary.verdict is Verdict.PASS:
        f.write("0 (success - precheck passed)\n")
    else:
        f.write("2 (policy violation - precheck failed)\n")
