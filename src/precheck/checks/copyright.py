"""Copyright-year freshness check."""

from __future__ import annotations

from typing import TYPE_CHECKING

from precheck.checks.comments import is_comment_line
from precheck.errors import CopyrightReadError
from precheck.types import CheckResult

if TYPE_CHECKING:
    from pathlib import Path


def check_copyright(path: Path, year: str) -> CheckResult:
    """
    Check that a copyright comment, if present, mentions ``year``.

    Only comment lines are considered, and both "copyright" and the year must
    appear on the same line past its first character. Files without any
    copyright comment are compliant.

    Args:
        path: File to read
        year: Current year token, e.g. "2026"

    Returns:
        VIOLATION if a copyright comment exists but none carries the year

    Raises:
        CopyrightReadError: If the file cannot be opened or decoded
    """
    copyright_found = False
    correct_year_found = False

    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                lower_line = line.lower().lstrip()
                if not is_comment_line(lower_line):
                    continue
                if lower_line.find("copyright") > 0:
                    copyright_found = True
                    if lower_line.find(year) > 0:
                        correct_year_found = True
                        break
    except (OSError, UnicodeDecodeError) as e:
        raise CopyrightReadError(path, e) from e

    if copyright_found and not correct_year_found:
        return CheckResult.VIOLATION
    return CheckResult.COMPLIANT
