"""Per-file checks: scope filter, comment heuristic, EOL style, copyright year."""

from precheck.checks.comments import is_comment_line
from precheck.checks.copyright import check_copyright
from precheck.checks.eligibility import get_extension, is_eligible
from precheck.checks.eol import check_eol

__all__ = ["check_copyright", "check_eol", "get_extension", "is_comment_line", "is_eligible"]
