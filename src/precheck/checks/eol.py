"""EOL-style metadata check."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from precheck.config import DEFAULT_EOL_EXPECTED, DEFAULT_EOL_PROPERTY
from precheck.errors import NotUnderVersionControl
from precheck.types import CheckResult

if TYPE_CHECKING:
    from pathlib import Path

    from precheck.vcs.base import WorkingCopy

logger = logging.getLogger(__name__)


def check_eol(
    path: Path,
    working_copy: WorkingCopy,
    property_name: str = DEFAULT_EOL_PROPERTY,
    expected: str = DEFAULT_EOL_EXPECTED,
) -> CheckResult:
    """Compare the working-tree EOL property of ``path`` against ``expected``.

    Untracked files yield INDETERMINATE rather than a violation.
    """
    try:
        value = working_copy.get_property(path, property_name)
    except NotUnderVersionControl as e:
        logger.debug("EOL style not checked: %s", e)
        return CheckResult.INDETERMINATE

    if value is None or value != expected:
        return CheckResult.VIOLATION
    return CheckResult.COMPLIANT
