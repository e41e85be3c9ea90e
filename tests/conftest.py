"""Pytest configuration and fixtures for precheck tests."""
from pathlib import Path

import pytest


def pytest_sessionfinish(session, exitstatus):
    """Check that coverage data was collected if --cov was requested.

    This prevents silent "no data collected" scenarios that produce 0% coverage
    without failing the test run.
    """
    cov_enabled = any("--cov" in str(arg) for arg in session.config.args)

    if not cov_enabled:
        return

    cwd = Path.cwd()
    coverage_files = list(cwd.glob(".coverage*"))

    if not coverage_files:
        pytest.exit(
            "Coverage was enabled but no data was collected. "
            "This suggests tests are not importing/executing package code. "
            "Check that tests import from 'precheck' (the package) not 'src/precheck' (filesystem path).",
            returncode=1
        )


@pytest.fixture(autouse=True)
def _clear_override_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer-level override variables out of test runs."""
    monkeypatch.delenv("PRECHECK_IGNORE_EOL_STYLE_ERRORS", raising=False)
    monkeypatch.delenv("PRECHECK_IGNORE_COPYRIGHT_ERRORS", raising=False)
