"""Tests for the precheck CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest
from typer.testing import CliRunner

from precheck import __version__
from precheck.cli import cli

RUNNER = CliRunner()


def _check(root: Path, *args: str):
    return RUNNER.invoke(cli, ["check", "--root", str(root), "--backend", "fs", "--year", "2026", *args])


def test_version() -> None:
    result = RUNNER.invoke(cli, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_clean_tree_passes(tmp_path: Path, write_file: Callable[..., Path]) -> None:
    write_file("src/Foo.java", "// Copyright 2026 Example\n")
    write_file("README.md", "# Copyright 2001\n")

    result = _check(tmp_path)

    assert result.exit_code == 0, result.output
    assert "Status: PASS" in result.stdout
    assert "Files checked: 1 (skipped 1)" in result.stdout
    assert "Precheck passed" in result.stdout


def test_stale_copyright_fails_with_policy_exit_code(tmp_path: Path, write_file: Callable[..., Path]) -> None:
    write_file("src/Foo.java", "// Copyright 2020\n")

    result = _check(tmp_path)

    assert result.exit_code == 2
    assert "Status: FAIL" in result.stdout
    assert "Copyright year violations: 1" in result.stdout
    # fs backend carries no metadata, so EOL style is never a violation
    assert "EOL style violations: 0" in result.stdout


def test_define_override_passes(tmp_path: Path, write_file: Callable[..., Path]) -> None:
    write_file("src/Foo.java", "// Copyright 2020\n")

    result = _check(tmp_path, "-D", "PRECHECK_IGNORE_COPYRIGHT_ERRORS=true")

    assert result.exit_code == 0, result.output
    assert "Copyright year violations: 1" in result.stdout


def test_environment_override_beats_cli_default(
    tmp_path: Path, write_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    write_file("src/Foo.java", "// Copyright 2020\n")
    monkeypatch.setenv("PRECHECK_IGNORE_COPYRIGHT_ERRORS", "false")

    result = _check(tmp_path, "--ignore-copyright")

    assert result.exit_code == 2


def test_define_beats_environment(
    tmp_path: Path, write_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    write_file("src/Foo.java", "// Copyright 2020\n")
    monkeypatch.setenv("PRECHECK_IGNORE_COPYRIGHT_ERRORS", "false")

    result = _check(tmp_path, "--define", "PRECHECK_IGNORE_COPYRIGHT_ERRORS=TRUE")

    assert result.exit_code == 0, result.output


def test_cli_default_applies_without_override_source(tmp_path: Path, write_file: Callable[..., Path]) -> None:
    write_file("src/Foo.java", "// Copyright 2020\n")

    assert _check(tmp_path, "--ignore-copyright").exit_code == 0


def test_explicit_paths(
    tmp_path: Path, write_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    write_file("src/Stale.java", "// Copyright 2020\n")
    write_file("src/Fresh.java", "// Copyright 2026\n")
    monkeypatch.chdir(tmp_path)

    result = _check(tmp_path, "--path", "src/Fresh.java")

    assert result.exit_code == 0, result.output
    assert "Files checked: 1 (skipped 0)" in result.stdout


def test_explicit_paths_resolve_against_current_directory(
    tmp_path: Path, write_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
) -> None:
    write_file("sub/src/Foo.java", "// Copyright 2020\n")
    monkeypatch.chdir(tmp_path)

    result = _check(Path("sub"), "--path", "sub/src/Foo.java", "--report-dir", "out")

    assert result.exit_code == 2, result.output
    assert "Files checked: 1 (skipped 0)" in result.stdout
    data = json.loads((tmp_path / "out" / "PRECHECK_REPORT.json").read_text(encoding="utf-8"))
    assert data["violations"]["copyright_year"]["files"] == ["src/Foo.java"]


def test_missing_explicit_path_is_logged(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    result = _check(tmp_path, "--path", "src/Nope.java")

    assert result.exit_code == 0, result.output
    assert "Files checked: 0 (skipped 1)" in result.stdout
    assert "Explicit path does not exist" in caplog.text


@pytest.mark.parametrize("year", ["", "20x6", "twenty"])
def test_non_numeric_year_is_rejected(tmp_path: Path, year: str) -> None:
    result = RUNNER.invoke(cli, ["check", "--root", str(tmp_path), "--backend", "fs", "--year", year])

    assert result.exit_code == 2
    assert "--year" in result.output
    assert "Precheck Report" not in result.output


def test_extension_option_replaces_allow_list(tmp_path: Path, write_file: Callable[..., Path]) -> None:
    write_file("tool.py", "# Copyright 2020\n")

    assert _check(tmp_path).exit_code == 0
    assert _check(tmp_path, "--extension", "PY").exit_code == 2


def test_unreadable_file_is_run_error(tmp_path: Path) -> None:
    (tmp_path / "Bad.txt").write_bytes(b"# Copyright \xff 2020\n")

    result = _check(tmp_path)

    assert result.exit_code == 1
    assert "Precheck run failed" in result.output


def test_bad_config_is_run_error(tmp_path: Path) -> None:
    config = tmp_path / ".precheck" / "config.toml"
    config.parent.mkdir()
    config.write_text("extensions = [\n", encoding="utf-8")

    result = _check(tmp_path)

    assert result.exit_code == 1
    assert "Malformed TOML config" in result.output


def test_config_file_is_honored(tmp_path: Path, write_file: Callable[..., Path]) -> None:
    write_file(".precheck/config.yaml", "ignore_copyright: true\n")
    write_file("src/Foo.java", "// Copyright 2020\n")

    assert _check(tmp_path).exit_code == 0
    assert _check(tmp_path, "--no-ignore-copyright").exit_code == 2


def test_report_dir(tmp_path: Path, write_file: Callable[..., Path]) -> None:
    write_file("src/Foo.java", "// Copyright 2020\n")
    out_dir = tmp_path / "reports"

    result = _check(tmp_path, "--report-dir", str(out_dir), "--jobs", "2")

    assert result.exit_code == 2
    data = json.loads((out_dir / "PRECHECK_REPORT.json").read_text(encoding="utf-8"))
    assert data["status"] == "failed"
    assert data["violations"]["copyright_year"]["files"] == ["src/Foo.java"]
    assert (out_dir / "PRECHECK_REPORT.md").exists()
