"""Precheck CLI - EOL style and copyright year checks before commit."""

import os
from dataclasses import replace
from enum import Enum
from pathlib import Path

import typer

from precheck import __version__
from precheck.config import load_config, normalize_extensions, parse_defines
from precheck.engine import run_precheck
from precheck.errors import PrecheckError
from precheck.log import configure_logging
from precheck.report import write_reports
from precheck.types import Verdict
from precheck.vcs import make_working_copy

cli = typer.Typer(
    name="precheck",
    help="Precheck - verify EOL style metadata and copyright years of modified files",
    no_args_is_help=True,
)


class Backend(str, Enum):
    """Working-copy backend selection."""

    AUTO = "auto"
    SVN = "svn"
    GIT = "git"
    FS = "fs"


def _validate_year(value: str | None) -> str | None:
    if value is not None and not (value.isascii() and value.isdigit()):
        raise typer.BadParameter(f"expected a numeric year such as 2026, got {value!r}")
    return value


@cli.command()
def version() -> None:
    """Print the precheck version."""
    typer.echo(__version__)


@cli.command(name="check")
def check_cmd(
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        help="Scan root (working-copy directory)",
    ),
    backend: Backend | None = typer.Option(
        None,
        "--backend",
        help="Working-copy backend (default: config value, else auto-detect)",
    ),
    paths: list[Path] | None = typer.Option(
        None,
        "--path",
        "-p",
        help="Check only these files instead of the status listing (repeatable, relative to the current directory)",
    ),
    extensions: list[str] | None = typer.Option(
        None,
        "--extension",
        "-e",
        help="Replace the extension allow-list (repeatable)",
    ),
    ignore_eol: bool | None = typer.Option(
        None,
        "--ignore-eol/--no-ignore-eol",
        help="Default for ignoring EOL style violations",
    ),
    ignore_copyright: bool | None = typer.Option(
        None,
        "--ignore-copyright/--no-ignore-copyright",
        help="Default for ignoring copyright year violations",
    ),
    define: list[str] | None = typer.Option(
        None,
        "--define",
        "-D",
        help="Override source entry KEY=VALUE; wins over the environment and defaults",
    ),
    year: str | None = typer.Option(
        None,
        "--year",
        callback=_validate_year,
        help="Year token copyright lines must contain (default: current year)",
    ),
    jobs: int = typer.Option(
        1,
        "--jobs",
        "-j",
        min=1,
        help="Worker threads for per-file checks",
    ),
    report_dir: Path | None = typer.Option(
        None,
        "--report-dir",
        help="Write PRECHECK_REPORT.json and PRECHECK_REPORT.md here",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log skipped files and untracked-file details",
    ),
) -> None:
    """Check modified files for EOL style and copyright year problems."""
    configure_logging(verbose)

    try:
        resolved_root = root.resolve()
        config = load_config(resolved_root)
        if backend is not None:
            config = replace(config, backend=backend.value)
        if extensions:
            config = replace(config, extensions=normalize_extensions(extensions))
        if ignore_eol is not None:
            config = replace(config, ignore_eol=ignore_eol)
        if ignore_copyright is not None:
            config = replace(config, ignore_copyright=ignore_copyright)
        if year is not None:
            config = replace(config, year=year)

        override_source = dict(os.environ)
        override_source.update(parse_defines(define or []))

        explicit_paths = [p.resolve() for p in paths] if paths else None
        working_copy = make_working_copy(config.backend, resolved_root, explicit_paths)
        summary = run_precheck(config, working_copy, override_source, jobs=jobs)
    except PrecheckError as e:
        typer.echo(f"❌ Precheck run failed: {e}", err=True)
        typer.echo("No further checks will be performed.", err=True)
        raise typer.Exit(code=1) from e

    typer.echo("\nPrecheck Report")
    typer.echo(f"Status: {summary.verdict.value.upper()}")
    typer.echo(f"Year: {summary.year}")
    typer.echo(f"Files checked: {summary.files_checked} (skipped {summary.files_skipped})")
    typer.echo(f"EOL style violations: {len(summary.eol_violations)}")
    typer.echo(f"Copyright year violations: {len(summary.copyright_violations)}")

    if report_dir is not None:
        json_path, md_path = write_reports(summary, report_dir)
        typer.echo("\nReports written to:")
        typer.echo(f"  {json_path}")
        typer.echo(f"  {md_path}")

    if summary.verdict is Verdict.FAIL:
        typer.echo("\n❌ Precheck failed.")
        raise typer.Exit(code=2)
    typer.echo("\n✅ Precheck passed.")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
