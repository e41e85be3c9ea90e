"""Precheck engine: per-file evaluation, violation aggregation, verdict."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from precheck.checks import check_copyright, check_eol, is_eligible
from precheck.config import resolve_overrides
from precheck.errors import AggregatorFinalizedError
from precheck.report import log_summary
from precheck.types import (
    CheckKind,
    CheckResult,
    FileEvaluation,
    PolicyOverride,
    RunSummary,
    ScanTarget,
    Verdict,
    ViolationRecord,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from precheck.config import PrecheckConfig
    from precheck.vcs.base import WorkingCopy

logger = logging.getLogger(__name__)


def relative_path(path: Path, root: Path) -> str:
    """Render ``path`` relative to the scan root, or as-is when outside it."""
    absolute = path.absolute()
    try:
        return absolute.relative_to(root.absolute()).as_posix()
    except ValueError:
        return str(absolute)


def scan_target(path: Path, config: PrecheckConfig) -> ScanTarget:
    """Resolve whether a visited path is in scope."""
    return ScanTarget(
        path=path,
        eligible=is_eligible(path, config.extensions, config.resource_bin),
    )


def evaluate(path: Path, working_copy: WorkingCopy, config: PrecheckConfig) -> FileEvaluation:
    """Run both checks on one eligible file.

    The EOL result never short-circuits the copyright check. A copyright read
    failure raises CopyrightReadError.
    """
    eol = check_eol(path, working_copy, config.eol_property, config.eol_expected)
    copyright = check_copyright(path, config.year)
    return FileEvaluation(path=path, eol=eol, copyright=copyright)


class Aggregator:
    """Collects check results in visitation order and renders one verdict."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.state = "idle"
        self.files_visited = 0
        self.files_skipped = 0
        self.files_checked = 0
        self.eol_indeterminate = 0
        self.verdict: Verdict | None = None
        self.blocking_kinds: list[CheckKind] = []
        self._violations: dict[CheckKind, list[ViolationRecord]] = {
            CheckKind.EOL_STYLE: [],
            CheckKind.COPYRIGHT_YEAR: [],
        }

    def _ensure_open(self) -> None:
        if self.state == "finalized":
            raise AggregatorFinalizedError("Aggregator already finalized; no further results accepted")
        self.state = "collecting"

    def skip(self, target: ScanTarget) -> None:
        self._ensure_open()
        self.files_visited += 1
        self.files_skipped += 1
        logger.debug("Skipping out-of-scope path %s", target.path)

    def add(self, path: Path, kind: CheckKind, result: CheckResult) -> None:
        """Record one result; only violations are kept."""
        self._ensure_open()
        if result is CheckResult.VIOLATION:
            self._violations[kind].append(ViolationRecord(path=relative_path(path, self.root), kind=kind))
        elif result is CheckResult.INDETERMINATE and kind is CheckKind.EOL_STYLE:
            self.eol_indeterminate += 1

    def add_evaluation(self, evaluation: FileEvaluation) -> None:
        self._ensure_open()
        self.files_visited += 1
        self.files_checked += 1
        self.add(evaluation.path, CheckKind.EOL_STYLE, evaluation.eol)
        self.add(evaluation.path, CheckKind.COPYRIGHT_YEAR, evaluation.copyright)

    def violations(self, kind: CheckKind) -> list[ViolationRecord]:
        return list(self._violations[kind])

    def finalize(self, overrides: PolicyOverride) -> Verdict:
        """Compute the verdict once.

        Any kind with violations that is not overridden fails the run.
        """
        if self.state == "finalized":
            raise AggregatorFinalizedError("Verdict already computed")
        self.state = "finalized"

        self.blocking_kinds = [
            kind
            for kind, records in self._violations.items()
            if records and not overrides.ignores(kind)
        ]
        self.verdict = Verdict.FAIL if self.blocking_kinds else Verdict.PASS
        return self.verdict


def collect(
    targets: Iterable[ScanTarget],
    working_copy: WorkingCopy,
    config: PrecheckConfig,
    aggregator: Aggregator,
    jobs: int = 1,
) -> Aggregator:
    """Feed every target through the checks into ``aggregator``.

    With ``jobs > 1`` evaluations run on a thread pool; results are still
    consumed in visitation order, so violation ordering matches a sequential run.
    """
    if jobs <= 1:
        for target in targets:
            if not target.eligible:
                aggregator.skip(target)
                continue
            aggregator.add_evaluation(evaluate(target.path, working_copy, config))
        return aggregator

    ordered = list(targets)
    eligible = [t.path for t in ordered if t.eligible]
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        evaluations = iter(pool.map(lambda p: evaluate(p, working_copy, config), eligible))
        for target in ordered:
            if not target.eligible:
                aggregator.skip(target)
                continue
            aggregator.add_evaluation(next(evaluations))
    return aggregator


def run_precheck(
    config: PrecheckConfig,
    working_copy: WorkingCopy,
    override_source: Mapping[str, str],
    jobs: int = 1,
) -> RunSummary:
    """
    Check every status entry under the configured root and render a verdict.

    Args:
        config: Run configuration, including the pinned year token
        working_copy: Status and metadata collaborator
        override_source: Environment-level override values (e.g. os.environ)
        jobs: Worker threads for per-file evaluation

    Returns:
        RunSummary with the verdict and violating paths per kind

    Raises:
        StatusWalkError: If the status listing fails; no verdict is produced
        CopyrightReadError: If a file cannot be read; no verdict is produced
    """
    root = config.root
    logger.debug(
        "Scanning %s with %s backend (year %s)", root, working_copy.name, config.year
    )

    targets = (scan_target(entry.path, config) for entry in working_copy.list_status(root))
    aggregator = collect(targets, working_copy, config, Aggregator(root), jobs=jobs)

    overrides = resolve_overrides(config, override_source)
    verdict = aggregator.finalize(overrides)

    summary = RunSummary(
        verdict=verdict,
        year=config.year,
        root=root,
        overrides=overrides,
        files_visited=aggregator.files_visited,
        files_checked=aggregator.files_checked,
        files_skipped=aggregator.files_skipped,
        eol_indeterminate=aggregator.eol_indeterminate,
        eol_violations=[r.path for r in aggregator.violations(CheckKind.EOL_STYLE)],
        copyright_violations=[r.path for r in aggregator.violations(CheckKind.COPYRIGHT_YEAR)],
        blocking_kinds=list(aggregator.blocking_kinds),
    )
    log_summary(summary)
    return summary
