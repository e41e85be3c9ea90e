"""Exception hierarchy for precheck runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class PrecheckError(RuntimeError):
    """Base class for precheck failures that abort a run."""


class ConfigError(PrecheckError):
    """Raised when a config file is malformed or structurally invalid."""


class StatusWalkError(PrecheckError):
    """Raised when the working-copy status listing itself fails."""


class NotUnderVersionControl(PrecheckError):
    """Raised when metadata is requested for a path the VCS does not track."""

    def __init__(self, path: Path, detail: str = "") -> None:
        message = f"not under version control: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.path = path


class CopyrightReadError(PrecheckError):
    """Raised when a file cannot be read for the copyright check."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"Could not read file {path} to check copyright date: {cause}")
        self.path = path


class AggregatorFinalizedError(PrecheckError):
    """Raised when an aggregator is used after its verdict was rendered."""
