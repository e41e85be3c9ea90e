"""Shared fixtures for precheck unit tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest

from precheck.errors import NotUnderVersionControl
from precheck.vcs.base import StatusEntry


class FakeWorkingCopy:
    """In-memory working copy: ordered entries plus per-path properties."""

    name = "fake"

    def __init__(
        self,
        entries: list[Path],
        properties: dict[Path, str | None] | None = None,
        untracked: set[Path] | None = None,
    ) -> None:
        self.entries = entries
        self.properties = properties or {}
        self.untracked = untracked or set()
        self.property_calls: list[tuple[Path, str]] = []

    def list_status(self, root: Path) -> Iterator[StatusEntry]:
        for path in self.entries:
            yield StatusEntry(path=path, status="modified")

    def get_property(self, path: Path, name: str) -> str | None:
        self.property_calls.append((path, name))
        if path in self.untracked:
            raise NotUnderVersionControl(path)
        return self.properties.get(path)


@pytest.fixture
def fake_working_copy() -> type[FakeWorkingCopy]:
    return FakeWorkingCopy


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Create a text file under tmp_path, making parent directories."""

    def _write(rel_path: str, contents: str = "") -> Path:
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")
        return path

    return _write
