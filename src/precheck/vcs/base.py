"""Working-copy collaborator protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@dataclass(frozen=True)
class StatusEntry:
    """One path reported by a working-copy status listing."""

    path: Path
    status: str = ""


class WorkingCopy(Protocol):
    """What the engine needs from a version-control backend."""

    name: str

    def list_status(self, root: Path) -> Iterator[StatusEntry]:
        """Yield status entries for the full subtree under ``root``, in walk order.

        Raises StatusWalkError if the listing fails.
        """
        ...

    def get_property(self, path: Path, name: str) -> str | None:
        """Return the working-tree value of property ``name``, or None if unset.

        Raises NotUnderVersionControl if ``path`` is not tracked.
        """
        ...
