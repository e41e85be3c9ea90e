"""Decide from a path alone whether a file is in scope for checking."""

from __future__ import annotations

from pathlib import Path

from precheck.config import DEFAULT_EXTENSIONS, DEFAULT_RESOURCE_BIN


def get_extension(name: str) -> str | None:
    """Return the text after the last dot, or None if there is no usable dot.

    A leading dot (``.bashrc``) does not start an extension.
    """
    pos = name.rfind(".")
    if pos > 0:
        return name[pos + 1:]
    return None


def is_eligible(
    path: Path,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    resource_bin: tuple[str, str] = DEFAULT_RESOURCE_BIN,
) -> bool:
    """
    Check whether a visited path should be checked.

    Args:
        path: File path reported by the working-copy walk
        extensions: Lowercase extension allow-list
        resource_bin: (grandparent, parent) directory names that admit extensionless files

    Returns:
        True if the path is an existing regular file in scope
    """
    # Status entries may name deleted paths or directories.
    if not path.exists() or not path.is_file():
        return False

    extension = get_extension(path.name)
    if extension is not None:
        return extension.lower() in extensions

    parent = path.parent
    if parent.name != resource_bin[1]:
        return False
    return parent.parent.name == resource_bin[0]
