"""Precheck configuration loader.

Supports .precheck/config.toml or .precheck/config.yaml for customizing the
extension allow-list, the extensionless directory exception, and the default
override flags. Environment variables (or CLI ``--define`` pairs) named by
``IGNORE_EOL_STYLE_ERRORS_KEY`` and ``IGNORE_COPYRIGHT_ERRORS_KEY`` take
precedence over the configured defaults.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

import yaml  # type: ignore[import-untyped]

from precheck.errors import ConfigError
from precheck.types import PolicyOverride

BackendName = Literal["auto", "svn", "git", "fs"]

IGNORE_EOL_STYLE_ERRORS_KEY = "PRECHECK_IGNORE_EOL_STYLE_ERRORS"
IGNORE_COPYRIGHT_ERRORS_KEY = "PRECHECK_IGNORE_COPYRIGHT_ERRORS"

CONFIG_DIR = ".precheck"

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    "bat",
    "c",
    "h",
    "html",
    "java",
    "ldif",
    "makefile",
    "mc",
    "sh",
    "txt",
    "xml",
    "xsd",
    "xsl",
)

# Extensionless files are checked only under <resource>/<bin>/.
DEFAULT_RESOURCE_BIN: tuple[str, str] = ("resource", "bin")

DEFAULT_EOL_PROPERTY = "svn:eol-style"
DEFAULT_EOL_EXPECTED = "native"

_BACKENDS = ("auto", "svn", "git", "fs")


@dataclass(frozen=True)
class PrecheckConfig:
    """Settings held constant for a whole run."""

    root: Path = field(default_factory=Path.cwd)
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    resource_bin: tuple[str, str] = DEFAULT_RESOURCE_BIN
    eol_property: str = DEFAULT_EOL_PROPERTY
    eol_expected: str = DEFAULT_EOL_EXPECTED
    ignore_eol: bool = False
    ignore_copyright: bool = False
    backend: BackendName = "auto"
    year: str = field(default_factory=lambda: current_year_token())

    @classmethod
    def from_dict(cls, data: dict[str, Any], root: Path) -> PrecheckConfig:
        """Parse and validate a config mapping into PrecheckConfig."""
        config = cls(root=root)

        if "extensions" in data:
            extensions = data["extensions"]
            if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
                raise ValueError("`extensions` must be a list of strings")
            config = replace(config, extensions=normalize_extensions(extensions))

        if "resource_bin" in data:
            pair = data["resource_bin"]
            if not isinstance(pair, list) or len(pair) != 2 or not all(isinstance(p, str) for p in pair):
                raise ValueError("`resource_bin` must be a two-element list of directory names")
            config = replace(config, resource_bin=(pair[0], pair[1]))

        for key in ("eol_property", "eol_expected"):
            if key in data:
                if not isinstance(data[key], str) or not data[key]:
                    raise ValueError(f"`{key}` must be a non-empty string")
                config = replace(config, **{key: data[key]})

        for key in ("ignore_eol", "ignore_copyright"):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ValueError(f"`{key}` must be a boolean")
                config = replace(config, **{key: data[key]})

        if "backend" in data:
            if data["backend"] not in _BACKENDS:
                raise ValueError(f"`backend` must be one of: {', '.join(_BACKENDS)}")
            config = replace(config, backend=data["backend"])

        return config


def current_year_token(now: datetime | None = None) -> str:
    """Return the wall-clock year as the token copyright lines must contain."""
    return str((now or datetime.now()).year)


def normalize_extensions(extensions: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Lowercase allow-list entries, dropping duplicates while keeping order."""
    seen: dict[str, None] = {}
    for ext in extensions:
        seen.setdefault(ext.strip().lstrip(".").lower(), None)
    return tuple(e for e in seen if e)


def load_config(root: Path) -> PrecheckConfig:
    """Load precheck configuration from .precheck/config.toml or .precheck/config.yaml.

    Priority order:
    1. .precheck/config.toml (preferred)
    2. .precheck/config.yaml (fallback)
    3. built-in defaults

    Args:
        root: Scan root directory

    Returns:
        PrecheckConfig rooted at ``root``

    Raises:
        ConfigError: If a config file is malformed or invalid
    """
    config_dir = root / CONFIG_DIR

    toml_path = config_dir / "config.toml"
    if toml_path.exists():
        try:
            with open(toml_path, "rb") as f:
                data = tomllib.load(f)
            return PrecheckConfig.from_dict(data, root)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Malformed TOML config at {toml_path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config structure in {toml_path}: {e}") from e

    yaml_path = config_dir / "config.yaml"
    if yaml_path.exists():
        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError("expected mapping at top level")
            return PrecheckConfig.from_dict(data, root)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML config at {yaml_path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config structure in {yaml_path}: {e}") from e

    return PrecheckConfig(root=root)


def parse_override_value(value: str) -> bool:
    """Parse an override value: ``true`` in any case is true, anything else false."""
    return value.lower() == "true"


def get_override(source: Mapping[str, str], name: str, default: bool) -> bool:
    """Return the override-source value for ``name`` if set, else ``default``."""
    value = source.get(name)
    if value is not None:
        return parse_override_value(value)
    return default


def resolve_overrides(config: PrecheckConfig, source: Mapping[str, str]) -> PolicyOverride:
    """Resolve both ignore flags once for the run."""
    return PolicyOverride(
        ignore_eol=get_override(source, IGNORE_EOL_STYLE_ERRORS_KEY, config.ignore_eol),
        ignore_copyright=get_override(source, IGNORE_COPYRIGHT_ERRORS_KEY, config.ignore_copyright),
    )


def parse_defines(defines: list[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` pairs; a bare ``KEY`` means ``KEY=true``."""
    parsed: dict[str, str] = {}
    for item in defines:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not key:
            raise ConfigError(f"Invalid define (expected KEY=VALUE): {item!r}")
        parsed[key] = value if sep else "true"
    return parsed
