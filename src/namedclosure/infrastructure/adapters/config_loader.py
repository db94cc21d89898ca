"""Configuration loader: [tool.namedclosure] table of pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path

from namedclosure.domain.configuration import ExpansionConfig
from namedclosure.domain.exceptions import ConfigError

_TOOL_TABLE = "namedclosure"


def load_config(path: Path) -> ExpansionConfig:
    """Load expansion config from pyproject.toml.

    Missing [tool.namedclosure] table means defaults.

    Args:
        path: Path to pyproject.toml

    Returns:
        ExpansionConfig built from the table

    Raises:
        ConfigError: File unreadable, invalid TOML, unknown key or invalid value
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(str(path), f"cannot read: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(str(path), f"invalid TOML: {e}") from e

    table = data.get("tool", {}).get(_TOOL_TABLE)
    if table is None:
        return ExpansionConfig()
    if not isinstance(table, dict):
        raise ConfigError(f"tool.{_TOOL_TABLE}", "must be a table")

    return ExpansionConfig.from_mapping(table)


def find_pyproject(start: Path) -> Path | None:
    """Find nearest pyproject.toml in start or its parents."""
    current = start.resolve()
    if current.is_file():
        current = current.parent

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    return None
