"""Expansion configuration.

User-provided settings shared by expand_source, the import hook,
the pytest plugin and the CLI.
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass, fields, replace

from namedclosure.domain.exceptions import ConfigError

DEFAULT_MARKER = "named_closure"
DEFAULT_RUNTIME_ALIAS = "_namedclosure"
DEFAULT_RUNTIME_MODULE = "namedclosure"


def _is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


@dataclass(frozen=True, slots=True)
class ExpansionConfig:
    """Configuration DTO.

    Immutable configuration object with FAIL-FIRST validation.
    All fields have defaults.

    Attributes:
        markers: Function names treated as transformation requests.
            Matches both marker(...) and module.marker(...).
        strict: Raise UnsupportedExpressionError on unsupported shapes
            instead of emitting the inert sentinel descriptor.
        runtime_alias: Name under which expanded modules import the runtime.
        runtime_module: Module providing NamedClosure.
    """

    markers: frozenset[str] = frozenset({DEFAULT_MARKER})
    strict: bool = False
    runtime_alias: str = DEFAULT_RUNTIME_ALIAS
    runtime_module: str = DEFAULT_RUNTIME_MODULE

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.markers, frozenset):
            raise ConfigError("markers", f"must be frozenset, got {type(self.markers).__name__}")
        if not self.markers:
            raise ConfigError("markers", "must not be empty")
        for marker in self.markers:
            if not _is_identifier(marker):
                raise ConfigError("markers", f"{marker!r} is not a valid identifier")
        if not isinstance(self.strict, bool):
            raise ConfigError("strict", f"must be bool, got {type(self.strict).__name__}")
        if not _is_identifier(self.runtime_alias):
            raise ConfigError("runtime_alias", f"{self.runtime_alias!r} is not a valid identifier")
        if self.runtime_alias in self.markers:
            raise ConfigError("runtime_alias", "must differ from marker names")
        if not all(_is_identifier(part) for part in self.runtime_module.split(".")):
            raise ConfigError("runtime_module", f"{self.runtime_module!r} is not a module path")

    @classmethod
    def from_mapping(cls, data: dict[str, object]) -> ExpansionConfig:
        """Build config from a plain mapping (pyproject table, ini values).

        Lists are converted to frozensets. Unknown keys are rejected.

        Raises:
            ConfigError: Unknown key or invalid value.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, object] = {}
        for key, value in data.items():
            attr = key.replace("-", "_")
            if attr not in known:
                raise ConfigError(key, "unknown option")
            if attr == "markers":
                if isinstance(value, str) or not isinstance(value, list | tuple | set | frozenset):
                    raise ConfigError(key, "must be a list of names")
                value = frozenset(value)
            kwargs[attr] = value
        return cls(**kwargs)  # type: ignore[arg-type]

    def merged(self, **overrides: object) -> ExpansionConfig:
        """Return copy with non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)  # type: ignore[arg-type]
