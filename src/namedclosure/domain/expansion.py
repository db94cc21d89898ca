"""Domain layer: result of expanding marker calls in a module.

Data Completeness: every marker call is recorded, unsupported ones included.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from types import CodeType

from namedclosure.domain.call_shape import ShapeKind, UnsupportedReason


@dataclass(frozen=True, slots=True)
class Location:
    """Exact position of a marker call in source code.

    Attributes:
        file: Source file name (or pseudo name like "<string>")
        line: Line number (1-based, must be > 0)
        column: Column number (0-based, must be >= 0)
    """

    file: str
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.file is None:
            raise TypeError("file must not be None")
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0, got {self.column}")

    def __str__(self) -> str:
        """Format as file:line:column."""
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class ExpansionSite:
    """One expanded marker call.

    name is "" and reason is set iff kind is UNSUPPORTED.
    source is the unparsed marker argument ("" when absent).
    """

    location: Location
    kind: ShapeKind
    name: str
    source: str
    reason: UnsupportedReason | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.kind is ShapeKind.UNSUPPORTED:
            if self.reason is None:
                raise ValueError("unsupported site requires reason")
            if self.name:
                raise ValueError(f"unsupported site must have empty name, got {self.name!r}")
        else:
            if self.reason is not None:
                raise ValueError(f"{self.kind.value} site must not have reason")
            if not self.name:
                raise ValueError(f"{self.kind.value} site requires name")

    @property
    def is_supported(self) -> bool:
        """True if a real descriptor was emitted."""
        return self.kind is not ShapeKind.UNSUPPORTED


@dataclass(frozen=True, slots=True)
class ExpansionResult:
    """Module tree with all marker calls replaced.

    tree is owned by the result; callers must not mutate it.
    sites are in source order.
    """

    filename: str
    tree: ast.Module
    sites: tuple[ExpansionSite, ...]

    @property
    def source(self) -> str:
        """Expanded source code."""
        return ast.unparse(self.tree)

    @property
    def expanded(self) -> tuple[ExpansionSite, ...]:
        """Sites that produced a real descriptor."""
        return tuple(s for s in self.sites if s.is_supported)

    @property
    def unsupported(self) -> tuple[ExpansionSite, ...]:
        """Sites that produced the inert sentinel."""
        return tuple(s for s in self.sites if not s.is_supported)

    def code(self) -> CodeType:
        """Compile expanded tree for exec()."""
        return compile(self.tree, self.filename, "exec", dont_inherit=True)
