"""Domain layer: classified shape of a marker argument.

Tagged variant with three cases:

INSTANCE_METHOD: receiver.method(args)
FREE_FUNCTION:   function(args)
UNSUPPORTED:     everything else (reason tracked, not dropped)
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ShapeKind(Enum):
    """Which call form a marker argument matches."""

    INSTANCE_METHOD = "INSTANCE_METHOD"
    FREE_FUNCTION = "FREE_FUNCTION"
    UNSUPPORTED = "UNSUPPORTED"


class UnsupportedReason(Enum):
    """Why a marker argument was not classified as a supported call."""

    MISSING_ARGUMENT = "missing argument"
    STARRED_ARGUMENT = "starred argument"
    SUSPENDING_CALL = "await or yield inside call"
    ASSIGNMENT_EXPRESSION = "assignment expression inside call"
    CLASS_SCOPE_NAME = "class body name inside call"
    MEMBER_ACCESS_WITHOUT_CALL = "member access without call"
    UNSUPPORTED_CALLEE = "unsupported callee"
    NOT_A_CALL = "not a call expression"


@dataclass(frozen=True, slots=True)
class InstanceMethodCall:
    """Call whose callee is a member access: receiver.method(args).

    call is the original ast.Call, kept for its argument list.
    """

    kind: ClassVar[ShapeKind] = ShapeKind.INSTANCE_METHOD

    receiver: ast.expr
    method_name: str
    call: ast.Call

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.method_name:
            raise ValueError("method_name must not be empty")

    @property
    def name(self) -> str:
        """Captured name."""
        return self.method_name


@dataclass(frozen=True, slots=True)
class FreeFunctionCall:
    """Call whose callee is a bare identifier: function(args)."""

    kind: ClassVar[ShapeKind] = ShapeKind.FREE_FUNCTION

    function_name: str
    call: ast.Call

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.function_name:
            raise ValueError("function_name must not be empty")

    @property
    def name(self) -> str:
        """Captured name."""
        return self.function_name


@dataclass(frozen=True, slots=True)
class Unsupported:
    """Marker argument matching neither supported call form."""

    kind: ClassVar[ShapeKind] = ShapeKind.UNSUPPORTED

    reason: UnsupportedReason

    @property
    def name(self) -> str:
        """Sentinel name."""
        return ""


CallShape = InstanceMethodCall | FreeFunctionCall | Unsupported
