"""NamedClosure: captured call with name, owner type and deferred invocation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from namedclosure.domain.exceptions import InvalidInvokeError, OwnerWithoutNameError

R = TypeVar("R")


def _noop() -> None:
    return None


def owner_type_of(receiver: object) -> type:
    """Dynamic type of a receiver.

    Expanded code calls this instead of type() so that a local variable
    named "type" at the capture site cannot change the result.
    """
    return type(receiver)


@dataclass(frozen=True, slots=True)
class NamedClosure(Generic[R]):
    """Function or method call captured without being executed.

    Built by the expansion of ``named_closure(obj.method(...))`` or
    ``named_closure(function(...))``, or by the explicit builders
    capture_method()/capture_function().

    Construction only captures. Every call of invoke() runs the original
    call once more; results are never memoized. Names are looked up when
    invoke() runs, so a loop variable captured inside a loop or
    comprehension has its final value by then.

    Attributes:
        name: Method or function name. "" marks an unsupported capture.
        owner_type: Runtime type of the receiver for methods, None otherwise.
        invoke: Zero-argument callable performing the original call.
    """

    name: str
    owner_type: type | None
    invoke: Callable[[], R]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.name, str):
            raise TypeError(f"name must be str, got {type(self.name).__name__}")
        if not callable(self.invoke):
            raise InvalidInvokeError(type(self.invoke))
        if self.owner_type is not None and not self.name:
            raise OwnerWithoutNameError(self.owner_type)

    @classmethod
    def sentinel(cls) -> NamedClosure[None]:
        """Create the inert descriptor emitted for unsupported expressions."""
        return cls(name="", owner_type=None, invoke=_noop)

    @property
    def owner_type_name(self) -> str | None:
        """Owner type name, None for free functions."""
        if self.owner_type is None:
            return None
        return self.owner_type.__name__

    @property
    def label(self) -> str:
        """Human-readable "Type.name" or bare "name"."""
        if self.owner_type is None:
            return self.name
        return f"{self.owner_type.__name__}.{self.name}"

    @property
    def is_sentinel(self) -> bool:
        """True if capture failed (empty name)."""
        return not self.name

    def __call__(self) -> R:
        """Run the captured call."""
        return self.invoke()

    def __str__(self) -> str:
        """Format as label."""
        return self.label
