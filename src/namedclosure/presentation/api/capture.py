"""Public capture API.

named_closure(...)  marker rewritten by expansion, never meant to execute
capture_method(...) explicit builder, no expansion needed
capture_function(...) explicit builder, no expansion needed
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn, ParamSpec, TypeVar

from namedclosure.domain.configuration import DEFAULT_MARKER
from namedclosure.domain.exceptions import MissingMethodError, NotExpandedError
from namedclosure.domain.named_closure import NamedClosure

if TYPE_CHECKING:
    from collections.abc import Callable

P = ParamSpec("P")
R = TypeVar("R")


def named_closure(expression: object = None, /) -> NoReturn:
    """Capture a call: named_closure(obj.method(args)) or named_closure(func(args)).

    Only meaningful in expanded code (expand_function, import hook,
    expand_source). There the whole marker call is replaced by a
    NamedClosure construction and this function never runs.

    Raises:
        NotExpandedError: Always. Reaching this means the argument was
            already evaluated eagerly.
    """
    raise NotExpandedError(DEFAULT_MARKER)


def capture_method(receiver: Any, method_name: str, /, *args: Any, **kwargs: Any) -> NamedClosure[Any]:
    """Capture receiver.method_name(*args, **kwargs) without calling it.

    Arguments are evaluated now (by Python, at this call). Method lookup
    and the call itself happen on every invoke().

    Raises:
        MissingMethodError: Receiver has no callable attribute method_name.
    """
    if not method_name:
        raise ValueError("method_name must not be empty")
    if not callable(getattr(receiver, method_name, None)):
        raise MissingMethodError(type(receiver), method_name)

    def invoke() -> Any:
        return getattr(receiver, method_name)(*args, **kwargs)

    return NamedClosure(name=method_name, owner_type=type(receiver), invoke=invoke)


def capture_function(func: Callable[P, R], /, *args: P.args, **kwargs: P.kwargs) -> NamedClosure[R]:
    """Capture func(*args, **kwargs) without calling it.

    name is func.__name__.
    """
    if not callable(func):
        raise TypeError(f"func must be callable, got {type(func).__name__}")

    name = getattr(func, "__name__", "")
    if not name:
        raise ValueError(f"cannot capture {func!r}: no __name__")

    def invoke() -> R:
        return func(*args, **kwargs)

    return NamedClosure(name=name, owner_type=None, invoke=invoke)
