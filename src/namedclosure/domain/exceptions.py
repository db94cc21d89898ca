"""Domain exceptions: all public errors of namedclosure.

Hexagonal architecture: all exceptions visible to users defined in domain.
Infrastructure/Application use these, not define their own public exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from namedclosure.domain.call_shape import UnsupportedReason
    from namedclosure.domain.expansion import Location


class NamedClosureError(Exception):
    """Base for all namedclosure exceptions.

    Allows: except NamedClosureError to catch all library errors.
    """


class ParseError(NamedClosureError, SyntaxError):
    """Failed to parse Python source.

    FAIL-FIRST: invalid syntax raises immediately.
    Inherits SyntaxError for semantic correctness.

    Attributes:
        path: File name (or pseudo name like "<string>") that failed.
        reason: Error description.
    """

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize with file path and error reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SourceReadError(NamedClosureError, OSError):
    """Source file could not be read.

    Attributes:
        path: File that failed.
        reason: Why reading failed.
    """

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize with file path and error reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")


class SourceUnavailableError(NamedClosureError, TypeError):
    """Source code of a function is not available.

    Raised by expand_function() for builtins, lambdas defined in REPL,
    functions created with exec() etc.

    Attributes:
        qualname: Qualified name of the function.
    """

    def __init__(self, qualname: str) -> None:
        """Initialize with function qualified name."""
        self.qualname = qualname
        super().__init__(f"source code of {qualname!r} is not available")


class ExpansionError(NamedClosureError, ValueError):
    """Marker expansion cannot produce valid code.

    Attributes:
        reason: Why expansion failed.
    """

    def __init__(self, reason: str) -> None:
        """Initialize with reason."""
        if not reason:
            raise ValueError("reason must not be empty")
        self.reason = reason
        super().__init__(reason)


class UnsupportedExpressionError(ExpansionError):
    """Marker argument is not a supported call expression.

    Raised only in strict mode. Default mode emits the inert sentinel instead.

    Attributes:
        location: Marker call site.
        shape_reason: Why classification failed.
        source: Unparsed marker argument ("" when absent).
    """

    def __init__(self, location: Location, shape_reason: UnsupportedReason, source: str) -> None:
        """Initialize with call site, classification reason and argument source."""
        self.location = location
        self.shape_reason = shape_reason
        self.source = source
        shown = source or "<no argument>"
        super().__init__(f"{location}: unsupported expression {shown} ({shape_reason.value})")


class NotExpandedError(NamedClosureError, RuntimeError):
    """Marker function executed at run time.

    The marker call was never rewritten, so its argument has already been
    evaluated. Continuing would hide that the call ran eagerly.

    Attributes:
        marker: Marker function name.
    """

    def __init__(self, marker: str) -> None:
        """Initialize with marker name."""
        self.marker = marker
        super().__init__(
            f"{marker}() executed without expansion; "
            "use expand_function, the import hook or expand_source"
        )


class InvalidInvokeError(NamedClosureError, TypeError):
    """NamedClosure.invoke must be callable.

    Inherits TypeError for semantic correctness.

    Attributes:
        got: Actual type received.
    """

    def __init__(self, got: type) -> None:
        """Initialize with actual type."""
        self.got = got
        super().__init__(f"invoke must be callable, got {got.__name__}")


class OwnerWithoutNameError(NamedClosureError, ValueError):
    """NamedClosure with owner type requires a name.

    Attributes:
        owner_type: Owner type given with empty name.
    """

    def __init__(self, owner_type: type) -> None:
        """Initialize with owner type."""
        self.owner_type = owner_type
        super().__init__(f"owner_type {owner_type.__name__} given without name")


class MissingMethodError(NamedClosureError, AttributeError):
    """Receiver has no callable attribute with the requested name.

    Attributes:
        owner_type: Type of the receiver.
        method_name: Requested method name.
    """

    def __init__(self, owner_type: type, method_name: str) -> None:
        """Initialize with receiver type and method name."""
        self.owner_type = owner_type
        self.method_name = method_name
        super().__init__(f"{owner_type.__name__!r} object has no method {method_name!r}")


class ConfigError(NamedClosureError, ValueError):
    """Invalid namedclosure configuration.

    Attributes:
        key: Offending configuration key.
        reason: Why the value is invalid.
    """

    def __init__(self, key: str, reason: str) -> None:
        """Initialize with key and reason."""
        self.key = key
        self.reason = reason
        super().__init__(f"invalid config {key!r}: {reason}")
