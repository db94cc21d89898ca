"""Domain layer: captured-call record, call shapes, expansion results, errors."""

from namedclosure.domain.call_shape import (
    CallShape,
    FreeFunctionCall,
    InstanceMethodCall,
    ShapeKind,
    Unsupported,
    UnsupportedReason,
)
from namedclosure.domain.configuration import ExpansionConfig
from namedclosure.domain.expansion import ExpansionResult, ExpansionSite, Location
from namedclosure.domain.named_closure import NamedClosure

__all__ = [
    # Record
    "NamedClosure",
    # Shapes
    "CallShape",
    "FreeFunctionCall",
    "InstanceMethodCall",
    "ShapeKind",
    "Unsupported",
    "UnsupportedReason",
    # Expansion
    "ExpansionConfig",
    "ExpansionResult",
    "ExpansionSite",
    "Location",
]
