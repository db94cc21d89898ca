"""AST analyzers: classify marker arguments and emit replacements."""

from namedclosure.infrastructure.analyzers.base import (
    is_marker_call,
    make_location,
    marker_argument,
    unparse_node,
)
from namedclosure.infrastructure.analyzers.classifier import classify
from namedclosure.infrastructure.analyzers.emitter import emit

__all__ = [
    # Base utilities
    "is_marker_call",
    "make_location",
    "marker_argument",
    "unparse_node",
    # Stages
    "classify",
    "emit",
]
