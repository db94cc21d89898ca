"""Public API: marker function and explicit capture builders."""

from namedclosure.presentation.api.capture import capture_function, capture_method, named_closure

__all__ = [
    "capture_function",
    "capture_method",
    "named_closure",
]
