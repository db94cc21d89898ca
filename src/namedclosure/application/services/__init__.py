"""Application services."""

from namedclosure.application.services.expander import (
    DEFAULT_EXCLUDES,
    expand_directory,
    expand_file,
    expand_function,
    expand_source,
)

__all__ = [
    "DEFAULT_EXCLUDES",
    "expand_directory",
    "expand_file",
    "expand_function",
    "expand_source",
]
