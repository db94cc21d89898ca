"""Adapters: source parsing, marker transformation, import hook, config file."""

from namedclosure.infrastructure.adapters.ast_parser import expand_tree, parse_source, read_source
from namedclosure.infrastructure.adapters.config_loader import find_pyproject, load_config
from namedclosure.infrastructure.adapters.import_hook import (
    NamedClosureFinder,
    NamedClosureLoader,
    install_import_hook,
    uninstall_import_hook,
)
from namedclosure.infrastructure.adapters.transformer import (
    NamedClosureTransformer,
    runtime_import,
)

__all__ = [
    "NamedClosureFinder",
    "NamedClosureLoader",
    "NamedClosureTransformer",
    "expand_tree",
    "find_pyproject",
    "install_import_hook",
    "load_config",
    "parse_source",
    "read_source",
    "runtime_import",
    "uninstall_import_hook",
]
