"""pytest plugin for namedclosure.

Provides fixtures:
    named_closure_config: ExpansionConfig from ini options
    named_closure_expander: expand_source bound to that config

Configuration (pytest.ini or pyproject.toml):
    named_closure_modules: Package prefixes expanded at import time (one per line)
    named_closure_strict: Fail on unsupported marker arguments (default: false)
"""

from __future__ import annotations

import pytest

from namedclosure.infrastructure.adapters import (
    NamedClosureFinder,
    install_import_hook,
    uninstall_import_hook,
)

# Register fixtures from fixtures module
from namedclosure.presentation.pytest_plugin.fixtures import (
    config_from_ini,
    named_closure_config,
    named_closure_expander,
)

# Export fixtures for pytest discovery
__all__ = [
    "named_closure_config",
    "named_closure_expander",
]

_FINDER_KEY = pytest.StashKey[NamedClosureFinder]()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options."""
    parser.addini(
        "named_closure_modules",
        type="linelist",
        default=[],
        help="package prefixes whose named_closure(...) calls are expanded on import",
    )
    parser.addini(
        "named_closure_strict",
        type="bool",
        default=False,
        help="fail on unsupported named_closure(...) arguments",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Install import hook for configured packages."""
    prefixes = config.getini("named_closure_modules")
    if not prefixes:
        return

    finder = install_import_hook(prefixes, config_from_ini(config))
    config.stash[_FINDER_KEY] = finder


def pytest_unconfigure(config: pytest.Config) -> None:
    """Remove import hook installed in pytest_configure."""
    finder = config.stash.get(_FINDER_KEY, None)
    if finder is not None:
        uninstall_import_hook(finder)
        del config.stash[_FINDER_KEY]
