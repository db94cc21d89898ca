"""pytest fixtures for namedclosure.

User overrides named_closure_config in their conftest.py.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

import pytest

from namedclosure.application.services import expand_source
from namedclosure.domain.configuration import ExpansionConfig

if TYPE_CHECKING:
    from collections.abc import Callable

    from namedclosure.domain.expansion import ExpansionResult


def config_from_ini(config: pytest.Config) -> ExpansionConfig:
    """Build ExpansionConfig from ini options.

    named_closure_strict: bool (default false)
    """
    strict = config.getini("named_closure_strict")
    return ExpansionConfig(strict=bool(strict))


@pytest.fixture(scope="session")
def named_closure_config(request: pytest.FixtureRequest) -> ExpansionConfig:
    """Expansion configuration from ini options.

    Returns:
        ExpansionConfig honoring named_closure_strict
    """
    return config_from_ini(request.config)


@pytest.fixture
def named_closure_expander(
    named_closure_config: ExpansionConfig,
) -> Callable[..., ExpansionResult]:
    """expand_source bound to the session configuration.

    Usage:
        result = named_closure_expander("x = named_closure(f())")
        namespace = {"f": f}
        exec(result.code(), namespace)
    """
    return functools.partial(expand_source, config=named_closure_config)
