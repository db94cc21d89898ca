"""Design rule compliance tests.

- FAIL-FIRST validation: invalid values raise, never fall back silently
- Immutability: domain objects are frozen
- Data completeness: every marker call is reported, supported or not
"""

from __future__ import annotations

import ast

import pytest

from namedclosure.domain.call_shape import (
    FreeFunctionCall,
    ShapeKind,
    Unsupported,
    UnsupportedReason,
)
from namedclosure.domain.configuration import ExpansionConfig
from namedclosure.domain.exceptions import ConfigError, InvalidInvokeError
from namedclosure.domain.expansion import ExpansionResult, Location
from namedclosure.domain.named_closure import NamedClosure
from tests.factories import expand, make_location, make_site, parse_expr

# =============================================================================
# FAIL-FIRST Validation
# =============================================================================


class TestFailFirstValidation:
    """Invalid construction raises immediately."""

    def test_location_zero_line_raises(self) -> None:
        with pytest.raises(ValueError, match="line"):
            Location(file="a.py", line=0, column=0)

    def test_named_closure_invoke_not_callable_raises(self) -> None:
        with pytest.raises(InvalidInvokeError):
            NamedClosure(name="f", owner_type=None, invoke=5)  # type: ignore[arg-type]

    def test_config_empty_markers_raises(self) -> None:
        with pytest.raises(ConfigError):
            ExpansionConfig(markers=frozenset())

    def test_free_function_empty_name_raises(self) -> None:
        call = parse_expr("f()")
        assert isinstance(call, ast.Call)
        with pytest.raises(ValueError, match="function_name"):
            FreeFunctionCall(function_name="", call=call)


# =============================================================================
# Immutability
# =============================================================================


class TestImmutability:
    """Domain objects reject attribute assignment."""

    def test_location_frozen(self) -> None:
        loc = make_location()
        with pytest.raises(AttributeError):
            loc.file = "other.py"  # type: ignore[misc]

    def test_site_frozen(self) -> None:
        site = make_site()
        with pytest.raises(AttributeError):
            site.name = "g"  # type: ignore[misc]

    def test_named_closure_frozen(self) -> None:
        closure = NamedClosure(name="f", owner_type=None, invoke=lambda: 1)
        with pytest.raises(AttributeError):
            closure.name = "g"  # type: ignore[misc]

    def test_unsupported_frozen(self) -> None:
        shape = Unsupported(UnsupportedReason.NOT_A_CALL)
        with pytest.raises(AttributeError):
            shape.reason = UnsupportedReason.MISSING_ARGUMENT  # type: ignore[misc]

    def test_config_frozen(self) -> None:
        config = ExpansionConfig()
        with pytest.raises(AttributeError):
            config.strict = True  # type: ignore[misc]

    def test_result_sites_tuple(self) -> None:
        result = expand("x = named_closure(f())\n")
        assert isinstance(result.sites, tuple)


# =============================================================================
# Data Completeness
# =============================================================================


class TestDataCompleteness:
    """Invariant: sites = expanded + unsupported, one site per marker call."""

    def test_every_marker_reported(self) -> None:
        result = expand(
            """
            a = named_closure(c.m())
            b = named_closure(f())
            c = named_closure(items[0])
            d = named_closure()
            """,
        )
        assert len(result.sites) == 4
        assert len(result.expanded) + len(result.unsupported) == len(result.sites)

    def test_unsupported_kept_with_reason(self) -> None:
        result = expand("x = named_closure(c.flag)\n")
        (site,) = result.unsupported
        assert site.kind is ShapeKind.UNSUPPORTED
        assert site.reason is UnsupportedReason.MEMBER_ACCESS_WITHOUT_CALL

    def test_empty_result(self) -> None:
        result = ExpansionResult(filename="<test>", tree=ast.parse(""), sites=())
        assert result.expanded == ()
        assert result.unsupported == ()
