"""Tests for domain/exceptions.py."""

import pytest

from namedclosure.domain.call_shape import UnsupportedReason
from namedclosure.domain.exceptions import (
    ConfigError,
    ExpansionError,
    InvalidInvokeError,
    MissingMethodError,
    NamedClosureError,
    NotExpandedError,
    OwnerWithoutNameError,
    ParseError,
    SourceReadError,
    SourceUnavailableError,
    UnsupportedExpressionError,
)
from tests.factories import make_location


class Service:
    pass


class TestHierarchy:
    """All public errors share one root and a matching stdlib base."""

    @pytest.mark.parametrize(
        ("error", "stdlib_base"),
        [
            (ParseError(path="a.py", reason="bad"), SyntaxError),
            (SourceReadError(path="a.py", reason="gone"), OSError),
            (SourceUnavailableError("f"), TypeError),
            (ExpansionError("broken"), ValueError),
            (NotExpandedError("named_closure"), RuntimeError),
            (InvalidInvokeError(int), TypeError),
            (OwnerWithoutNameError(Service), ValueError),
            (MissingMethodError(Service, "run"), AttributeError),
            (ConfigError("strict", "must be bool"), ValueError),
        ],
    )
    def test_bases(self, error: NamedClosureError, stdlib_base: type[Exception]) -> None:
        assert isinstance(error, NamedClosureError)
        assert isinstance(error, stdlib_base)

    def test_unsupported_is_expansion_error(self) -> None:
        error = UnsupportedExpressionError(make_location(), UnsupportedReason.NOT_A_CALL, "x")
        assert isinstance(error, ExpansionError)


class TestMessages:
    """Messages carry the offending values."""

    def test_parse_error(self) -> None:
        error = ParseError(path="a.py", reason="invalid syntax")
        assert str(error) == "a.py: invalid syntax"
        assert error.path == "a.py"

    def test_source_read_error(self) -> None:
        error = SourceReadError(path="a.py", reason="File not found")
        assert "Failed to read a.py" in str(error)

    def test_source_unavailable(self) -> None:
        assert "'len'" in str(SourceUnavailableError("len"))

    def test_expansion_error_requires_reason(self) -> None:
        with pytest.raises(ValueError, match="reason"):
            ExpansionError("")

    def test_unsupported_expression(self) -> None:
        error = UnsupportedExpressionError(
            make_location(line=4, column=8),
            UnsupportedReason.NOT_A_CALL,
            "items[0]",
        )
        assert str(error) == "<test>:4:8: unsupported expression items[0] (not a call expression)"
        assert error.shape_reason is UnsupportedReason.NOT_A_CALL

    def test_unsupported_without_argument(self) -> None:
        error = UnsupportedExpressionError(make_location(), UnsupportedReason.MISSING_ARGUMENT, "")
        assert "<no argument>" in str(error)

    def test_not_expanded(self) -> None:
        error = NotExpandedError("named_closure")
        assert str(error).startswith("named_closure() executed without expansion")

    def test_invalid_invoke(self) -> None:
        assert str(InvalidInvokeError(int)) == "invoke must be callable, got int"

    def test_owner_without_name(self) -> None:
        assert "Service" in str(OwnerWithoutNameError(Service))

    def test_missing_method(self) -> None:
        error = MissingMethodError(Service, "run")
        assert error.method_name == "run"
        assert "'run'" in str(error)

    def test_config_error(self) -> None:
        error = ConfigError("strict", "must be bool")
        assert str(error) == "invalid config 'strict': must be bool"
