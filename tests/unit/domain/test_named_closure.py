"""Tests for domain/named_closure.py."""

import pytest

from namedclosure.domain.exceptions import (
    InvalidInvokeError,
    NamedClosureError,
    OwnerWithoutNameError,
)
from namedclosure.domain.named_closure import NamedClosure, owner_type_of


class C:
    def m(self) -> int:
        return 1


class D(C):
    pass


class TestNamedClosureCreation:
    """Tests for construction and validation."""

    def test_free_function_fields(self) -> None:
        closure = NamedClosure(name="free_function", owner_type=None, invoke=lambda: 5)
        assert closure.name == "free_function"
        assert closure.owner_type is None

    def test_method_fields(self) -> None:
        closure = NamedClosure(name="m", owner_type=C, invoke=lambda: None)
        assert closure.owner_type is C

    def test_construction_does_not_invoke(self) -> None:
        calls: list[int] = []
        NamedClosure(name="f", owner_type=None, invoke=lambda: calls.append(1))
        assert calls == []

    def test_non_callable_invoke_raises(self) -> None:
        with pytest.raises(InvalidInvokeError, match="callable"):
            NamedClosure(name="f", owner_type=None, invoke=5)  # type: ignore[arg-type]

    def test_invalid_invoke_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            NamedClosure(name="f", owner_type=None, invoke=None)  # type: ignore[arg-type]

    def test_non_str_name_raises(self) -> None:
        with pytest.raises(TypeError, match="name"):
            NamedClosure(name=None, owner_type=None, invoke=lambda: None)  # type: ignore[arg-type]

    def test_owner_without_name_raises(self) -> None:
        with pytest.raises(OwnerWithoutNameError, match="C"):
            NamedClosure(name="", owner_type=C, invoke=lambda: None)

    def test_owner_without_name_is_library_error(self) -> None:
        with pytest.raises(NamedClosureError):
            NamedClosure(name="", owner_type=C, invoke=lambda: None)

    def test_is_frozen(self) -> None:
        closure = NamedClosure(name="f", owner_type=None, invoke=lambda: None)
        with pytest.raises(AttributeError):
            closure.name = "g"  # type: ignore[misc]


class TestNamedClosureInvoke:
    """Tests for deferred invocation."""

    def test_invoke_returns_result(self) -> None:
        closure = NamedClosure(name="f", owner_type=None, invoke=lambda: 5)
        assert closure.invoke() == 5

    def test_call_delegates_to_invoke(self) -> None:
        closure = NamedClosure(name="f", owner_type=None, invoke=lambda: "x")
        assert closure() == "x"

    def test_invoke_not_memoized(self) -> None:
        calls: list[int] = []
        closure = NamedClosure(name="f", owner_type=None, invoke=lambda: calls.append(1))
        closure.invoke()
        closure.invoke()
        assert calls == [1, 1]


class TestNamedClosurePresentation:
    """Tests for derived string properties."""

    def test_owner_type_name_for_method(self) -> None:
        closure = NamedClosure(name="m", owner_type=C, invoke=lambda: None)
        assert closure.owner_type_name == "C"

    def test_owner_type_name_for_function(self) -> None:
        closure = NamedClosure(name="f", owner_type=None, invoke=lambda: None)
        assert closure.owner_type_name is None

    def test_label_for_method(self) -> None:
        closure = NamedClosure(name="m", owner_type=C, invoke=lambda: None)
        assert closure.label == "C.m"

    def test_label_for_function(self) -> None:
        closure = NamedClosure(name="free_function", owner_type=None, invoke=lambda: None)
        assert closure.label == "free_function"

    def test_str_is_label(self) -> None:
        closure = NamedClosure(name="m", owner_type=C, invoke=lambda: None)
        assert str(closure) == "C.m"


class TestSentinel:
    """Tests for the inert unsupported-shape descriptor."""

    def test_sentinel_fields(self) -> None:
        sentinel = NamedClosure.sentinel()
        assert sentinel.name == ""
        assert sentinel.owner_type is None
        assert sentinel.is_sentinel

    def test_sentinel_invoke_returns_none(self) -> None:
        assert NamedClosure.sentinel().invoke() is None

    def test_sentinel_label_empty(self) -> None:
        assert NamedClosure.sentinel().label == ""

    def test_named_closure_is_not_sentinel(self) -> None:
        closure = NamedClosure(name="f", owner_type=None, invoke=lambda: None)
        assert not closure.is_sentinel


class TestOwnerTypeOf:
    """Tests for owner_type_of."""

    def test_dynamic_type(self) -> None:
        receiver: C = D()
        assert owner_type_of(receiver) is D

    def test_builtin_type(self) -> None:
        assert owner_type_of([]) is list
