"""Descriptor emitter: CallShape → expression constructing NamedClosure.

INSTANCE_METHOD: rt.NamedClosure(name="m", owner_type=rt.owner_type_of(r), invoke=lambda: r.m(args))
FREE_FUNCTION:   rt.NamedClosure(name="f", owner_type=None, invoke=lambda: f(args))
UNSUPPORTED:     rt.NamedClosure.sentinel()

rt is the runtime alias imported into the expanded module.
Emitted trees never share nodes with the input.
"""

from __future__ import annotations

import ast
import copy

from namedclosure.domain.call_shape import (
    CallShape,
    FreeFunctionCall,
    InstanceMethodCall,
    Unsupported,
)

_RECORD = "NamedClosure"
_OWNER_TYPE_OF = "owner_type_of"
_SENTINEL = "sentinel"


def emit(shape: CallShape, runtime_alias: str) -> ast.Call:
    """Emit replacement expression for classified marker argument.

    Never evaluates the original expression. Locations are not set;
    the caller copies them from the marker call.

    Args:
        shape: Classified marker argument
        runtime_alias: Name bound to the runtime module in expanded code

    Returns:
        Call expression constructing NamedClosure
    """
    match shape:
        case InstanceMethodCall(receiver=receiver, method_name=method_name, call=call):
            owner = ast.Call(
                func=_runtime_attr(runtime_alias, _OWNER_TYPE_OF),
                args=[copy.deepcopy(receiver)],
                keywords=[],
            )
            body = _restate_call(
                ast.Attribute(value=copy.deepcopy(receiver), attr=method_name, ctx=ast.Load()),
                call,
            )
            return _construct(runtime_alias, method_name, owner, body)

        case FreeFunctionCall(function_name=function_name, call=call):
            body = _restate_call(ast.Name(id=function_name, ctx=ast.Load()), call)
            return _construct(runtime_alias, function_name, ast.Constant(value=None), body)

        case Unsupported():
            return ast.Call(
                func=ast.Attribute(
                    value=_runtime_attr(runtime_alias, _RECORD),
                    attr=_SENTINEL,
                    ctx=ast.Load(),
                ),
                args=[],
                keywords=[],
            )


def _restate_call(callee: ast.expr, original: ast.Call) -> ast.Call:
    """Repeat original call with new callee, arguments verbatim and in order."""
    return ast.Call(
        func=callee,
        args=copy.deepcopy(original.args),
        keywords=copy.deepcopy(original.keywords),
    )


def _construct(runtime_alias: str, name: str, owner: ast.expr, body: ast.expr) -> ast.Call:
    """Build rt.NamedClosure(name=..., owner_type=..., invoke=lambda: body)."""
    return ast.Call(
        func=_runtime_attr(runtime_alias, _RECORD),
        args=[],
        keywords=[
            ast.keyword(arg="name", value=ast.Constant(value=name)),
            ast.keyword(arg="owner_type", value=owner),
            ast.keyword(arg="invoke", value=_thunk(body)),
        ],
    )


def _thunk(body: ast.expr) -> ast.Lambda:
    """Zero-argument lambda around body."""
    return ast.Lambda(
        args=ast.arguments(
            posonlyargs=[],
            args=[],
            vararg=None,
            kwonlyargs=[],
            kw_defaults=[],
            kwarg=None,
            defaults=[],
        ),
        body=body,
    )


def _runtime_attr(runtime_alias: str, attr: str) -> ast.Attribute:
    return ast.Attribute(value=ast.Name(id=runtime_alias, ctx=ast.Load()), attr=attr, ctx=ast.Load())
