"""Expression classifier: marker argument → CallShape.

Pure pattern matching over ast nodes. Never mutates input.

Order of checks is fixed:
1. call with member-access callee  → InstanceMethodCall
2. call with identifier callee     → FreeFunctionCall
3. member access without call      → Unsupported
4. anything else                   → Unsupported
"""

from __future__ import annotations

import ast

from namedclosure.domain.call_shape import (
    CallShape,
    FreeFunctionCall,
    InstanceMethodCall,
    Unsupported,
    UnsupportedReason,
)


def classify(node: ast.expr | None) -> CallShape:
    """Classify marker argument.

    Args:
        node: Marker argument expression, None if marker had no argument

    Returns:
        InstanceMethodCall, FreeFunctionCall or Unsupported with reason

    Examples:
        c.m(1)        → InstanceMethodCall(receiver=c, method_name="m")
        f(x, key=y)   → FreeFunctionCall(function_name="f")
        items[0]()    → Unsupported(UNSUPPORTED_CALLEE)
        c.flag        → Unsupported(MEMBER_ACCESS_WITHOUT_CALL)
    """
    match node:
        case None:
            return Unsupported(UnsupportedReason.MISSING_ARGUMENT)

        case ast.Call(func=ast.Attribute(value=receiver, attr=attr)):
            if (reason := _scope_conflict(node)) is not None:
                return Unsupported(reason)
            return InstanceMethodCall(receiver=receiver, method_name=attr, call=node)

        case ast.Call(func=ast.Name(id=name)):
            if (reason := _scope_conflict(node)) is not None:
                return Unsupported(reason)
            return FreeFunctionCall(function_name=name, call=node)

        case ast.Call():
            # subscript, curried f()(), lambda or other expression callee
            return Unsupported(UnsupportedReason.UNSUPPORTED_CALLEE)

        case ast.Attribute():
            return Unsupported(UnsupportedReason.MEMBER_ACCESS_WITHOUT_CALL)

        case ast.Starred():
            return Unsupported(UnsupportedReason.STARRED_ARGUMENT)

    return Unsupported(UnsupportedReason.NOT_A_CALL)


def _scope_conflict(call: ast.Call) -> UnsupportedReason | None:
    """Find nodes whose meaning changes once the call moves into a lambda.

    await/yield would suspend the lambda, not the enclosing function.
    := would bind inside the lambda instead of the enclosing scope.
    """
    for child in ast.walk(call):
        match child:
            case ast.Await() | ast.Yield() | ast.YieldFrom():
                return UnsupportedReason.SUSPENDING_CALL
            case ast.NamedExpr():
                return UnsupportedReason.ASSIGNMENT_EXPRESSION
    return None
