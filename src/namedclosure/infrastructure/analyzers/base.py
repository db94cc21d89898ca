"""Base utilities for AST analyzers."""

from __future__ import annotations

import ast

from namedclosure.domain.expansion import Location


def make_location(node: ast.expr, filename: str) -> Location:
    """Create Location from AST node.

    Args:
        node: AST expression with position info
        filename: Source file name

    Returns:
        Location pointing to node

    Raises:
        ValueError: If node has no line info (FAIL-FIRST)
    """
    lineno = getattr(node, "lineno", None)
    if lineno is None:
        raise ValueError(f"{type(node).__name__} node has no line info")

    return Location(file=filename, line=lineno, column=node.col_offset)


def unparse_node(node: ast.expr | None) -> str:
    """Convert AST expression to source string ("" for None)."""
    if node is None:
        return ""
    return ast.unparse(node)


def is_marker_call(node: ast.Call, markers: frozenset[str]) -> bool:
    """Check if call invokes one of the marker functions.

    Matches marker(...) and anything.marker(...).

    Args:
        node: Call node to check
        markers: Marker function names

    Returns:
        True if callee name is a marker
    """
    match node.func:
        case ast.Name(id=name) if name in markers:
            return True
        case ast.Attribute(attr=attr) if attr in markers:
            return True
    return False


def marker_argument(node: ast.Call) -> ast.expr | None:
    """First positional argument of a marker call.

    Further arguments are ignored: one marker captures one call.

    Args:
        node: Marker call node

    Returns:
        Argument expression, None if marker called without positional args
    """
    if not node.args:
        return None
    return node.args[0]
