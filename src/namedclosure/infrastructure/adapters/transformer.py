"""Marker transformer: replace marker calls in a module tree.

named_closure(c.m(x)) → _namedclosure.NamedClosure(name="m", ...)

One transformer instance per tree. No state shared between instances,
so separate trees can be expanded in parallel.
"""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

from namedclosure.domain.call_shape import Unsupported, UnsupportedReason
from namedclosure.domain.exceptions import UnsupportedExpressionError
from namedclosure.domain.expansion import ExpansionSite
from namedclosure.infrastructure.analyzers import (
    classify,
    emit,
    is_marker_call,
    make_location,
    marker_argument,
    unparse_node,
)

if TYPE_CHECKING:
    from namedclosure.domain.configuration import ExpansionConfig

logger = logging.getLogger(__name__)


class NamedClosureTransformer(ast.NodeTransformer):
    """Rewrite every marker call into a NamedClosure construction.

    Nested markers are expanded inside-out. One ExpansionSite per marker.
    visit_Module adds the runtime import when anything was expanded.

    FAIL-FIRST in strict mode: UnsupportedExpressionError on the first
    unsupported marker argument.
    """

    def __init__(self, filename: str, config: ExpansionConfig) -> None:
        """Initialize transformer.

        Args:
            filename: Source file name used in locations
            config: Expansion configuration
        """
        if config is None:
            raise TypeError("config must not be None")

        self._filename = filename
        self._config = config
        self._sites: list[ExpansionSite] = []
        # names bound by the innermost enclosing class body, None inside functions
        self._scopes: list[frozenset[str] | None] = []

    @property
    def sites(self) -> tuple[ExpansionSite, ...]:
        """Expanded marker calls in source order."""
        return tuple(
            sorted(self._sites, key=lambda s: (s.location.line, s.location.column)),
        )

    def visit_Module(self, node: ast.Module) -> ast.Module:
        """Expand markers, then import runtime if needed."""
        self.generic_visit(node)
        if self._sites:
            _insert_runtime_import(node, self._config)
        return node

    def visit_ClassDef(self, node: ast.ClassDef) -> ast.ClassDef:
        """Track class body bindings, invisible to lambdas defined there."""
        self._scopes.append(_class_bindings(node))
        self.generic_visit(node)
        self._scopes.pop()
        return node

    def _visit_function_scope(self, node: ast.AST) -> ast.AST:
        self._scopes.append(None)
        self.generic_visit(node)
        self._scopes.pop()
        return node

    visit_FunctionDef = _visit_function_scope
    visit_AsyncFunctionDef = _visit_function_scope
    visit_Lambda = _visit_function_scope
    visit_ListComp = _visit_function_scope
    visit_SetComp = _visit_function_scope
    visit_DictComp = _visit_function_scope
    visit_GeneratorExp = _visit_function_scope

    def visit_Call(self, node: ast.Call) -> ast.AST:
        """Replace marker call, leave other calls as they are."""
        if not is_marker_call(node, self._config.markers):
            self.generic_visit(node)
            return node

        # source text before nested markers are rewritten
        source = unparse_node(marker_argument(node))
        self.generic_visit(node)

        argument = marker_argument(node)
        location = make_location(node, self._filename)
        shape = classify(argument)
        if not isinstance(shape, Unsupported) and self._uses_class_names(shape.call):
            shape = Unsupported(UnsupportedReason.CLASS_SCOPE_NAME)

        if isinstance(shape, Unsupported):
            if self._config.strict:
                raise UnsupportedExpressionError(location, shape.reason, source)
            logger.debug("%s: %s, emitting sentinel", location, shape.reason.value)
            site = ExpansionSite(location, shape.kind, "", source, shape.reason)
        else:
            logger.debug("%s: %s %s", location, shape.kind.value, shape.name)
            site = ExpansionSite(location, shape.kind, shape.name, source)

        self._sites.append(site)
        replacement = emit(shape, self._config.runtime_alias)
        return ast.fix_missing_locations(ast.copy_location(replacement, node))

    def _uses_class_names(self, call: ast.Call) -> bool:
        """Check if call reads a name bound directly in the enclosing class body."""
        if not self._scopes or self._scopes[-1] is None:
            return False
        bound = self._scopes[-1]
        return any(isinstance(n, ast.Name) and n.id in bound for n in ast.walk(call))


def _class_bindings(node: ast.ClassDef) -> frozenset[str]:
    """Names bound by class body statements, bodies of nested defs excluded."""
    names: set[str] = set()
    for stmt in node.body:
        match stmt:
            case (
                ast.FunctionDef(name=name) | ast.AsyncFunctionDef(name=name) | ast.ClassDef(name=name)
            ):
                names.add(name)
            case ast.Import(names=aliases) | ast.ImportFrom(names=aliases):
                names.update(a.asname or a.name.split(".")[0] for a in aliases)
            case _:
                names.update(
                    n.id
                    for n in ast.walk(stmt)
                    if isinstance(n, ast.Name) and isinstance(n.ctx, ast.Store)
                )
    return frozenset(names)


def runtime_import(config: ExpansionConfig) -> ast.Import:
    """Build `import <runtime_module> as <runtime_alias>`."""
    return ast.Import(names=[ast.alias(name=config.runtime_module, asname=config.runtime_alias)])


def _insert_runtime_import(module: ast.Module, config: ExpansionConfig) -> None:
    """Insert runtime import after docstring and __future__ imports."""
    index = 0
    body = module.body

    if body:
        match body[0]:
            case ast.Expr(value=ast.Constant(value=str())):
                index = 1

    while index < len(body):
        match body[index]:
            case ast.ImportFrom(module="__future__"):
                index += 1
            case _:
                break

    stmt = runtime_import(config)
    if index < len(body):
        ast.copy_location(stmt, body[index])
    else:
        stmt.lineno = 1
        stmt.col_offset = 0
    ast.fix_missing_locations(stmt)
    body.insert(index, stmt)
