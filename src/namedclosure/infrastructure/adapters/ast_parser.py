"""AST-based source parser adapter.

Reads and parses Python source, then expands marker calls.
FAIL-FIRST: raises ParseError / SourceReadError on any parsing issue.
"""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from namedclosure.domain.exceptions import ParseError, SourceReadError
from namedclosure.domain.expansion import ExpansionResult
from namedclosure.infrastructure.adapters.transformer import NamedClosureTransformer

if TYPE_CHECKING:
    from pathlib import Path

    from namedclosure.domain.configuration import ExpansionConfig


def read_source(path: Path) -> str:
    """Read UTF-8 source file.

    Args:
        path: Path to .py file

    Returns:
        File content

    Raises:
        SourceReadError: If file cannot be read or decoded
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SourceReadError(path=str(path), reason="file not found") from e
    except PermissionError as e:
        raise SourceReadError(path=str(path), reason="permission denied") from e
    except IsADirectoryError as e:
        raise SourceReadError(path=str(path), reason="is a directory") from e
    except UnicodeDecodeError as e:
        raise SourceReadError(path=str(path), reason=f"encoding error: {e}") from e


def parse_source(source: str | bytes, filename: str) -> ast.Module:
    """Parse source to module tree.

    Raises:
        ParseError: Invalid Python syntax
    """
    try:
        return ast.parse(source, filename=filename)
    except SyntaxError as e:
        raise ParseError(path=filename, reason=str(e)) from e


def expand_tree(tree: ast.Module, filename: str, config: ExpansionConfig) -> ExpansionResult:
    """Expand all marker calls in tree (tree is modified in place).

    Args:
        tree: Parsed module
        filename: Source file name for locations
        config: Expansion configuration

    Returns:
        ExpansionResult owning the rewritten tree

    Raises:
        UnsupportedExpressionError: Strict mode and unsupported marker argument
    """
    transformer = NamedClosureTransformer(filename, config)
    new_tree = transformer.visit(tree)
    return ExpansionResult(filename=filename, tree=new_tree, sites=transformer.sites)
