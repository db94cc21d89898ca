"""Expander service: expand marker calls in source text, files and functions.

Orchestrates parser + transformer.
FAIL-FIRST: ParseError on syntax errors, SourceReadError on unreadable files.
"""

from __future__ import annotations

import __future__
import ast
import functools
import importlib
import inspect
import logging
import operator
import textwrap
import types
from typing import TYPE_CHECKING, TypeVar

from namedclosure.domain.configuration import ExpansionConfig
from namedclosure.domain.exceptions import ExpansionError, SourceUnavailableError
from namedclosure.infrastructure.adapters import expand_tree, parse_source, read_source

if TYPE_CHECKING:
    import pathlib
    from collections.abc import Callable

    from namedclosure.domain.expansion import ExpansionResult

F = TypeVar("F", bound="Callable[..., object]")

logger = logging.getLogger(__name__)

_FACTORY_NAME = "__namedclosure_factory__"

_FUTURE_FLAGS = functools.reduce(
    operator.or_,
    (getattr(__future__, name).compiler_flag for name in __future__.all_feature_names),
)

# Default directories to exclude from expand_directory
DEFAULT_EXCLUDES = frozenset(
    {
        "__pycache__",
        ".venv",
        ".git",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".tox",
        ".nox",
        "build",
        "dist",
        ".eggs",
    },
)


def expand_source(
    source: str,
    filename: str = "<string>",
    config: ExpansionConfig | None = None,
) -> ExpansionResult:
    """Expand marker calls in module source.

    Args:
        source: Python module source.
        filename: Name used in locations and compiled code.
        config: Expansion configuration. Defaults if None.

    Returns:
        ExpansionResult with rewritten tree and one site per marker call.

    Raises:
        ParseError: Invalid Python syntax.
        UnsupportedExpressionError: Strict mode and unsupported marker argument.
    """
    tree = parse_source(source, filename)
    return expand_tree(tree, filename, config or ExpansionConfig())


def expand_file(path: pathlib.Path, config: ExpansionConfig | None = None) -> ExpansionResult:
    """Expand marker calls in a source file.

    Raises:
        SourceReadError: File missing or unreadable.
        ParseError: Invalid Python syntax.
        UnsupportedExpressionError: Strict mode and unsupported marker argument.
    """
    source = read_source(path)
    return expand_source(source, str(path), config)


def expand_directory(
    path: pathlib.Path,
    config: ExpansionConfig | None = None,
    *,
    exclude: frozenset[str] = DEFAULT_EXCLUDES,
) -> tuple[ExpansionResult, ...]:
    """Expand every .py file under directory, sorted by path.

    Args:
        path: Root directory.
        config: Expansion configuration. Defaults if None.
        exclude: Directory names to skip.

    Raises:
        SourceReadError, ParseError, UnsupportedExpressionError: first failing file.
    """
    config = config or ExpansionConfig()
    return tuple(expand_file(py_file, config) for py_file in sorted(_find_python_files(path, exclude)))


def expand_function(
    func: F | None = None,
    *,
    config: ExpansionConfig | None = None,
) -> F | Callable[[F], F]:
    """Decorator: recompile function with marker calls expanded.

    Must be the innermost decorator: decorators written in the source are
    dropped, and the ones applied before this one are lost.

    Globals, closure cells, defaults and wrapper metadata are preserved.
    Line numbers match the original file.

    Usage:
        @expand_function
        def build():
            return named_closure(service.run(job))

        @expand_function(config=ExpansionConfig(strict=True))
        def build_strict(): ...

    Raises:
        SourceUnavailableError: inspect cannot retrieve source.
        ExpansionError: Source is not a plain def, uses zero-argument super()
            or private (mangled) names.
        UnsupportedExpressionError: Strict mode and unsupported marker argument.
    """
    if func is None:
        return functools.partial(expand_function, config=config)  # type: ignore[return-value]
    return _recompile(func, config or ExpansionConfig())


def _recompile(func: F, config: ExpansionConfig) -> F:
    """Recompile func inside a factory whose parameters recreate its closure."""
    if not isinstance(func, types.FunctionType):
        raise SourceUnavailableError(getattr(func, "__qualname__", repr(func)))

    code = func.__code__
    if "__class__" in code.co_freevars:
        raise ExpansionError(f"{func.__qualname__}: zero-argument super() is not supported")

    try:
        lines, first_line = inspect.getsourcelines(func)
        filename = inspect.getsourcefile(func) or code.co_filename
    except (OSError, TypeError) as e:
        raise SourceUnavailableError(func.__qualname__) from e

    definition = _parse_definition(textwrap.dedent("".join(lines)), filename, func)
    definition.decorator_list = []
    ast.increment_lineno(definition, first_line - 1)

    module = _factory_module(definition, code.co_freevars)
    result = expand_tree(module, filename, config)

    if not result.sites:
        logger.debug("%s: no marker calls, left as is", func.__qualname__)
        return func

    # future imports of the defining module, not of this one
    flags = code.co_flags & _FUTURE_FLAGS
    module_code = compile(result.tree, filename, "exec", flags=flags, dont_inherit=True)
    new_code = _find_code(module_code, definition.name, func)
    _bind_runtime(func, config)

    cells = dict(zip(code.co_freevars, func.__closure__ or (), strict=True))
    closure = tuple(cells[name] for name in new_code.co_freevars)

    new_func = types.FunctionType(
        new_code,
        func.__globals__,
        func.__name__,
        func.__defaults__,
        closure or None,
    )
    new_func.__kwdefaults__ = func.__kwdefaults__
    functools.update_wrapper(new_func, func)

    logger.debug("%s: expanded %d marker call(s)", func.__qualname__, len(result.sites))
    return new_func  # type: ignore[return-value]


def _parse_definition(
    source: str,
    filename: str,
    func: Callable[..., object],
) -> ast.FunctionDef | ast.AsyncFunctionDef:
    """Parse function source, expecting exactly one def."""
    tree = parse_source(source, filename)

    match tree.body:
        case [ast.FunctionDef() | ast.AsyncFunctionDef() as definition]:
            pass
        case _:
            raise ExpansionError(f"{func.__qualname__}: source is not a single def statement")

    if not _defined_in_class(func):
        return definition

    for node in ast.walk(definition):
        match node:
            case ast.Name(id=name) | ast.Attribute(attr=name) if _is_private(name):
                raise ExpansionError(
                    f"{func.__qualname__}: private name {name!r} would lose class mangling",
                )

    return definition


def _is_private(name: str) -> bool:
    return name.startswith("__") and not name.endswith("__")


def _defined_in_class(func: Callable[..., object]) -> bool:
    """Check qualname for a class scope: "C.m", "f.<locals>.C.m"."""
    parts = func.__qualname__.split(".")[:-1]
    for index, part in enumerate(parts):
        if part == "<locals>":
            continue
        if index + 1 == len(parts) or parts[index + 1] != "<locals>":
            return True
    return False


def _factory_module(
    definition: ast.FunctionDef | ast.AsyncFunctionDef,
    freevars: tuple[str, ...],
) -> ast.Module:
    """Wrap definition: def factory(<freevars>): <definition>; return name.

    Factory parameters become the cells the definition closes over.
    """
    template = ast.parse(
        f"def {_FACTORY_NAME}({', '.join(freevars)}):\n    pass\n    return {definition.name}\n",
    )
    match template.body:
        case [ast.FunctionDef(body=body)]:
            body[0] = definition
    return template


def _find_code(
    module_code: types.CodeType,
    name: str,
    func: Callable[..., object],
) -> types.CodeType:
    """Find compiled function code inside compiled factory module."""
    for factory in module_code.co_consts:
        if isinstance(factory, types.CodeType) and factory.co_name == _FACTORY_NAME:
            for const in factory.co_consts:
                if isinstance(const, types.CodeType) and const.co_name == name:
                    return const

    raise ExpansionError(f"{func.__qualname__}: compiled function not found")


def _bind_runtime(func: Callable[..., object], config: ExpansionConfig) -> None:
    """Make runtime alias resolvable from the function's globals."""
    runtime = importlib.import_module(config.runtime_module)
    namespace = func.__globals__  # type: ignore[attr-defined]
    bound = namespace.setdefault(config.runtime_alias, runtime)
    if bound is not runtime:
        raise ExpansionError(
            f"global {config.runtime_alias!r} in {func.__module__} is bound to another object",
        )


def _find_python_files(root: pathlib.Path, exclude: frozenset[str]) -> list[pathlib.Path]:
    """Find all .py files in directory, excluding specified directories."""
    result: list[pathlib.Path] = []

    for item in root.iterdir():
        if item.is_dir():
            if item.name not in exclude:
                result.extend(_find_python_files(item, exclude))
        elif item.is_file() and item.suffix == ".py":
            result.append(item)

    return result
