"""Import hook: expand marker calls while importing configured packages.

sys.meta_path finder delegating lookup to PathFinder and swapping the
loader of plain .py sources for NamedClosureLoader.
"""

from __future__ import annotations

import importlib.abc
import importlib.machinery
import logging
import sys
from typing import TYPE_CHECKING

from namedclosure.domain.configuration import ExpansionConfig
from namedclosure.infrastructure.adapters.ast_parser import expand_tree, parse_source

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from importlib.machinery import ModuleSpec
    from types import CodeType, ModuleType

logger = logging.getLogger(__name__)


class NamedClosureLoader(importlib.machinery.SourceFileLoader):
    """Source loader compiling the expanded tree.

    Bytecode cache is bypassed: a cached .pyc holds unexpanded code.
    """

    def __init__(self, fullname: str, path: str, config: ExpansionConfig) -> None:
        """Initialize loader for one module file."""
        super().__init__(fullname, path)
        self._config = config

    def source_to_code(self, data: bytes, path: str, *, _optimize: int = -1) -> CodeType:  # type: ignore[override]
        """Parse, expand and compile module source."""
        tree = parse_source(data, path)
        result = expand_tree(tree, path, self._config)
        logger.debug("expanded %s: %d marker call(s)", self.name, len(result.sites))
        return compile(result.tree, path, "exec", dont_inherit=True, optimize=_optimize)

    def get_code(self, fullname: str) -> CodeType:
        """Compile from source on every import."""
        path = self.get_filename(fullname)
        data = self.get_data(path)
        return self.source_to_code(data, path)


class NamedClosureFinder(importlib.abc.MetaPathFinder):
    """Meta path finder for modules under configured package prefixes.

    Prefix "app" matches "app" and "app.sub", not "application".
    """

    def __init__(self, prefixes: Iterable[str], config: ExpansionConfig | None = None) -> None:
        """Initialize finder.

        Args:
            prefixes: Package names to expand
            config: Expansion configuration. Defaults if None.

        Raises:
            ValueError: If prefixes empty or contain empty names
        """
        self._prefixes = tuple(prefixes)
        if not self._prefixes:
            raise ValueError("prefixes must not be empty")
        if not all(self._prefixes):
            raise ValueError("prefixes must not contain empty names")

        self._config = config or ExpansionConfig()

    @property
    def prefixes(self) -> tuple[str, ...]:
        """Package prefixes handled by this finder."""
        return self._prefixes

    @property
    def config(self) -> ExpansionConfig:
        """Expansion configuration."""
        return self._config

    def matches(self, fullname: str) -> bool:
        """Check if module falls under one of the prefixes."""
        return any(fullname == p or fullname.startswith(f"{p}.") for p in self._prefixes)

    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None,
        target: ModuleType | None = None,
    ) -> ModuleSpec | None:
        """Locate module via PathFinder, expanding plain source modules."""
        if not self.matches(fullname):
            return None

        spec = importlib.machinery.PathFinder.find_spec(fullname, path)
        if spec is None or spec.origin is None:
            return None
        if not isinstance(spec.loader, importlib.machinery.SourceFileLoader):
            return None

        logger.debug("hooking %s (%s)", fullname, spec.origin)
        spec.loader = NamedClosureLoader(fullname, spec.origin, self._config)
        return spec


def install_import_hook(
    prefixes: Iterable[str],
    config: ExpansionConfig | None = None,
) -> NamedClosureFinder:
    """Install finder at the front of sys.meta_path.

    Idempotent: returns the installed finder if one with the same
    prefixes and config is already present.

    Modules already in sys.modules are not re-imported.

    Args:
        prefixes: Package names to expand
        config: Expansion configuration. Defaults if None.

    Returns:
        Installed finder (pass to uninstall_import_hook)
    """
    finder = NamedClosureFinder(prefixes, config)

    for existing in sys.meta_path:
        if (
            isinstance(existing, NamedClosureFinder)
            and existing.prefixes == finder.prefixes
            and existing.config == finder.config
        ):
            return existing

    for name in list(sys.modules):
        if finder.matches(name):
            logger.warning("%s already imported, markers in it stay unexpanded", name)

    sys.meta_path.insert(0, finder)
    logger.info("import hook installed for %s", ", ".join(finder.prefixes))
    return finder


def uninstall_import_hook(finder: NamedClosureFinder) -> None:
    """Remove finder from sys.meta_path (no-op if absent)."""
    if finder in sys.meta_path:
        sys.meta_path.remove(finder)
        logger.info("import hook removed for %s", ", ".join(finder.prefixes))
