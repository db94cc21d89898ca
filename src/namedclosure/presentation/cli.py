"""Command line interface: expand marker calls in files and directories.

Usage:
    namedclosure src/app/jobs.py                   # print expanded source
    namedclosure src/ --format console             # rich table of marker calls
    namedclosure src/ --format json --strict       # fail on unsupported shapes

Exit status: 0 success, 1 namedclosure error, 2 usage error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from namedclosure.application.reporters import ConsoleReporter, JsonReporter
from namedclosure.application.services import expand_directory, expand_file
from namedclosure.domain.configuration import ExpansionConfig
from namedclosure.domain.exceptions import NamedClosureError
from namedclosure.infrastructure.adapters import find_pyproject, load_config

if TYPE_CHECKING:
    from collections.abc import Sequence

    from namedclosure.application.reporters import ReporterProtocol
    from namedclosure.domain.expansion import ExpansionResult

logger = logging.getLogger(__name__)

_FORMATS = ("source", "console", "json")


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="namedclosure",
        description="Expand named_closure(...) marker calls into NamedClosure constructions.",
    )
    parser.add_argument("paths", nargs="+", type=Path, help="Python files or directories")
    parser.add_argument(
        "--format",
        choices=_FORMATS,
        default="source",
        help="Output: expanded source, console report or JSON report (default: source)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on unsupported marker arguments instead of emitting the sentinel",
    )
    parser.add_argument(
        "--marker",
        action="append",
        dest="markers",
        metavar="NAME",
        help="Marker function name (repeatable, default: named_closure)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="pyproject.toml with [tool.namedclosure] (default: nearest to cwd)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI.

    Args:
        argv: Arguments without program name. sys.argv[1:] if None.

    Returns:
        Exit status.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _resolve_config(args)
        results = _expand_paths(args.paths, config)
    except NamedClosureError as e:
        print(f"namedclosure: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(_render(results, args.format))
    return 0


def _resolve_config(args: argparse.Namespace) -> ExpansionConfig:
    """File config (explicit or discovered) with command line overrides."""
    config_path = args.config or find_pyproject(Path.cwd())
    if config_path is None:
        config = ExpansionConfig()
    else:
        logger.debug("loading config from %s", config_path)
        config = load_config(config_path)

    markers = frozenset(args.markers) if args.markers else None
    return config.merged(strict=args.strict, markers=markers)


def _expand_paths(paths: Sequence[Path], config: ExpansionConfig) -> list[ExpansionResult]:
    """Expand files and directories in the given order."""
    results: list[ExpansionResult] = []
    for path in paths:
        if path.is_dir():
            results.extend(expand_directory(path, config))
        else:
            results.append(expand_file(path, config))
    return results


def _render(results: Sequence[ExpansionResult], output_format: str) -> str:
    """Format results for stdout."""
    reporter: ReporterProtocol
    match output_format:
        case "console":
            reporter = ConsoleReporter()
        case "json":
            reporter = JsonReporter()
        case _:
            return _render_source(results)
    return reporter.report(results).rstrip("\n") + "\n"


def _render_source(results: Sequence[ExpansionResult]) -> str:
    """Expanded source, one header per file when several."""
    if len(results) == 1:
        return results[0].source + "\n"
    return "".join(f"# --- {r.filename} ---\n{r.source}\n" for r in results)
