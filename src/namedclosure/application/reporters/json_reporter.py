"""JSON reporter: ExpansionResult → JSON string."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from namedclosure.domain.call_shape import ShapeKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from namedclosure.domain.expansion import ExpansionResult, ExpansionSite


class JsonReporter:
    """JSON reporter: outputs machine-readable JSON.

    Schema matches domain structure 1:1 with summary added.
    """

    def __init__(self, *, indent: int | None = 2) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation. None for compact output.
        """
        self._indent = indent

    def report(self, results: Sequence[ExpansionResult]) -> str:
        """Format expansion results as JSON string."""
        data = {
            "files": [
                {
                    "filename": result.filename,
                    "sites": [_site_to_dict(s) for s in result.sites],
                }
                for result in results
            ],
            "summary": _build_summary(results),
        }
        return json.dumps(data, indent=self._indent)


def _build_summary(results: Sequence[ExpansionResult]) -> dict[str, object]:
    """Count sites per shape kind."""
    by_kind = {kind.value: 0 for kind in ShapeKind}
    total = 0
    for result in results:
        for site in result.sites:
            by_kind[site.kind.value] += 1
            total += 1

    return {
        "files": len(results),
        "total": total,
        "by_kind": by_kind,
    }


def _site_to_dict(site: ExpansionSite) -> dict[str, object]:
    """Convert ExpansionSite to dict."""
    return {
        "file": site.location.file,
        "line": site.location.line,
        "column": site.location.column,
        "kind": site.kind.value,
        "name": site.name,
        "source": site.source,
        "reason": site.reason.value if site.reason is not None else None,
    }
