"""Console reporter: ExpansionResult → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from namedclosure.domain.call_shape import ShapeKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from namedclosure.domain.expansion import ExpansionResult, ExpansionSite

_KIND_STYLES = {
    ShapeKind.INSTANCE_METHOD: "green",
    ShapeKind.FREE_FUNCTION: "cyan",
    ShapeKind.UNSUPPORTED: "bold red",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        only_unsupported: Show only sites that produced the sentinel.
        show_source: Show the marker argument source column.
        width: Console width in characters.
    """

    only_unsupported: bool = False
    show_source: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class ConsoleReporter:
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, results: Sequence[ExpansionResult]) -> str:
        """Format expansion results as rich formatted string.

        Args:
            results: One result per expanded file.

        Returns:
            Formatted string with colors and a table per file.
        """
        output = StringIO()
        console = Console(file=output, force_terminal=True, width=self._config.width)

        total = sum(len(r.sites) for r in results)
        unsupported = sum(len(r.unsupported) for r in results)
        console.print(
            f"[bold]namedclosure[/bold]: {total} marker call(s) in {len(results)} file(s), "
            f"[red]{unsupported} unsupported[/red]",
        )

        for result in results:
            self._render_result(console, result)

        return output.getvalue()

    def _render_result(self, console: Console, result: ExpansionResult) -> None:
        """Render one file as table."""
        sites = result.unsupported if self._config.only_unsupported else result.sites
        if not sites:
            console.print(f"[dim]{escape(result.filename)}: no marker calls[/dim]")
            return

        table = Table(title=escape(result.filename), title_justify="left")
        table.add_column("Line", justify="right")
        table.add_column("Kind")
        table.add_column("Name")
        if self._config.show_source:
            table.add_column("Source", overflow="fold")

        for site in sites:
            table.add_row(*self._row(site))

        console.print(table)

    def _row(self, site: ExpansionSite) -> list[str]:
        """Table cells for one site."""
        style = _KIND_STYLES[site.kind]
        kind = f"[{style}]{site.kind.value}[/{style}]"
        if site.reason is not None:
            kind = f"{kind} ({site.reason.value})"

        cells = [f"{site.location.line}:{site.location.column}", kind, site.name or "-"]
        if self._config.show_source:
            cells.append(escape(site.source) or "<no argument>")
        return cells
