"""Reporter protocol: contract for all reporters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from namedclosure.domain.expansion import ExpansionResult


class ReporterProtocol(Protocol):
    """Protocol for expansion reporters.

    Output is str, not print(). Caller decides destination.
    """

    def report(self, results: Sequence[ExpansionResult]) -> str:
        """Format expansion results as string.

        Args:
            results: One result per expanded file.

        Returns:
            Formatted string representation.
        """
        ...
