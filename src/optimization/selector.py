"""Pick the grid point(s) with the smallest residual sum."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ..errors import InvalidInputError, NoValidFitError
from .results_store import GridEvaluation, ResidualTable


@dataclass(frozen=True)
class BestFit:
    """Minimising grid point together with its residual sum."""

    parameters: dict[str, float]
    sse: float
    index: int
    ties: int = 1

    @property
    def values(self) -> tuple[float, ...]:
        """Parameter values in grid order, e.g. ``(r, K)``."""
        return tuple(self.parameters.values())

    def __getitem__(self, name: str) -> float:
        return self.parameters[name]

    def to_dict(self) -> dict[str, Any]:
        return {
            "parameters": dict(self.parameters),
            "sse": self.sse,
            "index": self.index,
            "ties": self.ties,
        }


class BestFitSelector:
    """
    Locate the minimum of a residual table.

    Only finite residual sums compete. When several grid points share the
    exact minimum, the one with the lowest grid index is returned.
    """

    def select(self, table: ResidualTable | Sequence[GridEvaluation]) -> BestFit:
        """
        Return the best grid point.

        Raises:
            InvalidInputError: when the table is empty.
            NoValidFitError: when no grid point has a finite residual sum.
        """
        tied = self.select_all(table)
        first = tied[0]
        return BestFit(parameters=dict(first.parameters), sse=first.sse, index=first.index, ties=len(tied))

    def select_all(self, table: ResidualTable | Sequence[GridEvaluation]) -> list[GridEvaluation]:
        """Return every grid point tied at the minimum, in grid order."""
        candidates = self._finite(table)
        minimum = min(item.sse for item in candidates)
        return [item for item in candidates if item.sse == minimum]

    def rank(self, table: ResidualTable | Sequence[GridEvaluation], n: int = 10) -> list[GridEvaluation]:
        """Return up to ``n`` finite entries ordered by residual sum, ties by grid index."""
        candidates = self._finite(table)
        return sorted(candidates, key=lambda item: (item.sse, item.index))[:n]

    @staticmethod
    def _finite(table: ResidualTable | Sequence[GridEvaluation]) -> list[GridEvaluation]:
        entries = sorted(table, key=lambda item: item.index)
        if not entries:
            raise InvalidInputError("Cannot select a best fit from an empty residual table")
        finite = [item for item in entries if item.is_finite]
        if not finite:
            raise NoValidFitError(
                f"None of the {len(entries)} grid points produced a finite residual sum"
            )
        return finite
