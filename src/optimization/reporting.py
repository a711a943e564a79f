"""Reporting utilities for grid-search runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import json

import pandas as pd

from ..errors import InvalidInputError
from .results_store import ResidualTable, json_default
from .selector import BestFit, BestFitSelector


@dataclass
class FitReporter:
    """Produce tabular and aggregated views of a residual table."""

    table: ResidualTable
    selector: BestFitSelector | None = None

    def __post_init__(self) -> None:
        if self.selector is None:
            self.selector = BestFitSelector()

    def to_table(self) -> pd.DataFrame:
        """One row per grid point, sorted by grid index."""
        return self.table.to_frame()

    def best(self) -> BestFit:
        return self.selector.select(self.table)

    def summary(self, *, top_n: int = 5) -> Dict[str, Any]:
        """Return best fit, top-N entries and residual distribution over finite points."""
        finite = [item.sse for item in self.table if item.is_finite]
        failures = self.table.failures()
        summary: Dict[str, Any] = {
            "grid_size": len(self.table),
            "parameters": list(self.table.parameter_names),
            "finite_points": len(finite),
            "failed_points": len(failures),
            "best": None,
            "top_n": [],
            "distribution": {},
        }
        if not finite:
            return summary

        summary["best"] = self.best().to_dict()
        summary["top_n"] = [item.to_dict() for item in self.selector.rank(self.table, top_n)]
        summary["distribution"] = {
            "min": min(finite),
            "max": max(finite),
            "mean": sum(finite) / len(finite),
        }
        return summary

    def residual_surface(self) -> pd.DataFrame:
        """
        Residual sums of a two-parameter grid as a matrix.

        Rows are the first parameter's candidates, columns the second's, both
        in grid order. Failed points appear as ``inf``.
        """
        names = self.table.parameter_names
        if len(names) != 2:
            raise InvalidInputError(
                f"Residual surface needs exactly two grid parameters, got {len(names)}"
            )
        frame = self.table.to_frame()
        row_name, column_name = names
        surface = frame.pivot(index=row_name, columns=column_name, values="sse")
        row_order = list(dict.fromkeys(frame[row_name]))
        column_order = list(dict.fromkeys(frame[column_name]))
        return surface.reindex(index=row_order, columns=column_order)

    def export(self, run_dir: str | Path) -> Path:
        """Write results.csv, results.json and summary.json into ``run_dir``."""
        run_path = Path(run_dir)
        run_path.mkdir(parents=True, exist_ok=True)
        self.table.export_csv(run_path / "results.csv")
        self.table.export_json(run_path / "results.json")
        (run_path / "summary.json").write_text(
            json.dumps(self.summary(), indent=2, default=json_default),
            encoding="utf-8",
        )
        return run_path
