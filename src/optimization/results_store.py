"""Residual table: one scored entry per grid point, kept in grid order."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, List, Mapping, Sequence

import json
import math

import pandas as pd

from ..errors import InvalidInputError


@dataclass(frozen=True)
class GridEvaluation:
    """Outcome of evaluating the model at a single grid point."""

    index: int
    parameters: dict[str, float]
    sse: float
    error: str | None = None

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.sse)

    def to_dict(self) -> dict[str, Any]:
        """Convert into a JSON serialisable dictionary (non-finite scores become None)."""
        return {
            "index": self.index,
            "parameters": dict(self.parameters),
            "sse": self.sse if self.is_finite else None,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "GridEvaluation":
        sse = payload.get("sse")
        return cls(
            index=int(payload["index"]),
            parameters=dict(payload.get("parameters", {})),
            sse=math.inf if sse is None else float(sse),
            error=payload.get("error"),
        )


@dataclass
class ResidualTable:
    """Thread-safe table with exactly one slot per grid point."""

    parameter_names: tuple[str, ...]
    size: int
    _items: List[GridEvaluation | None] = field(init=False, repr=False)
    _lock: Lock = field(init=False, repr=False, default_factory=Lock)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise InvalidInputError("Residual table requires a non-empty grid")
        self._items = [None] * self.size

    def record(self, evaluation: GridEvaluation) -> None:
        """Store an evaluation in its grid slot; each slot may be filled once."""
        if not 0 <= evaluation.index < self.size:
            raise IndexError(f"Grid index {evaluation.index} outside table of size {self.size}")
        with self._lock:
            if self._items[evaluation.index] is not None:
                raise ValueError(f"Grid index {evaluation.index} already recorded")
            self._items[evaluation.index] = evaluation

    def is_complete(self) -> bool:
        with self._lock:
            return all(item is not None for item in self._items)

    def missing(self) -> list[int]:
        with self._lock:
            return [index for index, item in enumerate(self._items) if item is None]

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[GridEvaluation]:
        """Iterate recorded evaluations in grid order."""
        return iter(self._snapshot())

    def __getitem__(self, index: int) -> GridEvaluation:
        item = self._items[index]
        if item is None:
            raise KeyError(f"Grid index {index} has not been evaluated")
        return item

    def scores(self) -> list[float]:
        return [item.sse for item in self._snapshot()]

    def failures(self) -> list[GridEvaluation]:
        return [item for item in self._snapshot() if item.error is not None]

    def to_frame(self) -> pd.DataFrame:
        """Tabular view: one row per grid point with parameter columns, ``sse`` and ``error``."""
        rows: list[dict[str, Any]] = []
        for item in self._snapshot():
            row: dict[str, Any] = {"index": item.index}
            row.update(item.parameters)
            row["sse"] = item.sse
            row["error"] = item.error
            rows.append(row)
        columns = ["index", *self.parameter_names, "sse", "error"]
        return pd.DataFrame(rows, columns=columns)

    def export_csv(self, destination: str | Path) -> Path:
        destination_path = Path(destination)
        destination_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_frame().to_csv(destination_path, index=False)
        return destination_path

    def export_json(self, destination: str | Path) -> Path:
        destination_path = Path(destination)
        destination_path.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            "parameter_names": list(self.parameter_names),
            "size": self.size,
            "evaluations": [item.to_dict() for item in self._snapshot()],
        }
        destination_path.write_text(json.dumps(payload, indent=2, default=json_default), encoding="utf-8")
        return destination_path

    @classmethod
    def from_evaluations(
        cls,
        parameter_names: Sequence[str],
        evaluations: Sequence[GridEvaluation],
    ) -> "ResidualTable":
        table = cls(parameter_names=tuple(parameter_names), size=len(evaluations))
        for evaluation in evaluations:
            table.record(evaluation)
        return table

    @classmethod
    def load_json(cls, source: str | Path) -> "ResidualTable":
        payload = json.loads(Path(source).read_text(encoding="utf-8"))
        table = cls(parameter_names=tuple(payload["parameter_names"]), size=int(payload["size"]))
        for item in payload.get("evaluations", []):
            table.record(GridEvaluation.from_dict(item))
        return table

    def _snapshot(self) -> List[GridEvaluation]:
        with self._lock:
            return [item for item in self._items if item is not None]


def json_default(value: Any) -> Any:
    """JSON fallback for numpy scalars and other non-native values."""
    if hasattr(value, "item"):
        return value.item()
    return str(value)
