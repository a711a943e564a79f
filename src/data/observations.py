"""Immutable observation sets consumed by forward models and the grid evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd

from ..errors import DimensionMismatchError, InvalidInputError


@dataclass(frozen=True, eq=False)
class ObservationSet:
    """Ordered (independent, dependent) pairs backed by read-only arrays."""

    x: np.ndarray
    y: np.ndarray

    def __post_init__(self) -> None:
        x = np.array(self.x, dtype=float)
        y = np.array(self.y, dtype=float)
        if x.ndim != 1 or y.ndim != 1:
            raise InvalidInputError("Observation arrays must be one-dimensional")
        if len(x) != len(y):
            raise DimensionMismatchError(
                f"Observation arrays differ in length: x has {len(x)}, y has {len(y)}",
                expected=len(x),
                actual=len(y),
            )
        if len(x) == 0:
            raise InvalidInputError("Observation set must contain at least one pair")
        if np.isnan(x).any() or np.isnan(y).any():
            raise InvalidInputError("Observation set contains NaN values")
        x.flags.writeable = False
        y.flags.writeable = False
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[float]]) -> "ObservationSet":
        """Build from an iterable of (x, y) pairs, keeping the given order."""
        items = [tuple(pair) for pair in pairs]
        for item in items:
            if len(item) != 2:
                raise InvalidInputError(f"Observation pair must have two elements, got {item!r}")
        if not items:
            raise InvalidInputError("Observation set must contain at least one pair")
        x, y = zip(*items)
        return cls(x=np.asarray(x, dtype=float), y=np.asarray(y, dtype=float))

    @classmethod
    def from_arrays(cls, x: Sequence[float] | np.ndarray, y: Sequence[float] | np.ndarray) -> "ObservationSet":
        return cls(x=np.asarray(x, dtype=float), y=np.asarray(y, dtype=float))

    @classmethod
    def from_frame(cls, df: pd.DataFrame, x_column: str, y_column: str) -> "ObservationSet":
        """Take two columns of a DataFrame in row order."""
        missing = [column for column in (x_column, y_column) if column not in df.columns]
        if missing:
            raise InvalidInputError(f"Columns not found in frame: {', '.join(missing)}")
        return cls(
            x=df[x_column].to_numpy(dtype=float),
            y=df[y_column].to_numpy(dtype=float),
        )

    @classmethod
    def from_csv(
        cls,
        path: str | Path,
        x_column: str,
        y_column: str,
        **read_csv_kwargs: Any,
    ) -> "ObservationSet":
        """Read a delimited text file with a header row."""
        df = pd.read_csv(Path(path), **read_csv_kwargs)
        df.columns = [str(column).strip() for column in df.columns]
        return cls.from_frame(df, x_column, y_column)

    def __len__(self) -> int:
        return len(self.x)

    @property
    def first(self) -> tuple[float, float]:
        return float(self.x[0]), float(self.y[0])

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"x": self.x, "y": self.y})
