"""Residual and goodness-of-fit scores for comparing predictions with observations."""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from ..errors import DimensionMismatchError

Scorer = Callable[[np.ndarray, np.ndarray], float]


def residuals(predicted: Sequence[float] | np.ndarray, observed: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ``predicted - observed`` elementwise; lengths must match exactly."""
    predicted_arr = np.asarray(predicted, dtype=float)
    observed_arr = np.asarray(observed, dtype=float)
    if predicted_arr.shape != observed_arr.shape:
        raise DimensionMismatchError(
            f"Prediction has {predicted_arr.size} values but {observed_arr.size} observations were given",
            expected=observed_arr.size,
            actual=predicted_arr.size,
        )
    with np.errstate(invalid="ignore", over="ignore"):
        return predicted_arr - observed_arr


def sum_squared_residuals(predicted: Sequence[float] | np.ndarray, observed: Sequence[float] | np.ndarray) -> float:
    """Least-squares score; non-finite when the prediction is non-finite anywhere."""
    diff = residuals(predicted, observed)
    with np.errstate(invalid="ignore", over="ignore"):
        return float(np.sum(diff ** 2))


def root_mean_squared_error(predicted: Sequence[float] | np.ndarray, observed: Sequence[float] | np.ndarray) -> float:
    diff = residuals(predicted, observed)
    if diff.size == 0:
        return 0.0
    with np.errstate(invalid="ignore", over="ignore"):
        return float(np.sqrt(np.mean(diff ** 2)))


def r_squared(predicted: Sequence[float] | np.ndarray, observed: Sequence[float] | np.ndarray) -> float:
    """Coefficient of determination; 0.0 when the observations have no variance."""
    observed_arr = np.asarray(observed, dtype=float)
    ss_res = sum_squared_residuals(predicted, observed_arr)
    ss_tot = float(np.sum((observed_arr - observed_arr.mean()) ** 2)) if observed_arr.size else 0.0
    if ss_tot == 0:
        return 0.0
    return 1.0 - ss_res / ss_tot
