"""
Shared fixtures for the gridfit test suite.
"""

import numpy as np
import pytest

from gridfit.data import ObservationSet
from gridfit.models import BaseModel, logistic_closed_form


class CountingModel(BaseModel):
    """Constant model that records how often it was evaluated."""

    parameter_names = ("a",)

    def __init__(self, **fixed):
        super().__init__("counting", **fixed)
        self.calls = 0

    def _evaluate(self, x, a):
        self.calls += 1
        return np.full(len(x), a, dtype=float)

    def get_param_grid(self):
        return {"a": [0.0, 1.0]}


class TruncatingModel(BaseModel):
    """Model whose output is one element shorter than its input."""

    parameter_names = ("a",)

    def __init__(self, **fixed):
        super().__init__("truncating", **fixed)

    def _evaluate(self, x, a):
        return np.full(len(x) - 1, a, dtype=float)

    def get_param_grid(self):
        return {"a": [1.0]}


@pytest.fixture
def growth_observations():
    """Three points generated from N0=10, r=0.2 and rounded to two decimals."""
    return ObservationSet.from_pairs([(0, 10), (1, 12.21), (2, 14.92)])


@pytest.fixture
def logistic_observations():
    """Noise-free logistic data for N0=10, r=1.0, K=150."""
    t = np.arange(0.0, 11.0)
    return ObservationSet.from_arrays(t, logistic_closed_form(t, N0=10.0, r=1.0, K=150.0))


@pytest.fixture
def counting_model():
    return CountingModel()


@pytest.fixture
def truncating_model():
    return TruncatingModel()
