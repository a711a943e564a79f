"""Brute-force least-squares curve fitting over parameter grids."""

from .config import FitConfig, load_config
from .data import ObservationSet
from .errors import (
    DimensionMismatchError,
    GridFitError,
    IntegrationError,
    InvalidInputError,
    NoValidFitError,
)
from .fitting import FitOutcome, fit_grid, run_from_config
from .models import ExponentialGrowth, LogisticGrowth, ModelRegistry, SineWave
from .optimization import BestFit, BestFitSelector, ParameterGridEvaluator, ParameterSpace, ResidualTable

__version__ = "0.1.0"

__all__ = [
    "FitConfig",
    "load_config",
    "ObservationSet",
    "GridFitError",
    "InvalidInputError",
    "DimensionMismatchError",
    "NoValidFitError",
    "IntegrationError",
    "FitOutcome",
    "fit_grid",
    "run_from_config",
    "ModelRegistry",
    "ExponentialGrowth",
    "SineWave",
    "LogisticGrowth",
    "BestFit",
    "BestFitSelector",
    "ParameterGridEvaluator",
    "ParameterSpace",
    "ResidualTable",
]
