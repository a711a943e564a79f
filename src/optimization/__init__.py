"""Grid search over model parameters scored by residual sums."""

from .evaluator import ParameterGridEvaluator
from .parameter_space import ParameterDefinition, ParameterSpace
from .reporting import FitReporter
from .residuals import r_squared, residuals, root_mean_squared_error, sum_squared_residuals
from .results_store import GridEvaluation, ResidualTable
from .selector import BestFit, BestFitSelector
from .strategies.base import SearchStrategy
from .strategies.grid_search import GridSearchStrategy

__all__ = [
    "ParameterGridEvaluator",
    "FitReporter",
    "GridEvaluation",
    "ResidualTable",
    "BestFit",
    "BestFitSelector",
    "ParameterDefinition",
    "ParameterSpace",
    "SearchStrategy",
    "GridSearchStrategy",
    "residuals",
    "sum_squared_residuals",
    "root_mean_squared_error",
    "r_squared",
]
