"""
Exponential growth model.
"""

from typing import Any, Dict

import numpy as np

from ..data.observations import ObservationSet
from .base_model import BaseModel
from .model_registry import ModelRegistry


@ModelRegistry.register
class ExponentialGrowth(BaseModel):
    """
    Экспоненциальный рост

    N(t) = N0 * exp(r * (t - t0))

    Параметры:
        N0 (float): численность в момент t0 (обычно первое наблюдение)
        r (float): скорость роста, свободный параметр поиска
        t0 (float): начало отсчёта времени (по умолчанию 0)
    """

    model_name = "exponential"
    parameter_names = ("N0", "r", "t0")
    defaults = {"t0": 0.0}

    def __init__(self, **fixed: float):
        super().__init__(self.model_name, **fixed)

    @classmethod
    def from_observations(cls, observations: ObservationSet, *, anchor_time: bool = False) -> "ExponentialGrowth":
        """
        Зафиксировать N0 по первому наблюдению

        Args:
            observations: набор наблюдений
            anchor_time: True - отсчитывать время от первого наблюдения
        """
        t_first, n_first = observations.first
        fixed: Dict[str, float] = {"N0": n_first}
        if anchor_time:
            fixed["t0"] = t_first
        return cls(**fixed)

    def _evaluate(self, x: np.ndarray, N0: float, r: float, t0: float) -> np.ndarray:
        with np.errstate(over="ignore", invalid="ignore"):
            return N0 * np.exp(r * (x - t0))

    def get_param_grid(self) -> Dict[str, Any]:
        return {"r": [round(value, 2) for value in np.arange(-1.0, 1.0001, 0.01)]}
