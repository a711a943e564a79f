"""
Sine wave model used for seasonal (phenology) curves.
"""

from typing import Any, Dict

import numpy as np

from .base_model import BaseModel
from .model_registry import ModelRegistry


@ModelRegistry.register
class SineWave(BaseModel):
    """
    Синусоида

    y(x) = A * sin(2*pi / T * x + b) + c

    В задаче фенологии A, T и c задаются из знаний о предметной области,
    а свободным параметром остаётся только фаза b.

    Параметры:
        A (float): амплитуда
        T (float): период (например, 365 дней)
        b (float): фаза в радианах
        c (float): вертикальный сдвиг
    """

    model_name = "sine"
    parameter_names = ("A", "T", "b", "c")

    def __init__(self, **fixed: float):
        super().__init__(self.model_name, **fixed)

    def _evaluate(self, x: np.ndarray, A: float, T: float, b: float, c: float) -> np.ndarray:
        # T == 0 gives inf/nan predictions rather than an exception
        with np.errstate(divide="ignore", invalid="ignore"):
            angular = np.float64(2 * np.pi) / np.float64(T)
            return A * np.sin(angular * x + b) + c

    def get_param_grid(self) -> Dict[str, Any]:
        """Сетка по фазе: один полный оборот с шагом 0.01 рад"""
        return {"b": [round(value, 2) for value in np.arange(0.0, 2 * np.pi, 0.01)]}
