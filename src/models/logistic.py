"""
Logistic growth model integrated numerically with scipy.
"""

from typing import Any, Dict

import numpy as np
from scipy.integrate import solve_ivp

from ..errors import IntegrationError, InvalidInputError
from .base_model import BaseModel
from .model_registry import ModelRegistry


def logistic_rhs(t: float, n: np.ndarray, r: float, K: float) -> np.ndarray:
    """dN/dt = r * N * (1 - N / K)"""
    return r * n * (1.0 - n / K)


def logistic_closed_form(t, N0: float, r: float, K: float, t0: float = 0.0) -> np.ndarray:
    """Аналитическое решение логистического уравнения (для проверки и синтетических данных)"""
    t = np.asarray(t, dtype=float)
    return K / (1.0 + (K - N0) / N0 * np.exp(-r * (t - t0)))


@ModelRegistry.register
class LogisticGrowth(BaseModel):
    """
    Логистический рост (ОДУ)

    dN/dt = r * N * (1 - N / K)

    Решение получается численным интегрированием от N0 в момент первого
    наблюдения по всем моментам наблюдений. Метод и допуски решателя
    фиксированы, поэтому результат детерминирован.

    Параметры:
        N0 (float): начальная численность
        r (float): собственная скорость роста
        K (float): ёмкость среды
    """

    model_name = "logistic"
    parameter_names = ("N0", "r", "K")

    def __init__(
        self,
        *,
        method: str = "RK45",
        rtol: float = 1e-6,
        atol: float = 1e-9,
        **fixed: float,
    ):
        super().__init__(self.model_name, **fixed)
        self.method = method
        self.rtol = rtol
        self.atol = atol

    def _evaluate(self, x: np.ndarray, N0: float, r: float, K: float) -> np.ndarray:
        if len(x) == 0:
            return np.empty(0, dtype=float)
        if K == 0:
            raise IntegrationError("Carrying capacity K must be non-zero")
        if len(x) == 1:
            return np.array([N0], dtype=float)
        if np.any(np.diff(x) <= 0):
            raise InvalidInputError("Logistic model requires strictly increasing timestamps")

        try:
            with np.errstate(over="ignore", invalid="ignore"):
                solution = solve_ivp(
                    logistic_rhs,
                    (x[0], x[-1]),
                    [N0],
                    args=(r, K),
                    t_eval=x,
                    method=self.method,
                    rtol=self.rtol,
                    atol=self.atol,
                )
        except ArithmeticError as exc:
            raise IntegrationError(f"Integration failed for r={r}, K={K}: {exc}") from exc

        if not solution.success or solution.y.shape[1] != len(x):
            raise IntegrationError(f"Integration failed for r={r}, K={K}: {solution.message}")
        return solution.y[0]

    def get_param_grid(self) -> Dict[str, Any]:
        return {
            "r": [round(value, 2) for value in np.arange(0.05, 2.0001, 0.05)],
            "K": [float(value) for value in range(50, 1001, 50)],
        }
