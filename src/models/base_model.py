"""
Base forward model class for the grid-fit package.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Sequence

import numpy as np

from ..errors import InvalidInputError


class BaseModel(ABC):
    """Базовый класс для всех прямых моделей"""

    #: Полный набор параметров модели в порядке формулы
    parameter_names: tuple[str, ...] = ()
    #: Значения по умолчанию для необязательных параметров
    defaults: Mapping[str, float] = {}

    def __init__(self, name: str, **fixed: float):
        """
        Инициализация модели

        Args:
            name: уникальное имя модели
            **fixed: параметры, зафиксированные на всё время поиска
        """
        unknown = sorted(set(fixed) - set(self.parameter_names))
        if unknown:
            raise InvalidInputError(
                f"Модель '{name}' не имеет параметров: {', '.join(unknown)}. "
                f"Допустимые параметры: {', '.join(self.parameter_names)}"
            )
        self.name = name
        self.fixed: Dict[str, float] = dict(fixed)

    def with_fixed(self, **fixed: float) -> "BaseModel":
        """Копия модели с дополнительно зафиксированными параметрами"""
        unknown = sorted(set(fixed) - set(self.parameter_names))
        if unknown:
            raise InvalidInputError(
                f"Модель '{self.name}' не имеет параметров: {', '.join(unknown)}"
            )
        clone = copy.copy(self)
        clone.fixed = {**self.fixed, **fixed}
        return clone

    @property
    def free_parameters(self) -> tuple[str, ...]:
        """Параметры, которые не зафиксированы и не имеют значения по умолчанию"""
        return tuple(
            name for name in self.parameter_names
            if name not in self.fixed and name not in self.defaults
        )

    def predict(self, x: Sequence[float] | np.ndarray, **params: float) -> np.ndarray:
        """
        Рассчитать предсказание модели в точках x

        Args:
            x: упорядоченная последовательность значений независимой переменной
            **params: свободные параметры (перекрывают зафиксированные)

        Returns:
            np.ndarray той же длины и в том же порядке, что и x

        Raises:
            InvalidInputError: если не хватает параметров или переданы лишние
        """
        merged = self._merge_params(params)
        self.validate_params(**merged)
        values = self._evaluate(np.asarray(x, dtype=float), **merged)
        return np.asarray(values, dtype=float)

    @abstractmethod
    def _evaluate(self, x: np.ndarray, **params: float) -> np.ndarray:
        """Вычисление формулы модели для полного набора параметров"""

    @abstractmethod
    def get_param_grid(self) -> Dict[str, Any]:
        """
        Получить сетку параметров для поиска

        Используется, когда сетка не передана явно в fit_grid.

        Returns:
            dict: имя свободного параметра -> список значений-кандидатов
        """

    def validate_params(self, **params) -> bool:
        """
        Валидация параметров

        Намеренно не проверяет физический смысл значений: отрицательная
        скорость роста и т.п. допустимы.
        """
        return True

    def _merge_params(self, params: Mapping[str, float]) -> Dict[str, float]:
        unknown = sorted(set(params) - set(self.parameter_names))
        if unknown:
            raise InvalidInputError(
                f"Неизвестные параметры для модели '{self.name}': {', '.join(unknown)}"
            )
        merged: Dict[str, float] = dict(self.defaults)
        merged.update(self.fixed)
        merged.update(params)
        missing = [name for name in self.parameter_names if name not in merged]
        if missing:
            raise InvalidInputError(
                f"Не заданы параметры модели '{self.name}': {', '.join(missing)}"
            )
        return merged

    def __repr__(self):
        """Строковое представление модели"""
        return f"{self.__class__.__name__}(name='{self.name}', fixed={self.fixed!r})"
