"""
Model registry for managing and accessing forward models.
"""

from typing import Dict, List, Type

from ..errors import InvalidInputError
from .base_model import BaseModel


class ModelRegistry:
    """Реестр прямых моделей для централизованного управления"""

    _models: Dict[str, Type[BaseModel]] = {}

    @classmethod
    def register(cls, model_class):
        """
        Декоратор для регистрации модели

        Регистрирует класс под именем model_name. Экземпляры создаются
        при каждом запросе, так как у каждой подгонки свои фиксированные
        параметры.

        Usage:
            @ModelRegistry.register
            class MyModel(BaseModel):
                model_name = "my_model"
                ...

        Args:
            model_class: класс модели (наследник BaseModel)

        Returns:
            model_class: тот же класс (для цепочки декораторов)
        """
        cls._models[model_class.model_name] = model_class
        return model_class

    @classmethod
    def create(cls, name: str, **fixed: float) -> BaseModel:
        """
        Создать модель по имени

        Args:
            name: имя модели
            **fixed: зафиксированные параметры модели

        Returns:
            BaseModel: новый экземпляр модели

        Raises:
            InvalidInputError: если модель не зарегистрирована
        """
        if name not in cls._models:
            available = ", ".join(cls._models.keys()) or "нет доступных моделей"
            raise InvalidInputError(
                f"Модель '{name}' не зарегистрирована. "
                f"Доступные модели: {available}"
            )
        return cls._models[name](**fixed)

    @classmethod
    def list_models(cls) -> List[str]:
        """
        Список всех зарегистрированных моделей

        Returns:
            List[str]: список имён моделей
        """
        return list(cls._models.keys())
