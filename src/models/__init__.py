"""
Forward models.

All models are registered in the ModelRegistry upon import.

Usage:
    from gridfit.models import ModelRegistry

    print(ModelRegistry.list_models())

    growth = ModelRegistry.create("exponential", N0=10.0)
    predicted = growth.predict([0, 1, 2], r=0.2)
"""

from .base_model import BaseModel
from .model_registry import ModelRegistry

# Import models (this triggers automatic registration via @register decorator)
from .exponential import ExponentialGrowth
from .logistic import LogisticGrowth, logistic_closed_form
from .sine import SineWave

__all__ = [
    "BaseModel",
    "ModelRegistry",
    "ExponentialGrowth",
    "LogisticGrowth",
    "SineWave",
    "logistic_closed_form",
]
