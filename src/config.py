"""Fit configuration loaded from YAML/JSON mappings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import json

import yaml

from .errors import InvalidInputError
from .models import BaseModel, ModelRegistry
from .optimization.parameter_space import ParameterSpace

_KNOWN_KEYS = {"model", "parameters", "fixed", "model_options", "max_workers", "output_root"}


@dataclass
class FitConfig:
    """
    Everything needed to run one grid search, apart from the observations.

    Example (YAML)::

        model: logistic
        fixed: {N0: 5.0}
        model_options: {method: RK45, rtol: 1.0e-6}
        parameters:
          r: {lower_bound: 0.5, upper_bound: 1.0, step: 0.5}
          K: {values: [100, 150]}
        max_workers: 2
        output_root: output/fits
    """

    model: str
    parameters: dict[str, Any]
    fixed: dict[str, float] = field(default_factory=dict)
    model_options: dict[str, Any] = field(default_factory=dict)
    max_workers: int = 1
    output_root: Path | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "FitConfig":
        if not isinstance(mapping, Mapping):
            raise InvalidInputError(f"Configuration must be a mapping, got {type(mapping).__name__}")
        unknown = sorted(set(mapping) - _KNOWN_KEYS)
        if unknown:
            raise InvalidInputError(f"Unknown configuration key(s): {', '.join(unknown)}")
        if "model" not in mapping:
            raise InvalidInputError("Configuration must name a model")
        if not mapping.get("parameters"):
            raise InvalidInputError("Configuration must define at least one grid parameter")

        max_workers = mapping.get("max_workers", 1)
        if not isinstance(max_workers, int) or max_workers < 1:
            raise InvalidInputError(f"max_workers must be a positive integer, got {max_workers!r}")

        output_root = mapping.get("output_root")
        return cls(
            model=str(mapping["model"]),
            parameters=dict(mapping["parameters"]),
            fixed={name: float(value) for name, value in (mapping.get("fixed") or {}).items()},
            model_options=dict(mapping.get("model_options") or {}),
            max_workers=max_workers,
            output_root=Path(output_root) if output_root else None,
        )

    def to_mapping(self) -> dict[str, Any]:
        mapping: dict[str, Any] = {
            "model": self.model,
            "parameters": dict(self.parameters),
            "max_workers": self.max_workers,
        }
        if self.fixed:
            mapping["fixed"] = dict(self.fixed)
        if self.model_options:
            mapping["model_options"] = dict(self.model_options)
        if self.output_root is not None:
            mapping["output_root"] = str(self.output_root)
        return mapping

    def build_model(self) -> BaseModel:
        return ModelRegistry.create(self.model, **self.model_options, **self.fixed)

    def build_parameter_space(self) -> ParameterSpace:
        return ParameterSpace.from_config({"parameters": self.parameters})


def load_config(path: str | Path) -> FitConfig:
    """Read a ``.yaml``/``.yml`` or ``.json`` configuration file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open(encoding="utf-8") as handle:
        if config_path.suffix.lower() == ".json":
            raw = json.load(handle)
        else:
            try:
                raw = yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise InvalidInputError(f"Could not parse configuration {config_path}: {exc}") from exc
    return FitConfig.from_mapping(raw or {})
