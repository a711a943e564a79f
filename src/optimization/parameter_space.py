"""Parameter space definitions and helpers for grid searches."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Mapping, MutableMapping, Sequence

from ..errors import InvalidInputError

_DECIMAL_TOLERANCE = Decimal("1e-12")


@dataclass(frozen=True)
class ParameterDefinition:
    """Immutable description of a single free parameter."""

    name: str
    description: str = ""
    values: Sequence[float] | None = None
    lower_bound: float | None = None
    upper_bound: float | None = None
    step: float | None = None

    def generate_candidates(self) -> tuple[float, ...]:
        """
        Produce the ordered tuple of candidate values for this parameter.

        Ranges are expanded with decimal arithmetic so ``0.1..0.3`` with step
        ``0.05`` yields exactly ``0.1, 0.15, 0.2, 0.25, 0.3``.

        Raises:
            InvalidInputError: if neither explicit values nor a bounded range with step is defined.
        """
        if self.values is not None:
            candidates = tuple(self.values)
            if not candidates:
                raise InvalidInputError(f"Parameter {self.name} must define at least one candidate value")
            return candidates

        if self.lower_bound is None or self.upper_bound is None or self.step is None:
            raise InvalidInputError(
                f"Parameter {self.name} must define either explicit values or a bounded range with step"
            )
        if self.upper_bound < self.lower_bound:
            raise InvalidInputError(f"Parameter {self.name} has upper_bound < lower_bound")

        step_decimal = Decimal(str(self.step))
        if step_decimal <= 0:
            raise InvalidInputError(f"Parameter {self.name} requires a positive step size")

        lower = Decimal(str(self.lower_bound))
        upper = Decimal(str(self.upper_bound))

        values: list[Decimal] = []
        current = lower
        # Guard against pathological configurations that could loop forever.
        max_iterations = 1_000_000
        while current <= upper + _DECIMAL_TOLERANCE:
            values.append(current)
            current += step_decimal
            if len(values) > max_iterations:
                raise InvalidInputError(
                    f"Parameter {self.name} produced more than {max_iterations} grid values. "
                    "Check range and step configuration."
                )

        return tuple(_coerce_decimal(value) for value in values)


@dataclass
class ParameterSpace:
    """Ordered collection of parameter definitions; the grid is their cartesian product."""

    parameters: MutableMapping[str, ParameterDefinition] = field(default_factory=dict)

    @classmethod
    def from_definitions(cls, definitions: Sequence[ParameterDefinition]) -> "ParameterSpace":
        """Construct a parameter space from an ordered sequence of definitions."""
        parameters: Dict[str, ParameterDefinition] = {}
        for definition in definitions:
            if definition.name in parameters:
                raise InvalidInputError(f"Duplicate parameter definition: {definition.name}")
            parameters[definition.name] = definition
        return cls(parameters=parameters)

    @classmethod
    def from_grid(cls, grid: Mapping[str, Sequence[float]]) -> "ParameterSpace":
        """Build a space from a plain ``{name: candidates}`` mapping."""
        return cls.from_definitions(
            [ParameterDefinition(name=name, values=tuple(values)) for name, values in grid.items()]
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ParameterSpace":
        """Load a parameter space definition from a YAML/JSON style mapping."""
        parameters_config = config.get("parameters", {}) if config else {}
        definitions: list[ParameterDefinition] = []
        for name, raw_definition in parameters_config.items():
            if not isinstance(raw_definition, Mapping):
                # Shorthand: ``r: [0.1, 0.2]``
                definitions.append(ParameterDefinition(name=name, values=_as_tuple(raw_definition)))
                continue
            unknown = set(raw_definition) - {"description", "values", "lower_bound", "upper_bound", "step"}
            if unknown:
                raise InvalidInputError(
                    f"Unknown key(s) for parameter {name}: {', '.join(sorted(unknown))}"
                )
            definitions.append(
                ParameterDefinition(
                    name=name,
                    description=raw_definition.get("description", ""),
                    values=_as_tuple(raw_definition.get("values")),
                    lower_bound=raw_definition.get("lower_bound"),
                    upper_bound=raw_definition.get("upper_bound"),
                    step=raw_definition.get("step"),
                )
            )
        return cls.from_definitions(definitions)

    def to_config(self) -> dict[str, Any]:
        """Serialize the parameter space back into a configuration mapping."""
        config: dict[str, Any] = {"parameters": {}}
        for name, definition in self.parameters.items():
            item: dict[str, Any] = {}
            if definition.description:
                item["description"] = definition.description
            if definition.values is not None:
                item["values"] = list(definition.values)
            if definition.lower_bound is not None:
                item["lower_bound"] = definition.lower_bound
            if definition.upper_bound is not None:
                item["upper_bound"] = definition.upper_bound
            if definition.step is not None:
                item["step"] = definition.step
            config["parameters"][name] = item
        return config

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.parameters)

    def grid(self) -> Dict[str, tuple[float, ...]]:
        """
        Build an ordered dictionary of parameter -> candidate tuple.

        Raises:
            InvalidInputError: when the space has no parameters or a parameter has no candidates.
        """
        if not self.parameters:
            raise InvalidInputError("Parameter grid must contain at least one parameter")
        return {name: definition.generate_candidates() for name, definition in self.parameters.items()}


def _coerce_decimal(value: Decimal) -> Any:
    """Convert Decimal back to int or float, preserving integer representations."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _as_tuple(values: Sequence[Any] | None) -> tuple[Any, ...] | None:
    if values is None:
        return None
    return tuple(values)
