"""Deterministic grid-search strategy."""

from __future__ import annotations

from itertools import product
from typing import Dict, Iterator

from ...errors import InvalidInputError
from .base import SearchStrategy


class GridSearchStrategy(SearchStrategy):
    """Systematically traverse the full cartesian product of the parameter space.

    The last parameter varies fastest; grid indices follow this order.
    """

    def generate(self) -> Iterator[dict[str, float]]:
        grid_definition = self.resolve_grid()
        keys = list(grid_definition.keys())
        for combination in product(*(grid_definition[key] for key in keys)):
            yield dict(zip(keys, combination))

    def resolve_grid(self) -> Dict[str, tuple[float, ...]]:
        """Return the grid to traverse, rejecting empty grids before any iteration."""
        grid_definition = self.sampler.grid()
        if not grid_definition:
            raise InvalidInputError("GridSearchStrategy requires at least one parameter to explore")
        empty = [name for name, values in grid_definition.items() if not values]
        if empty:
            raise InvalidInputError(f"Candidate set is empty for parameter(s): {', '.join(empty)}")
        return grid_definition

    def total_points(self) -> int:
        total = 1
        for values in self.resolve_grid().values():
            total *= len(values)
        return total
