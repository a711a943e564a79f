"""Base classes and interfaces for parameter search strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterator, Protocol


class ParameterSampler(Protocol):
    """Protocol describing the minimal interface required from a parameter source."""

    def grid(self) -> Dict[str, tuple[float, ...]]:
        """Return a mapping of parameter names to candidate values."""


class SearchStrategy(ABC):
    """Abstract base class for parameter search strategies."""

    def __init__(self, sampler: ParameterSampler) -> None:
        self.sampler = sampler

    @abstractmethod
    def generate(self) -> Iterator[dict[str, float]]:
        """Produce an iterator over parameter combinations."""

    def __iter__(self) -> Iterator[dict[str, float]]:
        """Allow strategies to be used directly in for-loops."""
        return self.generate()
