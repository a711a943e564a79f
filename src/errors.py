"""Exception hierarchy shared by models and the optimisation layer."""

from __future__ import annotations


class GridFitError(Exception):
    """Base class for all grid-fit errors."""


class InvalidInputError(GridFitError, ValueError):
    """Raised when a grid, observation set or configuration cannot be used."""


class DimensionMismatchError(GridFitError, ValueError):
    """Raised when two sequences that must be aligned differ in length."""

    def __init__(self, message: str, *, expected: int | None = None, actual: int | None = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NoValidFitError(GridFitError, RuntimeError):
    """Raised when no grid point produced a finite residual sum."""


class IntegrationError(GridFitError, RuntimeError):
    """Raised by ODE-based models when the solver fails at a parameter point."""
