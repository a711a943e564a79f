"""Observation data containers."""

from .observations import ObservationSet

__all__ = ["ObservationSet"]
