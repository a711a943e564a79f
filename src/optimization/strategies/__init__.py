"""Search strategies."""

from .base import SearchStrategy
from .grid_search import GridSearchStrategy

__all__ = ["SearchStrategy", "GridSearchStrategy"]
