"""Utility functions for codecontext."""

from .best_effort import map_best_effort

__all__ = [
    "map_best_effort",
]
