"""API route modules."""

from . import best_efforts

__all__ = ["best_efforts"]
