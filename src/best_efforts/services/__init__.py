"""Services for best-effort analysis of stored workouts."""

from .best_efforts_service import BestEffortsService

__all__ = ["BestEffortsService"]
