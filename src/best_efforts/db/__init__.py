"""Workout and lap storage."""

from .database import BestEffortsDatabase, get_default_db_path

__all__ = ["BestEffortsDatabase", "get_default_db_path"]
