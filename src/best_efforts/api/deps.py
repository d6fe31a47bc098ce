"""Dependency injection for API routes."""

from functools import lru_cache

from ..config import get_settings
from ..db.database import BestEffortsDatabase
from ..services.best_efforts_service import BestEffortsService


@lru_cache
def get_database() -> BestEffortsDatabase:
    """Get the workout store instance."""
    return BestEffortsDatabase(get_settings().db_path)


def get_best_efforts_service() -> BestEffortsService:
    """Get a best efforts service bound to the workout store."""
    return BestEffortsService(get_database(), get_settings())
