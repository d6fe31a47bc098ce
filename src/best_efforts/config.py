"""Configuration settings for the Best Efforts engine and its API."""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/best_efforts/config.py
# .parent.parent.parent = project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from BEST_EFFORTS_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BEST_EFFORTS_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    db_path: Path = PROJECT_ROOT / "best_efforts.db"

    # Logging
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Leaderboard policy
    leaderboard_size: int = Field(10, ge=1)
    recent_pr_days: int = 30
    notification_days: int = 7
    near_miss_threshold: float = 1.02

    # History windows used by the service layer
    history_days: int = 365
    comparison_history_days: int = 365 * 5


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
