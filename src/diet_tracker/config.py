"""Application configuration."""

import os
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

from diet_tracker.domain.goals import Goal

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    state_file: Path = Path.home() / ".diet-tracker" / "DietTrackerState.json"
    timezone: str | None = None
    default_user_first_name: str = "Alex"
    default_daily_calories: int | None = 2200
    default_daily_protein: int | None = 140
    default_daily_carbs: int | None = 250
    default_daily_fat: int | None = 70
    recents_capacity: int = 12
    seed_example_data: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="DIET_TRACKER_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def default_goal(self) -> Goal:
        """Return the goal used until the user sets one."""
        return Goal(
            daily_calories=self.default_daily_calories,
            daily_protein=self.default_daily_protein,
            daily_carbs=self.default_daily_carbs,
            daily_fat=self.default_daily_fat,
        )

    def zone(self) -> tzinfo | None:
        """Return the configured calendar zone, or None for the system zone."""
        cleaned = (self.timezone or "").strip()
        if not cleaned:
            return None
        return ZoneInfo(cleaned)
