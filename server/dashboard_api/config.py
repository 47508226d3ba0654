"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Record store location
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

    @property
    def fitness_db_path(self) -> str:
        return os.path.join(self.data_path, "fitness.db")

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8082
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Targets used when a user has not set their own
    daily_calorie_target: int = 2000
    weekly_workout_goal: int = 4
    steps_goal: int = 10000
    water_goal_liters: float = 2.5
    kcal_per_workout_minute: float = 10

    class Config:
        env_prefix = "FITNESS_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
