"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core import thresholds


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Squad Readiness & Training-Load Monitor"
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["Squad Performance Staff"]
    PROJECT_URL: str = ""

    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Database
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "postgres"

    # Submission windows (hours)
    PRE_WINDOW_LEAD_HOURS: float = thresholds.PRE_WINDOW_LEAD_HOURS
    POST_WINDOW_HOURS: float = thresholds.POST_WINDOW_HOURS
    UNSTARTED_POST_GRACE_HOURS: float = thresholds.UNSTARTED_POST_GRACE_HOURS
    UNLOCK_REOPEN_HOURS: float = thresholds.UNLOCK_REOPEN_HOURS

    # Training load
    ACUTE_DAYS: int = thresholds.ACUTE_DAYS
    CHRONIC_DAYS: int = thresholds.CHRONIC_DAYS
    ACWR_LOWER: float = thresholds.ACWR_LOWER
    ACWR_UPPER: float = thresholds.ACWR_UPPER
    RECENT_INJURY_DAYS: int = thresholds.RECENT_INJURY_DAYS

    # Snapshot
    ENGAGEMENT_ACTIVE_RATE: float = thresholds.ENGAGEMENT_ACTIVE_RATE
    ENGAGEMENT_PARTIAL_RATE: float = thresholds.ENGAGEMENT_PARTIAL_RATE
    DEVIATION_ALERT_PCT: float = thresholds.DEVIATION_ALERT_PCT
    RESPONSE_RATE_THRESHOLD: float = thresholds.RESPONSE_RATE_THRESHOLD
    SOURCE_TIMEOUT_SECONDS: float = thresholds.SOURCE_TIMEOUT_SECONDS

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}/{self.DATABASE_DBNAME}")


# Global settings instance
settings = Settings()
