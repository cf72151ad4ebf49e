# fitclub/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import pytz


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).resolve().parents[2] / ".env"
    logger.debug("[CONFIG] Looking for .env at: %s (exists=%s)", env_path, env_path.exists())
    load_dotenv(env_path)


class Settings(BaseSettings):
    """Runtime configuration for the scheduling engine and its HTTP adapter."""

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    database_url: str = Field(default="sqlite:///./fitclub.db")
    database_echo: bool = Field(default=False)

    # Zone that defines the club's "today" for past-date checks
    club_timezone: str = Field(default="UTC")

    scheduling_lock_backend: Literal["local", "advisory", "redis"] = Field(default="local")
    scheduling_lock_timeout_seconds: float = Field(default=10.0, gt=0)
    scheduling_lock_ttl_seconds: int = Field(default=30, gt=0)
    scheduling_lock_namespace: str = Field(default="fitclub")
    redis_url: str = Field(default="redis://localhost:6379/0")

    default_class_name: str = Field(default="Group Class")

    @field_validator("club_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject zone names pytz does not know."""
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()


settings = Settings()
