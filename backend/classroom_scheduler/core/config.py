# backend/classroom_scheduler/core/config.py
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    app_name: str = Field(default="Classroom Scheduler", description="API title")
    environment: str = Field(default="development", description="Deployment environment name")

    # Database
    database_url: str = Field(
        default="sqlite:///./classroom_scheduler.db",
        description="SQLAlchemy database URL (PostgreSQL in production)",
    )
    database_pool_size: int = Field(default=10, ge=1)
    database_max_overflow: int = Field(default=5, ge=0)
    database_echo: bool = False

    # Cache
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis URL for the schedule cache; in-memory cache is used when unset",
    )
    cache_enabled: bool = True
    cache_ttl_seconds: int = Field(default=300, ge=1)

    # Scheduling rules
    max_recurring_occurrences: int = Field(
        default=366,
        ge=1,
        description="Maximum number of dates a single recurring request may expand to",
    )
    default_acting_user_email: Optional[str] = Field(
        default="admin@college.edu",
        description="User recorded as the actor when a request carries no X-User-Email header",
    )

    # API
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    # Set to True when running tests
    is_testing: bool = False

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
