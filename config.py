"""
Configuration Module
Version: 1.0

Centralized configuration with validation.
NO HARDCODED SECRETS - the scheduling API token must come from environment.
"""
import logging
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("configuration")


class Settings(BaseSettings):

    # =========================================================================
    # APPLICATION
    # =========================================================================

    APP_ENV: str = Field(default="development")
    APP_NAME: str = Field(default="Sleazzy Venue Booking")
    APP_VERSION: str = Field(default="1.0.0")
    LOG_LEVEL: str = Field(default="INFO")

    # =========================================================================
    # SCHEDULING AUTHORITY - REQUIRED (no default)
    # Catalog, conflict check and submission all live behind this base URL.
    # =========================================================================
    SCHEDULING_API_URL: str = Field(..., description="Scheduling API base URL")
    SCHEDULING_API_TOKEN: Optional[str] = Field(
        default=None,
        description="Bearer token sent on authenticated calls"
    )
    API_TIMEOUT_SECONDS: float = Field(default=15.0)
    API_MAX_RETRIES: int = Field(default=2)

    # =========================================================================
    # BOOKING RULES
    # =========================================================================
    BOOKING_TIMEZONE: str = Field(
        default="UTC",
        description="IANA zone used to turn a booking date + HH:MM into an instant"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def booking_zone(self) -> ZoneInfo:
        return ZoneInfo(self.BOOKING_TIMEZONE)

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def DEBUG(self) -> bool:
        return self.APP_ENV == "development"

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator('SCHEDULING_API_URL')
    @classmethod
    def validate_url(cls, v: str) -> str:
        if v and not v.startswith(('http://', 'https://')):
            raise ValueError(f"URL must start with http or https: {v}")
        return v.rstrip('/') if v else v

    @field_validator('BOOKING_TIMEZONE')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This call will FAIL if required environment variables are missing.
    """
    try:
        return Settings()
    except Exception as e:
        logger.critical(f"FATAL CONFIG ERROR: Could not load settings. Missing env vars? Error: {e}")
        raise
