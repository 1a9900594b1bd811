"""Configuration settings for stall-books."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StallSettings(BaseSettings):
    """Flat settings read from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_path: Path = Field(
        default=Path("data/stall-books.json"), validation_alias="STALL_DATA_PATH"
    )
    autosave: bool = Field(default=True, validation_alias="STALL_AUTOSAVE")

    # Business day
    timezone: str = Field(default="Asia/Jakarta", validation_alias="STALL_TIMEZONE")
    day_start_hour: int = Field(
        default=0,
        ge=0,
        le=23,
        validation_alias="STALL_DAY_START_HOUR",
        description="Hour (store-local) at which a new business day begins",
    )

    # Reporting windows
    history_days: int = Field(default=7, ge=1, validation_alias="STALL_HISTORY_DAYS")
    recap_days: int = Field(default=3, ge=1, validation_alias="STALL_RECAP_DAYS")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", validation_alias="LOG_LEVEL"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", validation_alias="LOG_FORMAT"
    )


@lru_cache
def get_settings() -> StallSettings:
    """Get cached settings instance."""
    return StallSettings()
