"""Application configuration via pydantic-settings.

Values are loaded from environment variables (.env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatasetSettings(BaseSettings):
    """Municipality (cod_fisco → comune) dataset location and format."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    municipalities_path: Path = Field(
        default=Path("italy_cities.json"),
        description="File holding the cod_fisco/comune records",
    )
    municipalities_format: Literal["scan", "json"] = Field(
        default="scan",
        description="'scan' = lenient pattern scan, 'json' = strict list of records",
    )


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.log_level
        settings.dataset.municipalities_path
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = Field(default="development")
    log_level: str = Field(default="WARNING")

    # Composed settings (loaded from same .env)
    dataset: DatasetSettings = Field(default_factory=DatasetSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton: import this wherever settings are needed.
settings = Settings()
