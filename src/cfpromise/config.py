"""Configuration management for cfpromise."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MalformedLinePolicy = Literal["report", "abort"]


class Settings(BaseSettings):
    """Runtime settings for a promise module process."""

    model_config = SettingsConfigDict(
        env_prefix="CFPROMISE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(None, description="Write logs to this file instead of stderr")

    # Protocol Configuration
    malformed_lines: MalformedLinePolicy = Field(
        default="report",
        description="'report' answers a malformed line with an error result, 'abort' ends the session",
    )


def load_settings() -> Settings:
    """Load settings from the environment and an optional .env file."""
    return Settings()
