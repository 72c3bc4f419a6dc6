"""Configuration settings for jsonmend."""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Recovery settings loaded from JSONMEND_* environment variables."""

    # Tracing Configuration
    debug: bool = False
    log_level: str = "WARNING"

    # Salvage Configuration
    salvage_truncated: bool = True
    max_salvage_attempts: int = Field(default=32, ge=0)

    # Diagnostics Configuration
    debug_dump_dir: Path | None = None

    model_config = {
        "env_prefix": "JSONMEND_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


settings = Settings()
