"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="JACKUT_",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Jackut"
    debug: bool = False
    log_level: str = "INFO"

    # Persistence
    data_file: Path = Path("jackut.json")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level names a standard logging level."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        # Data directory must exist for the shutdown save to succeed
        parent = self.data_file.parent
        if not parent.exists():
            warnings.append(f"Data directory {parent} does not exist - shutdown save will fail")

        if self.data_file.exists() and not self.data_file.is_file():
            warnings.append(f"Data file {self.data_file} is not a regular file")

        if self.debug:
            warnings.append("DEBUG mode is enabled")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
