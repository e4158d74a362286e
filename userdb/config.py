"""
Configuration management for the user database merge tool.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MergeSettings(BaseSettings):
    """Merge run settings."""

    model_config = SettingsConfigDict(
        env_prefix="USERDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # Text encoding for input and output files
    encoding: str = "utf-8"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        """Accept lower-case level names from the environment."""
        return str(v).upper()


class Settings(BaseSettings):
    """Main settings class that combines all settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    merge: MergeSettings = Field(default_factory=MergeSettings)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience function for quick access
settings = get_settings()


# =============================================================================
# File Format Constants
# =============================================================================

COMMENT_MARKER = "#"
TICK_MARKER = "#@/tick"
FIELD_SEPARATOR = "\t"

# Confidence values are 32-bit signed integers
CONFIDENCE_MIN = -(2**31)
CONFIDENCE_MAX = 2**31 - 1
