"""
Configuration settings for the quiz grading engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Dropdown Grading
    # ========================================
    dropdown_similarity_threshold: float = Field(
        default=0.80,
        ge=0.0,
        le=1.0,
        description="Similarity a near-miss selection must exceed to earn partial credit",
    )
    dropdown_large_option_count: int = Field(
        default=5,
        ge=1,
        description="Option count above which a dropdown is treated as a large option set",
    )
    dropdown_common_incorrect_limit: int = Field(
        default=5,
        ge=1,
        description="Number of common incorrect selections reported in statistics",
    )

    # ========================================
    # Sequence Grading
    # ========================================
    sequence_allow_partial_credit: bool = Field(
        default=True,
        description="Default partial credit policy for sequence questions",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
