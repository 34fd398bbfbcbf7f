"""
Application settings using Pydantic.

This module provides runtime configuration with environment variable support.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from holomem.config.constants import (
    DEFAULT_DIMENSIONS,
    DEFAULT_PERSIST_PATH,
    DEFAULT_TOP_K,
    MAX_DIMENSIONS,
    MIN_DIMENSIONS,
)


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Settings can be overridden via environment variables prefixed with HOLOMEM_
    For example: HOLOMEM_DIMENSIONS=512
    """

    model_config = SettingsConfigDict(
        env_prefix="HOLOMEM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow other env vars without error
    )

    # Vector Space
    dimensions: int = Field(
        default=DEFAULT_DIMENSIONS,
        description="Number of complex components per trace",
        ge=MIN_DIMENSIONS,
        le=MAX_DIMENSIONS,
    )

    quantized: bool = Field(
        default=False,
        description="Store trace patterns as Q1.15 fixed-point instead of complex64",
    )

    # Retrieval
    default_top_k: int = Field(
        default=DEFAULT_TOP_K,
        description="Number of unique memories returned by recall()",
        ge=1,
        le=1000,
    )

    # Persistence
    persist_path: Path = Field(
        default=Path(DEFAULT_PERSIST_PATH),
        description="Directory for saved memories and hierarchies",
    )

    # Runtime
    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )


# Global settings instance (can be overridden for testing)
settings = Settings()
