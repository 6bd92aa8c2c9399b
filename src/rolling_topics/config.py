"""Configuration management for rolling_topics.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "RollingTopicsConfig",
    "StorageSettings",
    "VocabSettings",
]


class VocabSettings(BaseSettings):
    """Default vocabulary and document thresholds for initial fits."""

    model_config = SettingsConfigDict(
        env_prefix="ROLLING_TOPICS_VOCAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    vocab_abs: int = Field(default=5, ge=0)
    vocab_rel: float = Field(default=0.0, ge=0.0, le=1.0)
    vocab_fallback: int = Field(default=100, ge=0)
    doc_abs: int = Field(default=0, ge=0)


class StorageSettings(BaseSettings):
    """File storage settings for persisted model states."""

    model_config = SettingsConfigDict(
        env_prefix="ROLLING_TOPICS_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    directory: Path = Path("rolling_topics_states")
    indent: int | None = None


class RollingTopicsConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = RollingTopicsConfig()
        fallback = config.memory_fallback
    """

    model_config = SettingsConfigDict(
        env_prefix="ROLLING_TOPICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    vocab: VocabSettings = Field(default_factory=VocabSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    # Update defaults
    memory_fallback: int = Field(default=0, ge=0)
    compute_topics: bool = True
    default_memory: str | int | None = None  # None: callers must pass memory

    # Logging
    log_json: bool = False
    log_level: str = "INFO"
