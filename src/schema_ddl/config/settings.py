"""
Configuration management for SchemaDDL.

This module provides environment-based configuration using Pydantic BaseSettings,
so the default dialect, generated identifier length and MySQL table defaults
can be changed per deployment without code changes.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SCHEMA_DDL_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are automatically loaded with the SCHEMA_DDL_ prefix.
    For example, SCHEMA_DDL_DEFAULT_DIALECT=mysql overrides default_dialect.

    Logging fields also accept their unprefixed names:
    - LOG_LEVEL: Logging level (uppercase)
    - LOG_TO_FILE: Enable file logging
    - LOG_FILE_DIR: Directory for log files
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias=AliasChoices("SCHEMA_DDL_LOG_LEVEL", "LOG_LEVEL"),
        description="Logging level (uppercase)",
    )
    LOG_TO_FILE: bool = Field(
        default=False,
        validation_alias=AliasChoices("SCHEMA_DDL_LOG_TO_FILE", "LOG_TO_FILE"),
        description="Also write logs to a daily rotating file",
    )
    LOG_FILE_DIR: str = Field(
        default="logs",
        validation_alias=AliasChoices("SCHEMA_DDL_LOG_FILE_DIR", "LOG_FILE_DIR"),
        description="Directory for log files",
    )

    default_dialect: Literal["postgresql", "mysql", "sqlite"] = Field(
        default="postgresql",
        description="Dialect used when none is requested explicitly",
    )
    max_identifier_length: int = Field(
        default=63,
        ge=8,
        description="Maximum length of generated index and constraint names",
    )

    # MySQL table defaults
    mysql_default_charset: str = Field(
        default="utf8mb4", description="Default table character set"
    )
    mysql_default_collation: str = Field(
        default="utf8mb4_unicode_ci", description="Default table collation"
    )
    mysql_default_engine: str = Field(
        default="InnoDB", description="Default table storage engine"
    )

    @field_validator("default_dialect", mode="before")
    @classmethod
    def normalize_dialect(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_DDL_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application lifecycle. Tests call get_settings.cache_clear() after
    changing the environment.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
