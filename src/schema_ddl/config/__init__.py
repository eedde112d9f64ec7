"""Configuration management for SchemaDDL.

This module provides centralized configuration loaded from environment variables
with validation using Pydantic BaseSettings.

Usage:
    >>> from schema_ddl.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.default_dialect)
"""

from schema_ddl.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
