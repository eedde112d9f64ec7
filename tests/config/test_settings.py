"""Unit tests for configuration management.

Tests verify:
- Default values of every setting
- SCHEMA_DDL_ prefixed environment overrides
- Validation of dialect names and identifier lengths
- Singleton behavior of get_settings
- Platform selection from the configured default dialect
"""

import pytest
from pydantic import ValidationError

from schema_ddl.config.settings import Settings, get_settings
from schema_ddl.infrastructure.sql.platform import get_platform


@pytest.mark.unit
def test_defaults(monkeypatch):
    """Settings without environment overrides use the documented defaults."""
    for name in ("SCHEMA_DDL_DEFAULT_DIALECT", "SCHEMA_DDL_LOG_LEVEL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.default_dialect == "postgresql"
    assert settings.max_identifier_length == 63
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_TO_FILE is False
    assert settings.mysql_default_charset == "utf8mb4"
    assert settings.mysql_default_collation == "utf8mb4_unicode_ci"
    assert settings.mysql_default_engine == "InnoDB"


@pytest.mark.unit
def test_prefixed_environment_override(monkeypatch):
    """SCHEMA_DDL_ variables override defaults; dialect names are normalized."""
    monkeypatch.setenv("SCHEMA_DDL_DEFAULT_DIALECT", " MySQL ")
    monkeypatch.setenv("SCHEMA_DDL_MAX_IDENTIFIER_LENGTH", "30")
    monkeypatch.setenv("SCHEMA_DDL_MYSQL_DEFAULT_ENGINE", "MyISAM")

    settings = Settings(_env_file=None)

    assert settings.default_dialect == "mysql"
    assert settings.max_identifier_length == 30
    assert settings.mysql_default_engine == "MyISAM"


@pytest.mark.unit
def test_log_level_accepts_unprefixed_name(monkeypatch):
    """LOG_LEVEL works with and without the prefix and is upper-cased."""
    monkeypatch.delenv("SCHEMA_DDL_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"


@pytest.mark.unit
def test_unknown_dialect_rejected(monkeypatch):
    """An unsupported default dialect fails validation."""
    monkeypatch.setenv("SCHEMA_DDL_DEFAULT_DIALECT", "oracle")

    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None)

    assert "default_dialect" in str(exc_info.value)


@pytest.mark.unit
def test_identifier_length_lower_bound(monkeypatch):
    monkeypatch.setenv("SCHEMA_DDL_MAX_IDENTIFIER_LENGTH", "4")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.unit
def test_settings_singleton():
    """get_settings returns the same instance until the cache is cleared."""
    first = get_settings()
    assert get_settings() is first

    get_settings.cache_clear()
    assert get_settings() is not first


@pytest.mark.unit
def test_default_platform_follows_settings(monkeypatch):
    """get_platform without a name uses the configured default dialect."""
    monkeypatch.setenv("SCHEMA_DDL_DEFAULT_DIALECT", "sqlite")
    get_settings.cache_clear()

    assert get_platform().name == "sqlite"
    assert get_platform("mysql").name == "mysql"
