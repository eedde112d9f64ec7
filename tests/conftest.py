"""Shared pytest fixtures: platforms per dialect and sample schema objects."""

from __future__ import annotations

from typing import Callable, Generator

import pytest

from schema_ddl.config.settings import Settings, get_settings
from schema_ddl.infrastructure.schema import Table
from schema_ddl.infrastructure.sql.dialects import MYSQL, POSTGRESQL, SQLITE
from schema_ddl.infrastructure.sql.platform import Platform


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Every test starts and ends with a fresh settings cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def postgresql_platform(settings: Settings) -> Platform:
    return Platform(POSTGRESQL, settings)


@pytest.fixture
def mysql_platform(settings: Settings) -> Platform:
    return Platform(MYSQL, settings)


@pytest.fixture
def sqlite_platform(settings: Settings) -> Platform:
    return Platform(SQLITE, settings)


@pytest.fixture(params=["postgresql", "mysql", "sqlite"])
def any_platform(request, settings: Settings) -> Platform:
    """Runs the test once per supported dialect."""
    dialects = {"postgresql": POSTGRESQL, "mysql": MYSQL, "sqlite": SQLITE}
    return Platform(dialects[request.param], settings)


@pytest.fixture
def make_test_table() -> Callable[[], Table]:
    """Factory for the canonical `test` table: serial id plus nullable string."""

    def _make() -> Table:
        table = Table("test")
        table.add_column("id", "integer", autoincrement=True)
        table.add_column("test", "string", notnull=False, length=255)
        table.set_primary_key(["id"])
        return table

    return _make
