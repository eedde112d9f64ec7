"""Unit tests for the structured logging setup.

Tests cover:
- get_logger returns a structlog logger whose records render as JSON
- Sanitization of sensitive fields, including connection parameters
- Context binding
"""

import json
import logging

import pytest

from schema_ddl.utils.logging import (
    REDACTED_VALUE,
    bind_context,
    get_logger,
    sanitization_processor,
    sanitize_for_logging,
)


@pytest.mark.unit
def test_get_logger_returns_bound_logger() -> None:
    """get_logger returns an object with the structlog logging API."""
    logger = get_logger("test_module")

    assert hasattr(logger, "bind")
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")


@pytest.mark.unit
def test_records_rendered_as_json(caplog: pytest.LogCaptureFixture) -> None:
    """Event name, logger name and level end up in the JSON record."""
    caplog.set_level(logging.INFO)

    get_logger("schema_ddl.test").info("statements_written", count=3)

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["event"] == "statements_written"
    assert log_data["logger"] == "schema_ddl.test"
    assert log_data["level"] == "info"
    assert log_data["count"] == 3
    assert "timestamp" in log_data


@pytest.mark.unit
def test_bind_context_fields_rendered(caplog: pytest.LogCaptureFixture) -> None:
    """Bound fields appear on every record of the bound logger."""
    caplog.set_level(logging.INFO)

    logger = bind_context(command="create", platform="mysql")
    logger.info("statements_written", count=1)

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["command"] == "create"
    assert log_data["platform"] == "mysql"


@pytest.mark.unit
@pytest.mark.parametrize("key", ["password", "DB_PASSWORD", "access_token", "api_key", "client_secret"])
def test_sensitive_keys_redacted(key: str) -> None:
    sanitized = sanitize_for_logging({key: "value", "user": "admin"})

    assert sanitized[key] == REDACTED_VALUE
    assert sanitized["user"] == "admin"


@pytest.mark.unit
def test_connection_params_redacted() -> None:
    """Connection parameters never reach the logs; only the exact key matches."""
    sanitized = sanitize_for_logging(
        {"connection_params": {"host": "db"}, "connection_count": 2}
    )

    assert sanitized["connection_params"] == REDACTED_VALUE
    assert sanitized["connection_count"] == 2


@pytest.mark.unit
def test_nested_dicts_sanitized() -> None:
    data = {"config": {"password": "x", "host": "db"}, "table": "users"}

    sanitized = sanitize_for_logging(data)

    assert sanitized["config"] == {"password": REDACTED_VALUE, "host": "db"}
    assert sanitized["table"] == "users"
    assert data["config"]["password"] == "x"


@pytest.mark.unit
def test_sanitization_processor() -> None:
    event_dict = {"event": "connect", "secret": "abc"}

    result = sanitization_processor(logging.getLogger("test"), "info", event_dict)

    assert result == {"event": "connect", "secret": REDACTED_VALUE}
