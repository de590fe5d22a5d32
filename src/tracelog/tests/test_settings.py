"""Tests for environment-driven configuration and the default logger built from it."""

from __future__ import annotations

import io

import orjson
import pytest
from pydantic import ValidationError

from tracelog.fields import field
from tracelog.foundation.config import CorrelationSettings, TracelogSettings, clear_settings_cache, get_settings
from tracelog.logging import JsonRenderer, Level, NoOpRenderer, configure_logging, get_logger
from tracelog.logging.base import create_renderer


def test_defaults() -> None:
    settings = get_settings()
    assert settings.log.level == "INFO"
    assert settings.correlation.trace_id_keys == ("traceID", "dd.traceID")
    assert settings.correlation.span_id_keys == ("spanID", "dd.spanID")
    assert not settings.is_development


def test_environment_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACELOG_ENVIRONMENT", "Development")
    monkeypatch.setenv("TRACELOG_LOG_LEVEL", "warning")
    monkeypatch.setenv("TRACELOG_CORRELATION_VENDOR_PREFIX", "vendor.")
    clear_settings_cache()
    settings = get_settings()
    assert settings.is_development
    assert settings.log.level == "WARN"
    assert settings.correlation.trace_id_keys == ("traceID", "vendor.traceID")


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_vendor_prefix_must_distinguish_aliases() -> None:
    with pytest.raises(ValidationError):
        CorrelationSettings(vendor_prefix="")


def test_development_environment_configures_default_logger(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACELOG_ENVIRONMENT", "development")
    monkeypatch.setenv("TRACELOG_LOG_FORMAT", "none")
    clear_settings_cache()
    log = get_logger("dev")
    assert log.base.development
    assert isinstance(log.base.renderer, NoOpRenderer)


def test_json_renderer_writes_one_object_per_line() -> None:
    out = io.StringIO()
    log = configure_logging("json", "DEBUG", name="api", output=out)
    log.debug("hello")
    log.info("second")
    first, second = (orjson.loads(line) for line in out.getvalue().splitlines())
    assert first["level"] == "debug" and first["message"] == "hello" and first["logger"] == "api"
    assert second["message"] == "second"


def test_json_entry_keys_win_over_fields() -> None:
    out = io.StringIO()
    log = configure_logging("json", "INFO", name="api", output=out)
    log.info("real", field.string("message", "spoof"), field.string("level", "fatal"), field.string("region", "eu"))
    record = orjson.loads(out.getvalue())
    assert record["message"] == "real"
    assert record["level"] == "info"
    assert record["region"] == "eu"


def test_console_renderer_formats_fields() -> None:
    out = io.StringIO()
    log = configure_logging("console", "INFO", output=out, colors=False)
    log.info("ready", field.string("region", "eu"), field.integer("port", 8080))
    line = out.getvalue().strip()
    assert "[info] ready" in line
    assert 'region="eu"' in line and "port=8080" in line


def test_unknown_format_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        create_renderer("xml")


def test_level_parse() -> None:
    assert Level.parse("warning") is Level.WARN
    assert Level.parse("DPANIC") is Level.DPANIC
    assert Level.parse(40) is Level.ERROR
    with pytest.raises(ValueError, match="Unknown level"):
        Level.parse("verbose")
    assert isinstance(create_renderer("json", output=io.StringIO()), JsonRenderer)


def test_nested_settings_from_mapping() -> None:
    settings = TracelogSettings(environment="STAGING", correlation={"trace_id_key": "trace_id"})
    assert settings.environment == "staging"
    assert settings.correlation.trace_id_keys == ("trace_id", "dd.trace_id")
