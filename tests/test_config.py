"""Settings loading"""

import pytest

from rx_validate.config import Settings, get_settings
from rx_validate.validation import SchemaError, compile_schema


def test_defaults(monkeypatch):
    for name in ("RX_MAX_SCHEMA_DEPTH", "RX_ALLOW_CUSTOM_SHADOWING", "RX_LOG_LEVEL", "RX_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)

    current = Settings(_env_file=None)

    assert current.max_schema_depth == 64
    assert current.allow_custom_shadowing is False
    assert current.log_format == "console"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RX_MAX_SCHEMA_DEPTH", "8")
    monkeypatch.setenv("RX_ALLOW_CUSTOM_SHADOWING", "true")

    current = get_settings()

    assert current.max_schema_depth == 8
    assert current.allow_custom_shadowing is True


def test_compiler_uses_configured_depth(monkeypatch):
    from rx_validate.validation import compiler

    monkeypatch.setattr(compiler.settings, "max_schema_depth", 1)
    doc = {"type": "array", "contents": {"type": "array", "contents": "any"}}

    with pytest.raises(SchemaError, match="deeper than 1"):
        compile_schema(doc)
