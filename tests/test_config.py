"""Tests for settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from treesift.config import TreeSiftSettings, get_settings, reset_settings


def test_defaults():
    settings = TreeSiftSettings()

    assert settings.parser_backend == "tree-sitter"
    assert settings.node_path == "node"
    assert settings.strict_parsing is True
    assert settings.log_level == "WARNING"
    assert settings.log_file is None
    assert settings.json_indent == 2
    assert settings.include_patterns == ["*.tsx", "*.jsx", "*.ts", "*.js"]


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TREESIFT_PARSER_BACKEND", "babel")
    monkeypatch.setenv("TREESIFT_NODE_PATH", "/opt/node/bin/node")
    monkeypatch.setenv("TREESIFT_STRICT_PARSING", "false")
    monkeypatch.setenv("TREESIFT_LOG_LEVEL", "debug")
    monkeypatch.setenv("TREESIFT_LOG_FILE", str(tmp_path / "treesift.log"))
    monkeypatch.setenv("TREESIFT_INCLUDE_PATTERNS", '["*.tsx"]')

    settings = TreeSiftSettings()

    assert settings.parser_backend == "babel"
    assert settings.node_path == "/opt/node/bin/node"
    assert settings.strict_parsing is False
    assert settings.log_level == "DEBUG"
    assert settings.log_file == Path(tmp_path / "treesift.log")
    assert settings.include_patterns == ["*.tsx"]


@pytest.mark.parametrize(
    "name,value",
    [
        ("TREESIFT_PARSER_BACKEND", "esprima"),
        ("TREESIFT_LOG_LEVEL", "LOUD"),
        ("TREESIFT_JSON_INDENT", "-1"),
    ],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        TreeSiftSettings()


def test_singleton(monkeypatch):
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("TREESIFT_JSON_INDENT", "4")
    assert get_settings().json_indent == 2

    reset_settings()
    assert get_settings().json_indent == 4
