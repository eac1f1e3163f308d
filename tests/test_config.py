#!/usr/bin/env python3
"""
Tests for the YAML configuration loader.
"""

import logging

import pytest

from localekit.config import DEFAULT_CONFIG_FILE, Config, LoggingConfig, load_config
from localekit.errors import ConfigError
from localekit.placeholders import DEFAULT_PLACEHOLDER_PATTERN


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config()
    assert config == Config()
    assert config.placeholder_pattern == DEFAULT_PLACEHOLDER_PATTERN
    assert config.missing_placeholder == "@@MISSING@@ {0}"


def test_default_file_in_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / DEFAULT_CONFIG_FILE).write_text(
        "base_culture: de\n"
        "recursive: false\n"
        "rules: no-empty-values, no-duplicate-keys\n"
        "ignore: ['*.bak']\n"
        "logging:\n"
        "  level: debug\n"
        "  format: '%(message)s'\n",
        encoding="utf-8",
    )
    config = load_config()
    assert config.base_culture == "de"
    assert config.recursive is False
    assert config.rules == ["no-empty-values", "no-duplicate-keys"]
    assert config.ignore == ["*.bak"]
    assert config.logging.level == "debug"
    assert config.logging.format == "%(message)s"
    assert config.path == DEFAULT_CONFIG_FILE


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)).base_culture == "en"


def test_explicit_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(str(tmp_path / "missing.yml"))


@pytest.mark.parametrize("content", [
    "base_culture: [unclosed\n",
    "- just\n- a list\n",
    "rules: 5\n",
    "logging: verbose\n",
])
def test_invalid_config(tmp_path, content):
    path = tmp_path / "bad.yml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_unknown_logging_level():
    with pytest.raises(ConfigError, match="Unknown logging level"):
        LoggingConfig(level="chatty").apply()


def test_verbose_forces_debug(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    LoggingConfig(level="ERROR").apply(verbose=True)
    assert calls["level"] == logging.DEBUG
