#!/usr/bin/env python3
"""
Tests for the YAML format handler.
Tests culture roots, array handling, error reporting and writing.
"""

import pytest
import yaml

from localekit.errors import FormatError
from localekit.format_handlers.yaml_handler import YamlHandler
from localekit.models import LocalizationEntry, LocalizationFile


@pytest.fixture
def handler():
    """Fixture to create YamlHandler instance."""
    return YamlHandler()


def test_culture_root_is_stripped(handler):
    content = """en:
  greeting: Hello
  messages:
    welcome: Welcome to the app
    goodbye: Goodbye
"""
    file = handler.parse_content(content, "config/locales/app.yml")
    assert file.culture == "en"
    assert file.keys == ["greeting", "messages.welcome", "messages.goodbye"]


def test_non_culture_root_is_kept(handler):
    file = handler.parse_content("site:\n  title: Title\n")
    assert file.culture is None
    assert file.keys == ["site.title"]


def test_multiple_top_level_keys_are_not_a_culture_root(handler):
    file = handler.parse_content("en:\n  a: A\nde:\n  a: B\n")
    assert file.keys == ["en.a", "de.a"]


def test_arrays(handler):
    file = handler.parse_content("tr:\n  days:\n    - Pazartesi\n    - Salı\n")
    assert file.culture == "tr"
    assert [(e.key, e.value) for e in file.entries] == [("days.0", "Pazartesi"), ("days.1", "Salı")]


def test_empty_document(handler):
    assert handler.parse_content("").count == 0


@pytest.mark.parametrize("content", ["- a\n- b\n", "key: [unclosed\n"])
def test_invalid_yaml_raises_format_error(handler, content):
    with pytest.raises(FormatError):
        handler.parse_content(content, "bad.yml")


def test_write_wraps_in_culture_root(handler):
    file = LocalizationFile("app.tr.yml", culture="tr", entries=[
        LocalizationEntry("greeting", "Merhaba"),
        LocalizationEntry("messages.welcome", "Hoş geldiniz"),
    ])
    content = handler.write_content(file)
    assert yaml.safe_load(content) == {"tr": {"greeting": "Merhaba", "messages": {"welcome": "Hoş geldiniz"}}}
    assert "Hoş geldiniz" in content


def test_write_without_culture(handler):
    file = LocalizationFile("x.yml", entries=[LocalizationEntry("a.b", "c")])
    assert yaml.safe_load(handler.write_content(file)) == {"a": {"b": "c"}}


def test_values_that_look_like_other_types_survive(handler):
    file = LocalizationFile("x.yml", entries=[
        LocalizationEntry("answer", "yes"),
        LocalizationEntry("count", "10"),
        LocalizationEntry("greeting", "Hello, {name}!"),
    ])
    parsed = handler.parse_content(handler.write_content(file))
    assert parsed.get_value("answer") == "yes"
    assert parsed.get_value("count") == "10"
    assert parsed.get_value("greeting") == "Hello, {name}!"


def test_root_naming_another_culture_than_the_file_is_kept(handler):
    file = handler.parse_content("de:\n  a: A\n", "locales/app.en.yml")
    assert file.culture == "en"
    assert file.keys == ["de.a"]


def test_culture_like_section_without_culture_round_trips(handler):
    file = LocalizationFile("strings.yml", entries=[LocalizationEntry("id.label", "ID")])
    content = handler.write_content(file)
    assert yaml.safe_load(content) == {"id.label": "ID"}

    parsed = handler.parse_content(content, "strings.yml")
    assert parsed.culture is None
    assert [(e.key, e.value) for e in parsed.entries] == [("id.label", "ID")]


def test_culture_like_section_with_several_keys_round_trips(handler):
    file = LocalizationFile("strings.yml", entries=[
        LocalizationEntry("no.title", "Title"),
        LocalizationEntry("no.menu.open", "Open"),
    ])
    parsed = handler.parse_content(handler.write_content(file), "strings.yml")
    assert parsed.keys == ["no.title", "no.menu.open"]


def test_culture_differing_from_file_name_is_reported(handler):
    file = LocalizationFile("app.en.yml", culture="tr", entries=[LocalizationEntry("a", "A")])
    assert any("differs from 'en'" in w for w in handler.conversion_warnings(file))
