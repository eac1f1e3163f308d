#!/usr/bin/env python3
"""
Tests for the CSV format handler.
"""

import pytest

from localekit.errors import FormatError
from localekit.format_handlers.csv_handler import CsvHandler
from localekit.models import LocalizationEntry, LocalizationFile


@pytest.fixture
def handler():
    return CsvHandler()


def test_parse_with_header(handler):
    content = "key,value,comment\nwelcome,Welcome,Start page\nfarewell,\"Goodbye, friend\",\n"
    file = handler.parse_content(content, "strings.es.csv")
    assert file.culture == "es"
    assert file.get_value("farewell") == "Goodbye, friend"
    assert file.entries_by_key["welcome"].comment == "Start page"
    assert file.entries_by_key["farewell"].comment is None


def test_header_columns_in_any_order(handler):
    content = "Source,Value,Key\nHello,Hola,greeting\n"
    entry = handler.parse_content(content).entries[0]
    assert (entry.key, entry.value, entry.source) == ("greeting", "Hola", "Hello")


def test_parse_without_header(handler):
    file = handler.parse_content("a,1\nb,2,note\n")
    assert [(e.key, e.value, e.comment) for e in file.entries] == [("a", "1", None), ("b", "2", "note")]


def test_blank_rows_are_ignored(handler):
    assert handler.parse_content("key,value\n\n,\nx,y\n").count == 1


def test_missing_key_is_an_error(handler):
    with pytest.raises(FormatError, match="missing key"):
        handler.parse_content("key,value\n,orphan value\n", "bad.csv")


def test_multiline_values_survive_write(handler):
    file = LocalizationFile("x.csv", entries=[
        LocalizationEntry("poem", "line one\nline two", comment="two lines"),
        LocalizationEntry("quote", 'say "hi"'),
    ])
    content = handler.write_content(file)
    assert content.startswith("key,value,comment\n")

    parsed = handler.parse_content(content)
    assert parsed.get_value("poem") == "line one\nline two"
    assert parsed.get_value("quote") == 'say "hi"'


def test_source_column_written_when_present(handler):
    file = LocalizationFile("x.csv", entries=[LocalizationEntry("k", "v", source="s")])
    content = handler.write_content(file)
    assert content.startswith("key,value,comment,source\n")
    assert handler.parse_content(content).entries[0].source == "s"


def test_missing_values_are_reported(handler):
    file = LocalizationFile("x.csv", entries=[LocalizationEntry("a", None), LocalizationEntry("b", "B")])
    assert handler.parse_content(handler.write_content(file)).get_value("a") == ""
    assert handler.conversion_warnings(file) == [
        "1 entry(ies) without a value are written as empty cells and read back as ''."
    ]
