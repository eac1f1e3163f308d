#!/usr/bin/env python3
"""
Tests for target path derivation.
"""

import os

import pytest

from localekit.path_helper import (
    generate_target_path,
    get_extension,
    get_name_without_extension,
    target_file_name,
)


@pytest.mark.parametrize("path,extension,name", [
    ("app.en.json", ".json", "app.en"),
    ("dir/app.en.i18n.json", ".i18n.json", "app.en"),
    ("APP.EN.I18N.JSON", ".i18n.json", "APP.EN"),
    ("Resources.resx", ".resx", "Resources"),
    ("README", "", "README"),
])
def test_extension_and_name(path, extension, name):
    assert get_extension(path) == extension
    assert get_name_without_extension(path) == name


@pytest.mark.parametrize("path,expected", [
    ("app.en.json", "app.tr.json"),
    ("en.json", "tr.json"),
    ("strings.json", "strings.tr.json"),
    ("app.EN.yaml", "app.tr.yaml"),
    ("app.en.i18n.json", "app.tr.i18n.json"),
])
def test_target_file_name(path, expected):
    assert target_file_name(path, "en", "tr") == expected


def test_single_file_input(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "app.en.json").write_text("{}", encoding="utf-8")

    result = generate_target_path("app.en.json", "app.en.json", "out", "en", "tr")

    assert result == os.path.join("out", "app.tr.json")
    assert (tmp_path / "out").is_dir()


def test_missing_single_file_input_is_not_treated_as_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = generate_target_path("app.en.json", "app.en.json", "out", "en", "tr")
    assert result == os.path.join("out", "app.tr.json")


def test_directory_input_keeps_subdirectories(tmp_path):
    source_dir = tmp_path / "locales"
    (source_dir / "admin").mkdir(parents=True)
    source = source_dir / "admin" / "app.en.json"
    source.write_text("{}", encoding="utf-8")
    output = tmp_path / "out"

    result = generate_target_path(str(source), str(source_dir), str(output), "en", "de")

    assert result == os.path.join(str(output), "admin", "app.de.json")
    assert (output / "admin").is_dir()


def test_directory_input_top_level_file(tmp_path):
    source = tmp_path / "en.json"
    source.write_text("{}", encoding="utf-8")

    result = generate_target_path(str(source), str(tmp_path), str(tmp_path), "en", "fr")

    assert result == os.path.join(str(tmp_path), "fr.json")
