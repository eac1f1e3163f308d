#!/usr/bin/env python3
"""
Tests for ConvertService, including round trips between writable formats.
"""

import itertools
import json
import os

import pytest
import yaml

from localekit.format_handlers import FormatRegistry
from localekit.models import LocalizationEntry, LocalizationFile
from localekit.services.convert import ConvertOptions, ConvertService

SAMPLE = {
    "greeting": "Hello, {name}!",
    "farewell": "Goodbye",
    "items_count": "{count} items",
    "quote": 'She said "hi" & left',
}

# Formats that keep arbitrary keys; SRT replaces them with cue numbers
TEXT_FORMATS = ["json", "i18n-json", "yaml", "resx", "po", "xliff", "csv", "ftl", "vtt"]


@pytest.fixture
def service():
    return ConvertService()


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "app.en.json"
    path.write_text(json.dumps(SAMPLE), encoding="utf-8")
    return path


def test_convert_json_to_yaml(service, source, tmp_path):
    destination = tmp_path / "out" / "app.en.yaml"
    result = service.convert(str(source), str(destination), ConvertOptions(to_format="yaml"))

    assert result.success, result.error_message
    assert result.warnings == []
    assert yaml.safe_load(destination.read_text(encoding="utf-8")) == {"en": SAMPLE}


def test_culture_override(service, source, tmp_path):
    destination = tmp_path / "app.xlf"
    result = service.convert(str(source), str(destination), ConvertOptions(to_format="xlf", culture="tr-TR"))

    assert result.success
    assert 'target-language="tr-TR"' in destination.read_text(encoding="utf-8")


def test_existing_destination_without_force_is_untouched(service, source, tmp_path):
    destination = tmp_path / "app.en.yaml"
    original = b"en:\n  keep: me\n"
    destination.write_bytes(original)

    result = service.convert(str(source), str(destination), ConvertOptions(to_format="yaml"))

    assert not result.success
    assert "already exists" in result.error_message
    assert destination.read_bytes() == original


def test_force_overwrites(service, source, tmp_path):
    destination = tmp_path / "app.en.yaml"
    destination.write_text("en:\n  keep: me\n", encoding="utf-8")

    result = service.convert(str(source), str(destination), ConvertOptions(to_format="yaml", force=True))

    assert result.success
    assert "keep" not in destination.read_text(encoding="utf-8")


def test_unknown_source_format(service, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("x", encoding="utf-8")
    result = service.convert(str(path), str(tmp_path / "x.json"), ConvertOptions(to_format="json"))
    assert "Cannot determine format" in result.error_message


def test_explicit_source_format(service, tmp_path):
    path = tmp_path / "strings.txt"
    path.write_text('{"a": "b"}', encoding="utf-8")
    result = service.convert(str(path), str(tmp_path / "a.csv"),
                             ConvertOptions(to_format="csv", from_format="json"))
    assert result.success


def test_unsupported_target_format(service, source, tmp_path):
    result = service.convert(str(source), str(tmp_path / "x.docx"), ConvertOptions(to_format="docx"))
    assert not result.success
    assert "Unsupported target format" in result.error_message


def test_read_only_target_format(service, source, tmp_path):
    destination = tmp_path / "Resources.Designer.vb"
    result = service.convert(str(source), str(destination), ConvertOptions(to_format="vb"))
    assert not result.success
    assert "read-only" in result.error_message
    assert not destination.exists()


def test_missing_source_file(service, tmp_path):
    result = service.convert(str(tmp_path / "nope.json"), str(tmp_path / "x.yaml"), ConvertOptions(to_format="yaml"))
    assert "does not exist" in result.error_message


def test_unparsable_source(service, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")
    result = service.convert(str(path), str(tmp_path / "bad.yaml"), ConvertOptions(to_format="yaml"))
    assert "Failed to parse" in result.error_message


def test_lossy_conversion_warnings(service, tmp_path):
    path = tmp_path / "app.xlf"
    handler = FormatRegistry.default().get_format("xliff")
    handler.write(LocalizationFile(str(path), culture="de", entries=[
        LocalizationEntry("a", "A", comment="note", source="src"),
    ]), str(path))

    result = service.convert(str(path), str(tmp_path / "app.json"), ConvertOptions(to_format="json"))

    assert result.success
    assert any("comment" in w for w in result.warnings)
    assert any("source text" in w for w in result.warnings)


def test_convert_directory(service, tmp_path):
    src = tmp_path / "src"
    (src / "admin").mkdir(parents=True)
    (src / "app.en.json").write_text('{"a": "A"}', encoding="utf-8")
    (src / "admin" / "panel.en.i18n.json").write_text('{"b": {"c": "C"}}', encoding="utf-8")
    (src / "readme.md").write_text("ignored", encoding="utf-8")
    dest = tmp_path / "dest"

    results = service.convert_directory(str(src), str(dest), ConvertOptions(to_format="yaml"))

    assert all(r.success for r in results)
    assert sorted(os.path.relpath(r.destination_path, str(dest)) for r in results) == sorted([
        "app.en.yaml",
        os.path.join("admin", "panel.en.yaml"),
    ])
    assert yaml.safe_load((dest / "admin" / "panel.en.yaml").read_text(encoding="utf-8")) == {
        "en": {"b": {"c": "C"}}
    }


def test_convert_directory_partial_failure(service, tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "good.json").write_text('{"a": "A"}', encoding="utf-8")
    (src / "bad.json").write_text("{", encoding="utf-8")

    results = service.convert_directory(str(src), str(tmp_path / "dest"), ConvertOptions(to_format="csv"))

    assert [r.success for r in sorted(results, key=lambda r: r.source_path)] == [False, True]
    assert (tmp_path / "dest" / "good.csv").exists()


def test_convert_directory_non_recursive(service, tmp_path):
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "top.json").write_text('{"a": "A"}', encoding="utf-8")
    (src / "sub" / "deep.json").write_text('{"b": "B"}', encoding="utf-8")

    results = service.convert_directory(str(src), str(tmp_path / "dest"),
                                        ConvertOptions(to_format="po", recursive=False))
    assert [os.path.basename(r.destination_path) for r in results] == ["top.po"]


def test_convert_directory_missing_source(service, tmp_path):
    results = service.convert_directory(str(tmp_path / "nope"), str(tmp_path / "dest"),
                                        ConvertOptions(to_format="json"))
    assert len(results) == 1
    assert "does not exist" in results[0].error_message


@pytest.mark.parametrize("first,second", list(itertools.permutations(TEXT_FORMATS, 2)))
def test_round_trip_preserves_keys_and_values(service, tmp_path, first, second):
    registry = FormatRegistry.default()
    first_handler = registry.get_format(first)
    second_handler = registry.get_format(second)

    start = tmp_path / f"app.en{first_handler.primary_extension}"
    first_handler.write(LocalizationFile(str(start), culture="en", entries=[
        LocalizationEntry(key, value) for key, value in SAMPLE.items()
    ]), str(start))

    middle = tmp_path / f"middle.en{second_handler.primary_extension}"
    back = tmp_path / f"back.en{first_handler.primary_extension}"
    assert service.convert(str(start), str(middle), ConvertOptions(to_format=second)).success
    assert service.convert(str(middle), str(back), ConvertOptions(to_format=first)).success

    result = first_handler.parse(str(back))
    assert {e.key: e.value for e in result.entries} == SAMPLE


def test_subtitle_round_trip(service, tmp_path):
    srt = tmp_path / "movie.srt"
    srt.write_text(
        "1\n00:00:01,000 --> 00:00:02,000\nHello\n\n2\n00:00:03,000 --> 00:00:04,000\nTwo\nlines\n",
        encoding="utf-8",
    )
    vtt = tmp_path / "movie.vtt"
    back = tmp_path / "back.srt"

    assert service.convert(str(srt), str(vtt), ConvertOptions(to_format="vtt")).success
    assert service.convert(str(vtt), str(back), ConvertOptions(to_format="srt")).success

    result = FormatRegistry.default().get_format("srt").parse(str(back))
    assert [(e.key, e.value) for e in result.entries] == [("1", "Hello"), ("2", "Two\nlines")]


def test_srt_renumbers_keys_with_warning(service, tmp_path):
    source = tmp_path / "app.en.json"
    source.write_text(json.dumps({"greeting": "Hi"}), encoding="utf-8")
    srt = tmp_path / "app.en.srt"

    result = service.convert(str(source), str(srt), ConvertOptions(to_format="srt"))

    assert result.success
    assert "1 key(s) are not cue numbers and were replaced by their position." in result.warnings
    parsed = FormatRegistry.default().get_format("srt").parse(str(srt))
    assert [(e.key, e.value) for e in parsed.entries] == [("1", "Hi")]


def test_culture_like_section_survives_yaml(service, tmp_path):
    source = tmp_path / "strings.json"
    source.write_text(json.dumps({"id": {"label": "ID"}}), encoding="utf-8")
    middle = tmp_path / "strings.yaml"
    back = tmp_path / "back.json"

    assert service.convert(str(source), str(middle), ConvertOptions(to_format="yaml")).success
    assert service.convert(str(middle), str(back), ConvertOptions(to_format="json")).success

    assert json.loads(back.read_text(encoding="utf-8")) == {"id.label": "ID"}


def test_unwritable_fluent_keys_fail_the_conversion(service, tmp_path):
    source = tmp_path / "errors.json"
    source.write_text(json.dumps({"404": "Not found"}), encoding="utf-8")
    destination = tmp_path / "errors.ftl"

    result = service.convert(str(source), str(destination), ConvertOptions(to_format="ftl"))

    assert not result.success
    assert "Failed to write" in result.error_message
    assert "404" in result.error_message
    assert not destination.exists()


def test_at_sign_keys_survive_conversion(service, tmp_path):
    source = tmp_path / "app.en.json"
    source.write_text(json.dumps({"@title": "Title", "a": "A"}), encoding="utf-8")
    destination = tmp_path / "app.en.yaml"

    assert service.convert(str(source), str(destination), ConvertOptions(to_format="yaml")).success
    assert yaml.safe_load(destination.read_text(encoding="utf-8")) == {"en": {"@title": "Title", "a": "A"}}
