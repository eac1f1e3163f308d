#!/usr/bin/env python3
"""
Tests for ScanService coverage reports.
"""

import json

import pytest

from localekit.services.scan import ScanOptions, ScanService


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def locales(tmp_path):
    write_json(tmp_path / "app.en.json", {"a": "A", "b": "B {name}", "c": "C", "d": "D"})
    write_json(tmp_path / "errors.en.json", {"e": "E"})
    write_json(tmp_path / "app.tr.json", {"a": "A-tr", "b": "B-tr {isim}", "c": "", "extra": "X"})
    write_json(tmp_path / "errors.tr.json", {"e": "E-tr"})
    write_json(tmp_path / "app.de.json", {"a": "A-de"})
    write_json(tmp_path / "misc.json", {"z": "no culture"})
    return tmp_path


@pytest.fixture
def service():
    return ScanService()


def test_targets_default_to_all_other_cultures(service, locales):
    report = service.scan(str(locales))
    assert [r.culture for r in report.results] == ["de", "tr"]
    assert report.base_key_count == 5
    assert report.files_scanned == 6


def test_culture_files_are_merged(service, locales):
    tr = service.scan(str(locales)).get("tr")
    assert tr.file_count == 2
    assert tr.missing_keys == ["d"]
    assert tr.orphan_keys == ["extra"]
    assert tr.empty_keys == ["c"]


def test_coverage(service, locales):
    report = service.scan(str(locales))
    # tr: a, b, e translated out of 5
    assert report.get("tr").translated_count == 3
    assert report.get("tr").coverage == 60.0
    assert report.get("de").coverage == 20.0


def test_placeholder_mismatches(service, locales):
    tr = service.scan(str(locales)).get("tr")
    assert [(m.key, m.expected, m.actual) for m in tr.placeholder_mismatches] == [
        ("b", ["{name}"], ["{isim}"]),
    ]


def test_placeholder_check_can_be_disabled(service, locales):
    tr = service.scan(str(locales), ScanOptions(check_placeholders=False)).get("tr")
    assert tr.placeholder_mismatches == []


def test_explicit_targets(service, locales):
    report = service.scan(str(locales), ScanOptions(target_cultures=["tr", "fr"]))
    assert [r.culture for r in report.results] == ["tr", "fr"]
    fr = report.get("fr")
    assert fr.file_count == 0
    assert fr.coverage == 0.0
    assert len(fr.missing_keys) == 5


def test_ignore_patterns(service, locales):
    report = service.scan(str(locales), ScanOptions(ignore_patterns=["errors.*"]))
    assert report.base_key_count == 4
    assert report.get("tr").missing_keys == ["d"]


def test_no_issues(service, tmp_path):
    write_json(tmp_path / "en.json", {"a": "A"})
    write_json(tmp_path / "tr.json", {"a": "A-tr"})
    report = service.scan(str(tmp_path))
    assert not report.has_issues
    assert report.get("TR").coverage == 100.0


def test_to_dict(service, locales):
    data = service.scan(str(locales)).to_dict()
    assert data["base_culture"] == "en"
    assert data["cultures"][1]["culture"] == "tr"
    assert data["cultures"][1]["missing_keys"] == ["d"]
