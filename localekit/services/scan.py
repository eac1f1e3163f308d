#!/usr/bin/env python3
"""
Translation coverage scan across cultures.

Files are grouped by culture and their keys merged, so a culture split over
several files (app.tr.json, errors.tr.json) is compared as a whole against
the base culture.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from ..culture import normalize_culture
from ..format_handlers import FormatRegistry
from ..models import LocalizationFile, PlaceholderMismatch
from ..placeholders import DEFAULT_PLACEHOLDER_PATTERN, extract_placeholders, get_regex
from .discovery import discover

logger = logging.getLogger(__name__)


@dataclass
class ScanOptions:
    """Options for the scan operation. Empty target_cultures means every non-base culture found."""
    base_culture: str = "en"
    target_cultures: list[str] = field(default_factory=list)
    recursive: bool = True
    ignore_patterns: list[str] = field(default_factory=list)
    check_placeholders: bool = True
    placeholder_pattern: str = DEFAULT_PLACEHOLDER_PATTERN


@dataclass
class CultureScanResult:
    """Comparison of one target culture against the base culture."""
    culture: str
    base_key_count: int = 0
    file_count: int = 0
    missing_keys: list[str] = field(default_factory=list)
    orphan_keys: list[str] = field(default_factory=list)
    empty_keys: list[str] = field(default_factory=list)
    placeholder_mismatches: list[PlaceholderMismatch] = field(default_factory=list)

    @property
    def translated_count(self) -> int:
        """Base keys present in this culture with a non-empty value."""
        empty_base = sum(1 for key in self.empty_keys if key not in self.orphan_keys)
        return self.base_key_count - len(self.missing_keys) - empty_base

    @property
    def coverage(self) -> float:
        if self.base_key_count == 0:
            return 100.0
        return round(self.translated_count * 100.0 / self.base_key_count, 2)

    @property
    def has_issues(self) -> bool:
        return bool(self.missing_keys or self.orphan_keys or self.empty_keys or self.placeholder_mismatches)

    def to_dict(self) -> dict:
        return {
            "culture": self.culture,
            "files": self.file_count,
            "coverage": self.coverage,
            "translated": self.translated_count,
            "missing_keys": list(self.missing_keys),
            "orphan_keys": list(self.orphan_keys),
            "empty_keys": list(self.empty_keys),
            "placeholder_mismatches": [m.to_dict() for m in self.placeholder_mismatches],
        }


@dataclass
class ScanReport:
    """Scan outcome for every target culture."""
    base_culture: str
    base_key_count: int = 0
    files_scanned: int = 0
    results: list[CultureScanResult] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return any(result.has_issues for result in self.results)

    def get(self, culture: str) -> Optional[CultureScanResult]:
        wanted = _culture_key(culture)
        for result in self.results:
            if _culture_key(result.culture) == wanted:
                return result
        return None

    def to_dict(self) -> dict:
        return {
            "base_culture": self.base_culture,
            "base_keys": self.base_key_count,
            "files_scanned": self.files_scanned,
            "cultures": [result.to_dict() for result in self.results],
        }


def _culture_key(culture: str) -> str:
    return normalize_culture(culture).lower()


class ScanService:
    """Reports missing, orphan and empty keys per culture."""

    def __init__(self, registry: Optional[FormatRegistry] = None):
        self.registry = registry or FormatRegistry.default()

    def scan(
        self,
        path: str,
        options: Optional[ScanOptions] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> ScanReport:
        """
        Scan a file or directory and compare every culture with the base.

        Args:
            path: File or directory
            options: Cultures, discovery and placeholder settings
            cancel_event: Checked between files during discovery

        Returns:
            ScanReport with one result per target culture, sorted by culture
            when the targets were discovered
        """
        options = options or ScanOptions()
        files = discover(path, self.registry, options.recursive, options.ignore_patterns, cancel_event)

        groups: dict[str, list[LocalizationFile]] = {}
        names: dict[str, str] = {}
        for file in files:
            if not file.culture:
                logger.debug("No culture for %s; not scanned", file.file_path)
                continue
            group = _culture_key(file.culture)
            groups.setdefault(group, []).append(file)
            names.setdefault(group, normalize_culture(file.culture))

        base_group = _culture_key(options.base_culture)
        base_values = self._merge(groups.get(base_group, []))
        if base_group not in groups:
            logger.warning("No files found for base culture %s under %s", options.base_culture, path)

        if options.target_cultures:
            targets = [normalize_culture(c) for c in options.target_cultures]
        else:
            targets = sorted(names[g] for g in groups if g != base_group)

        report = ScanReport(
            base_culture=options.base_culture,
            base_key_count=len(base_values),
            files_scanned=len(files),
        )
        regex = get_regex(options.placeholder_pattern)

        for culture in targets:
            group_files = groups.get(_culture_key(culture), [])
            values = self._merge(group_files)
            result = CultureScanResult(
                culture=culture,
                base_key_count=len(base_values),
                file_count=len(group_files),
                missing_keys=[key for key in base_values if key not in values],
                orphan_keys=[key for key in values if key not in base_values],
                empty_keys=[key for key, value in values.items() if value is None or not value.strip()],
            )
            if options.check_placeholders:
                for key, value in values.items():
                    if key not in base_values:
                        continue
                    expected = extract_placeholders(base_values[key], regex)
                    actual = extract_placeholders(value, regex)
                    if expected != actual:
                        result.placeholder_mismatches.append(PlaceholderMismatch(key, expected, actual))
            logger.info("%s: %.2f%% coverage, %d missing", culture, result.coverage, len(result.missing_keys))
            report.results.append(result)

        return report

    @staticmethod
    def _merge(files: list[LocalizationFile]) -> dict[str, Optional[str]]:
        """Key to value across files; later files and entries win."""
        merged: dict[str, Optional[str]] = {}
        for file in files:
            for key, entry in file.entries_by_key.items():
                merged[key] = entry.value
        return merged
