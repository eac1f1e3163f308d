#!/usr/bin/env python3
"""
Key-level comparison of two localization files.

The files may be in different formats; both are parsed into the canonical
model before comparing.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from ..errors import FormatError, PathError
from ..format_handlers import FormatRegistry
from ..models import LocalizationFile, PlaceholderMismatch
from ..placeholders import DEFAULT_PLACEHOLDER_PATTERN, extract_placeholders, get_regex

logger = logging.getLogger(__name__)


@dataclass
class DiffReport:
    """Differences between a first (reference) file and a second file."""
    first_path: str
    second_path: str
    only_in_first: list[str] = field(default_factory=list)
    only_in_second: list[str] = field(default_factory=list)
    empty_in_second: list[str] = field(default_factory=list)
    placeholder_mismatches: list[PlaceholderMismatch] = field(default_factory=list)

    @property
    def has_differences(self) -> bool:
        return bool(
            self.only_in_first or self.only_in_second
            or self.empty_in_second or self.placeholder_mismatches
        )

    def to_dict(self) -> dict:
        return {
            "first": self.first_path,
            "second": self.second_path,
            "only_in_first": list(self.only_in_first),
            "only_in_second": list(self.only_in_second),
            "empty_in_second": list(self.empty_in_second),
            "placeholder_mismatches": [m.to_dict() for m in self.placeholder_mismatches],
        }


class DiffService:
    """Compares the keys of two localization files."""

    def __init__(self, registry: Optional[FormatRegistry] = None):
        self.registry = registry or FormatRegistry.default()

    def diff(
        self,
        first_path: str,
        second_path: str,
        check_placeholders: bool = True,
        placeholder_pattern: Optional[str] = DEFAULT_PLACEHOLDER_PATTERN,
    ) -> DiffReport:
        """
        Compare two files.

        Raises:
            PathError: A file does not exist or has no known format
            FormatError: A file cannot be parsed
        """
        first = self._load(first_path)
        second = self._load(second_path)
        return self.diff_files(first, second, check_placeholders, placeholder_pattern)

    def diff_files(
        self,
        first: LocalizationFile,
        second: LocalizationFile,
        check_placeholders: bool = True,
        placeholder_pattern: Optional[str] = DEFAULT_PLACEHOLDER_PATTERN,
    ) -> DiffReport:
        """Compare two parsed files; key order follows the file that owns the key."""
        first_values = first.entries_by_key
        second_values = second.entries_by_key
        report = DiffReport(first_path=first.file_path, second_path=second.file_path)

        report.only_in_first = [key for key in first_values if key not in second_values]
        report.only_in_second = [key for key in second_values if key not in first_values]
        report.empty_in_second = [
            key for key, entry in second_values.items()
            if entry.is_empty and key in first_values and not first_values[key].is_empty
        ]

        if check_placeholders:
            regex = get_regex(placeholder_pattern)
            for key, entry in first_values.items():
                other = second_values.get(key)
                if other is None:
                    continue
                expected = extract_placeholders(entry.value, regex)
                actual = extract_placeholders(other.value, regex)
                if expected != actual:
                    report.placeholder_mismatches.append(PlaceholderMismatch(key, expected, actual))

        logger.info("Diff %s vs %s: %d only in first, %d only in second",
                    first.file_path, second.file_path,
                    len(report.only_in_first), len(report.only_in_second))
        return report

    def _load(self, path: str) -> LocalizationFile:
        if not os.path.isfile(path):
            raise PathError(f"File '{path}' does not exist.", path)
        handler = self.registry.get_format_for_file(path)
        if handler is None:
            raise PathError(f"Cannot determine format for '{path}'.", path)
        try:
            return handler.parse(path)
        except (OSError, UnicodeDecodeError) as e:
            raise FormatError(f"Failed to parse '{path}': {e}", path) from e
