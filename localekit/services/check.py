#!/usr/bin/env python3
"""
Validation rules for localization files.

Per-file rules (empty values, duplicate keys, trailing whitespace) run on
every file. Cross-file rules (orphan keys, placeholder consistency) compare
each non-base file against the base-culture files and only run when a base
culture is given and more than one file was discovered.
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Optional

from ..errors import FormatError
from ..format_handlers import FormatRegistry
from ..models import CheckReport, CheckViolation, LocalizationFile, Severity
from ..placeholders import DEFAULT_PLACEHOLDER_PATTERN, extract_placeholders, get_regex
from .discovery import enumerate_files, load_files

logger = logging.getLogger(__name__)


class CheckRules:
    """Available validation rule names."""
    NO_EMPTY_VALUES = "no-empty-values"
    NO_DUPLICATE_KEYS = "no-duplicate-keys"
    NO_ORPHAN_KEYS = "no-orphan-keys"
    CONSISTENT_PLACEHOLDERS = "consistent-placeholders"
    NO_TRAILING_WHITESPACE = "no-trailing-whitespace"

    # Reported when an explicitly given file cannot be read or parsed
    PARSE_ERROR = "parse-error"

    ALL = (
        NO_EMPTY_VALUES,
        NO_DUPLICATE_KEYS,
        NO_ORPHAN_KEYS,
        CONSISTENT_PLACEHOLDERS,
        NO_TRAILING_WHITESPACE,
    )


@dataclass
class CheckOptions:
    """Options for the check operation. An empty rule list means all rules."""
    rules: list[str] = field(default_factory=list)
    base_culture: Optional[str] = None
    recursive: bool = True
    placeholder_pattern: str = DEFAULT_PLACEHOLDER_PATTERN

    def active_rules(self) -> list[str]:
        return list(self.rules) if self.rules else list(CheckRules.ALL)


class CheckService:
    """Validates localization files against a set of rules."""

    def __init__(self, registry: Optional[FormatRegistry] = None):
        self.registry = registry or FormatRegistry.default()

    def check(
        self,
        path: str,
        options: Optional[CheckOptions] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> CheckReport:
        """
        Validate a file or every supported file under a directory.

        Args:
            path: File or directory
            options: Rule selection and cross-file settings
            cancel_event: Checked between files in directory mode

        Returns:
            CheckReport with violations in discovery order
        """
        options = options or CheckOptions()
        report = CheckReport()
        rules = options.active_rules()

        unknown = [r for r in rules if r not in CheckRules.ALL]
        if unknown:
            logger.warning("Ignoring unknown rule(s): %s", ", ".join(unknown))

        if os.path.isfile(path):
            file = self._parse_explicit(path, report)
            files = [file] if file is not None else []
        elif os.path.isdir(path):
            paths = enumerate_files(path, self.registry, options.recursive)
            files = list(load_files(paths, self.registry, cancel_event))
        else:
            logger.warning("Path does not exist: %s", path)
            files = []

        logger.info("Checking %d file(s) with rules: %s", len(files), ", ".join(rules))

        for file in files:
            self._check_file(file, rules, report)

        if options.base_culture and len(files) > 1:
            if CheckRules.NO_ORPHAN_KEYS in rules:
                self._check_orphan_keys(files, options.base_culture, report)
            if CheckRules.CONSISTENT_PLACEHOLDERS in rules:
                self._check_placeholders(files, options.base_culture, options.placeholder_pattern, report)

        return report

    def check_file(self, file: LocalizationFile, options: Optional[CheckOptions] = None) -> CheckReport:
        """Validate an already parsed file with the per-file rules."""
        options = options or CheckOptions()
        report = CheckReport()
        self._check_file(file, options.active_rules(), report)
        return report

    def _parse_explicit(self, path: str, report: CheckReport) -> Optional[LocalizationFile]:
        handler = self.registry.get_format_for_file(path)
        if handler is None:
            message = f"Cannot determine format for '{path}'."
        else:
            try:
                return handler.parse(path)
            except FormatError as e:
                message = f"Failed to parse '{path}': {e.message}"
            except (OSError, UnicodeDecodeError) as e:
                message = f"Cannot read '{path}': {e}"
        report.add(CheckViolation(
            rule_name=CheckRules.PARSE_ERROR,
            file_path=path,
            key='',
            message=message,
            severity=Severity.ERROR,
        ))
        return None

    def _check_file(self, file: LocalizationFile, rules: list[str], report: CheckReport) -> None:
        if CheckRules.NO_EMPTY_VALUES in rules:
            self._check_empty_values(file, report)
        if CheckRules.NO_DUPLICATE_KEYS in rules:
            self._check_duplicate_keys(file, report)
        if CheckRules.NO_TRAILING_WHITESPACE in rules:
            self._check_trailing_whitespace(file, report)

    def _check_empty_values(self, file: LocalizationFile, report: CheckReport) -> None:
        for entry in file.entries:
            if entry.is_empty:
                report.add(CheckViolation(
                    rule_name=CheckRules.NO_EMPTY_VALUES,
                    file_path=file.file_path,
                    key=entry.key,
                    message=f"Key '{entry.key}' has an empty or whitespace-only value.",
                    severity=Severity.WARNING,
                ))

    def _check_duplicate_keys(self, file: LocalizationFile, report: CheckReport) -> None:
        seen = set()
        for entry in file.entries:
            if entry.key in seen:
                report.add(CheckViolation(
                    rule_name=CheckRules.NO_DUPLICATE_KEYS,
                    file_path=file.file_path,
                    key=entry.key,
                    message=f"Duplicate key '{entry.key}' found.",
                    severity=Severity.ERROR,
                ))
            seen.add(entry.key)

    def _check_trailing_whitespace(self, file: LocalizationFile, report: CheckReport) -> None:
        for entry in file.entries:
            if entry.value is not None and entry.value != entry.value.rstrip():
                report.add(CheckViolation(
                    rule_name=CheckRules.NO_TRAILING_WHITESPACE,
                    file_path=file.file_path,
                    key=entry.key,
                    message=f"Key '{entry.key}' has trailing whitespace.",
                    severity=Severity.WARNING,
                ))

    @staticmethod
    def _is_base(file: LocalizationFile, base_culture: str) -> bool:
        return file.culture is not None and file.culture.lower() == base_culture.lower()

    def _check_orphan_keys(self, files: list[LocalizationFile], base_culture: str, report: CheckReport) -> None:
        base_keys = {
            entry.key
            for file in files if self._is_base(file, base_culture)
            for entry in file.entries
        }

        for file in files:
            if self._is_base(file, base_culture):
                continue
            for entry in file.entries:
                if entry.key not in base_keys:
                    report.add(CheckViolation(
                        rule_name=CheckRules.NO_ORPHAN_KEYS,
                        file_path=file.file_path,
                        key=entry.key,
                        message=(
                            f"Key '{entry.key}' exists in {file.culture} "
                            f"but not in base culture {base_culture}."
                        ),
                        severity=Severity.WARNING,
                    ))

    def _check_placeholders(
        self,
        files: list[LocalizationFile],
        base_culture: str,
        pattern: Optional[str],
        report: CheckReport,
    ) -> None:
        regex = get_regex(pattern)

        # Last base file wins when keys collide
        base_placeholders: dict[str, list[str]] = {}
        for file in files:
            if self._is_base(file, base_culture):
                for entry in file.entries:
                    base_placeholders[entry.key] = extract_placeholders(entry.value, regex)

        for file in files:
            if self._is_base(file, base_culture):
                continue
            for entry in file.entries:
                expected = base_placeholders.get(entry.key)
                if expected is None:
                    continue
                actual = extract_placeholders(entry.value, regex)
                if expected != actual:
                    report.add(CheckViolation(
                        rule_name=CheckRules.CONSISTENT_PLACEHOLDERS,
                        file_path=file.file_path,
                        key=entry.key,
                        message=(
                            f"Key '{entry.key}' has different placeholders: "
                            f"base=[{', '.join(expected)}], target=[{', '.join(actual)}]."
                        ),
                        severity=Severity.ERROR,
                    ))
