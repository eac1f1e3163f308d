#!/usr/bin/env python3
"""
Canonical data model shared by every format handler and service.

LocalizationEntry and LocalizationFile are what handlers parse into and
write from; the remaining dataclasses are the result objects returned by
the check, scan, diff, generate and convert services.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .culture import resolve_culture


@dataclass(eq=False)
class LocalizationEntry:
    """
    One translatable unit.

    Attributes:
        key: Identifier, expected to be unique within a file (checked, not enforced)
        value: Translated text; None when the format has no value for the key
        comment: Translator comment, if the format carries one
        source: Source-language text, if the format carries one (XLIFF, PO)
    """
    key: str
    value: Optional[str] = None
    comment: Optional[str] = None
    source: Optional[str] = None

    def __post_init__(self):
        """Ensure key is string."""
        self.key = str(self.key)

    @property
    def is_empty(self) -> bool:
        return self.value is None or self.value.strip() == ''

    def __eq__(self, other):
        if not isinstance(other, LocalizationEntry):
            return NotImplemented
        return self.key == other.key and self.value == other.value

    def __hash__(self):
        return hash((self.key, self.value))

    def __str__(self):
        return f"{self.key} = {self.value}"


@dataclass
class LocalizationFile:
    """
    One parsed resource file.

    entries keeps file order and may hold duplicate keys. entries_by_key is
    a lookup index built on first access from entries, where a later
    duplicate replaces an earlier one.
    """
    file_path: str
    culture: Optional[str] = None
    format: str = ""
    entries: list[LocalizationEntry] = field(default_factory=list)
    _index: Optional[dict[str, LocalizationEntry]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def entries_by_key(self) -> dict[str, LocalizationEntry]:
        if self._index is None:
            self._index = {entry.key: entry for entry in self.entries}
        return self._index

    @property
    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]

    @property
    def count(self) -> int:
        return len(self.entries)

    def get_value(self, key: str) -> Optional[str]:
        entry = self.entries_by_key.get(key)
        return entry.value if entry is not None else None

    def contains_key(self, key: str) -> bool:
        return key in self.entries_by_key

    def add_entry(self, entry: LocalizationEntry) -> None:
        """Append an entry; the lookup index is rebuilt on next access."""
        self.entries.append(entry)
        self._index = None

    def get_culture_info(self):
        """Resolve the culture to a babel Locale, or None."""
        return resolve_culture(self.culture)

    def __str__(self):
        return f"{self.file_path} ({self.culture or 'unknown'}) - {self.count} entries"


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class CheckViolation:
    """A single rule violation found by the check service."""
    rule_name: str
    file_path: str
    key: str
    message: str
    severity: Severity = Severity.WARNING

    def to_dict(self) -> dict:
        return {
            "rule": self.rule_name,
            "file": self.file_path,
            "key": self.key,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass
class CheckReport:
    """Ordered collection of violations."""
    violations: list[CheckViolation] = field(default_factory=list)

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    @property
    def violation_count(self) -> int:
        return len(self.violations)

    @property
    def errors(self) -> list[CheckViolation]:
        return [v for v in self.violations if v.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[CheckViolation]:
        return [v for v in self.violations if v.severity == Severity.WARNING]

    def add(self, violation: CheckViolation) -> None:
        self.violations.append(violation)

    def to_dict(self) -> dict:
        return {
            "violation_count": self.violation_count,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "violations": [v.to_dict() for v in self.violations],
        }


@dataclass(frozen=True)
class PlaceholderMismatch:
    """A key whose placeholders differ between two files or cultures."""
    key: str
    expected: list[str]
    actual: list[str]

    def to_dict(self) -> dict:
        return {"key": self.key, "expected": list(self.expected), "actual": list(self.actual)}


@dataclass
class GenerateResult:
    """Outcome of generating one target-culture file."""
    file_path: str
    created: bool = False
    keys_added: int = 0
    keys_skipped: int = 0
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error_message is None

    def to_dict(self) -> dict:
        return {
            "file": self.file_path,
            "success": self.success,
            "created": self.created,
            "keys_added": self.keys_added,
            "keys_skipped": self.keys_skipped,
            "error": self.error_message,
        }


@dataclass
class ConvertResult:
    """Outcome of converting one file."""
    source_path: str
    destination_path: str
    success: bool = False
    error_message: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "source": self.source_path,
            "destination": self.destination_path,
            "success": self.success,
            "error": self.error_message,
            "warnings": list(self.warnings),
        }
