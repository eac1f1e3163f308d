#!/usr/bin/env python3
"""
Base classes for format handlers.

FormatHandler is the abstract base class that all format-specific handlers
must implement. Handlers are stateless: parse turns text into a
LocalizationFile, write turns a LocalizationFile back into text.
FormatRegistry selects a handler for a path by extension.
"""

import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from ..culture import culture_from_path
from ..errors import FormatError, UnsupportedOperationError
from ..models import LocalizationEntry, LocalizationFile

logger = logging.getLogger(__name__)

# Separator used to flatten nested keys for formats without nesting
KEY_SEPARATOR = '.'


class FormatHandler(ABC):
    """
    Abstract base class for format-specific handlers.

    Each format handler implements parsing and writing for a specific
    localization file format (JSON, PO, RESX, etc.), converting between the
    format-specific structure and the canonical LocalizationFile.
    """

    @property
    @abstractmethod
    def format_id(self) -> str:
        """Stable format identifier (e.g. "json", "po")."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """
        Extensions this handler owns, with leading dot.

        Multi-part extensions (".i18n.json") are matched as one unit.
        The first extension is the primary one used when converting.
        """
        pass

    @property
    def description(self) -> str:
        """Human-readable format description."""
        return self.format_id

    @property
    def supports_write(self) -> bool:
        """False for read-only formats."""
        return True

    @property
    def primary_extension(self) -> str:
        return self.file_extensions[0]

    def can_handle(self, path: str) -> bool:
        """Fast, case-insensitive extension test."""
        name = os.path.basename(path).lower()
        return any(name.endswith(ext.lower()) for ext in self.file_extensions)

    def matching_extension(self, path: str) -> Optional[str]:
        """The longest owned extension the path ends with, if any."""
        name = os.path.basename(path).lower()
        matches = [ext for ext in self.file_extensions if name.endswith(ext.lower())]
        return max(matches, key=len) if matches else None

    @abstractmethod
    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse format-specific content into a LocalizationFile.

        Args:
            content: Raw file content as string
            path: Originating path, used for file_path and culture inference

        Returns:
            Parsed LocalizationFile

        Raises:
            FormatError: Content is structurally invalid for this format
        """
        pass

    def write_content(self, file: LocalizationFile) -> str:
        """
        Serialize a LocalizationFile to this format.

        Args:
            file: File to serialize

        Returns:
            File content as string

        Raises:
            UnsupportedOperationError: The format is read-only
        """
        raise UnsupportedOperationError(
            f"Format '{self.format_id}' is read-only and cannot be written.",
            file.file_path,
        )

    def parse(self, path: str) -> LocalizationFile:
        """Read a file from disk and parse it."""
        content = read_text(path)
        return self.parse_content(content, path)

    def write(self, file: LocalizationFile, path: str) -> None:
        """Serialize and write a file to disk, creating parent directories."""
        content = self.write_content(file)
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        logger.debug("Wrote %d entries to %s", file.count, path)

    def conversion_warnings(self, file: LocalizationFile) -> list[str]:
        """
        Notices about information lost when writing file in this format.

        Default reports dropped comments and source text. Override in
        subclasses that can or cannot carry more.
        """
        warnings = []
        if not self.supports_comments:
            commented = sum(1 for e in file.entries if e.comment)
            if commented:
                warnings.append(
                    f"{commented} comment(s) dropped: {self.format_id} does not store comments."
                )
        if not self.supports_source:
            with_source = sum(1 for e in file.entries if e.source)
            if with_source:
                warnings.append(
                    f"{with_source} source text(s) dropped: {self.format_id} does not store source text."
                )
        return warnings

    @property
    def supports_comments(self) -> bool:
        return False

    @property
    def supports_source(self) -> bool:
        return False

    def infer_culture(self, path: Optional[str]) -> Optional[str]:
        """Infer a culture from a file name (app.en-US.json -> en-US)."""
        if not path:
            return None
        return culture_from_path(path, self.matching_extension(path) or Path(path).suffix)

    def new_file(
        self,
        path: Optional[str],
        entries: list[LocalizationEntry],
        culture: Optional[str] = None,
    ) -> LocalizationFile:
        """Build a LocalizationFile owned by this handler."""
        return LocalizationFile(
            file_path=path or '',
            culture=culture or self.infer_culture(path),
            format=self.format_id,
            entries=entries,
        )

    def format_error(self, message: str, path: Optional[str]) -> FormatError:
        where = f" in {path}" if path else ""
        return FormatError(f"Invalid {self.format_id}{where}: {message}", path)


def read_text(path: str) -> str:
    """Read a whole file as UTF-8, tolerating a byte order mark."""
    with open(path, 'r', encoding='utf-8-sig') as f:
        return f.read()


def flatten(obj: Any, prefix: str, entries: list[LocalizationEntry]) -> None:
    """
    Recursively flatten nested dicts/lists to dot-notation entries.

    Scalars become strings; None stays None.
    """
    if isinstance(obj, dict):
        for key, value in obj.items():
            str_key = str(key)
            new_prefix = f"{prefix}{KEY_SEPARATOR}{str_key}" if prefix else str_key
            flatten(value, new_prefix, entries)

    elif isinstance(obj, list):
        for i, item in enumerate(obj):
            flatten(item, f"{prefix}{KEY_SEPARATOR}{i}", entries)

    elif obj is None:
        entries.append(LocalizationEntry(key=prefix, value=None))

    elif isinstance(obj, bool):
        entries.append(LocalizationEntry(key=prefix, value=str(obj).lower()))

    else:
        entries.append(LocalizationEntry(key=prefix, value=str(obj)))


def unflatten(entries: list[LocalizationEntry]) -> dict:
    """
    Rebuild a nested dict from dot-notation keys.

    A leaf whose key is also the prefix of another key ("a" and "a.b")
    cannot be nested and is left out; see nesting_conflicts().
    """
    conflicts = set(nesting_conflicts(entries))
    result: dict = {}
    for entry in entries:
        if entry.key in conflicts:
            continue
        parts = entry.key.split(KEY_SEPARATOR)
        node = result
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = entry.value
    return result


def nesting_conflicts(entries: list[LocalizationEntry]) -> list[str]:
    """Keys that are both a leaf and a prefix of another key."""
    keys = {entry.key for entry in entries}
    prefixes = set()
    for key in keys:
        parts = key.split(KEY_SEPARATOR)
        for i in range(1, len(parts)):
            prefixes.add(KEY_SEPARATOR.join(parts[:i]))
    return sorted(keys & prefixes)


class FormatRegistry:
    """
    Registry of format handler instances.

    Lookups never lock; register() rebuilds the maps under a lock and swaps
    them in, so concurrent readers always see a consistent view.
    """

    _default: Optional["FormatRegistry"] = None
    _default_lock = threading.Lock()

    def __init__(self, handlers: Optional[list[FormatHandler]] = None):
        self._lock = threading.Lock()
        self._handlers: dict[str, FormatHandler] = {}
        self._extension_map: dict[str, FormatHandler] = {}
        self._multi_part: tuple[str, ...] = ()
        for handler in handlers or []:
            self.register(handler)

    @classmethod
    def default(cls) -> "FormatRegistry":
        """Process-wide registry with every built-in handler, built on first use."""
        if cls._default is None:
            with cls._default_lock:
                if cls._default is None:
                    from . import builtin_handlers
                    cls._default = cls(builtin_handlers())
        return cls._default

    def register(self, handler: FormatHandler) -> None:
        """
        Register a handler instance.

        An extension already owned by another handler keeps its first owner,
        so register more specific handlers first.
        """
        with self._lock:
            handlers = dict(self._handlers)
            extension_map = dict(self._extension_map)

            handlers[handler.format_id.lower()] = handler
            for ext in handler.file_extensions:
                extension_map.setdefault(ext.lower(), handler)

            multi_part = tuple(sorted(
                (ext for ext in extension_map if ext.count('.') > 1),
                key=len,
                reverse=True,
            ))

            self._handlers = handlers
            self._extension_map = extension_map
            self._multi_part = multi_part
        logger.debug("Registered format %s (%s)", handler.format_id,
                     ", ".join(handler.file_extensions))

    def get_format(self, name: str) -> Optional[FormatHandler]:
        """Get handler by format id or extension ("yaml", ".yml", "yml")."""
        if not name:
            return None
        key = name.lower()
        handler = self._handlers.get(key)
        if handler is not None:
            return handler
        ext = key if key.startswith('.') else f'.{key}'
        return self._extension_map.get(ext)

    def get_format_for_file(self, path: str) -> Optional[FormatHandler]:
        """
        Select a handler for a path.

        Multi-part extensions are tried first, then the simple extension.
        """
        name = os.path.basename(path).lower()
        extension_map = self._extension_map
        for ext in self._multi_part:
            if name.endswith(ext):
                return extension_map[ext]
        return extension_map.get(os.path.splitext(name)[1])

    def is_supported(self, path: str) -> bool:
        return self.get_format_for_file(path) is not None

    @property
    def formats(self) -> list[FormatHandler]:
        return list(self._handlers.values())

    @property
    def extensions(self) -> list[str]:
        return list(self._extension_map.keys())

    def list_formats(self) -> list[dict[str, Any]]:
        """List all registered formats with their extensions."""
        return [
            {
                'id': handler.format_id,
                'description': handler.description,
                'extensions': handler.file_extensions,
                'writable': handler.supports_write,
            }
            for handler in self._handlers.values()
        ]
