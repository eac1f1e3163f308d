#!/usr/bin/env python3
"""
Fluent (FTL) format handler.

Supports the subset of Fluent syntax used by resource files: messages,
terms, multiline patterns, attributes and standalone comments. Placeables
and selectors are kept verbatim as part of the value text.
"""

import os
import re
from typing import Optional

from ..culture import culture_from_file_name
from ..errors import FormatError
from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler, KEY_SEPARATOR

MESSAGE_LINE = re.compile(r'^(-?[A-Za-z][\w-]*)\s*=\s?(.*)$')
ATTRIBUTE_LINE = re.compile(r'^\s+\.([^\s=]+)\s*=\s?(.*)$')
IDENTIFIER = re.compile(r'^-?[A-Za-z][\w-]*$')
ATTRIBUTE_NAME = re.compile(r'^[A-Za-z][\w-]*$')
# What ATTRIBUTE_LINE reads back
ATTRIBUTE_KEY = re.compile(r'[^\s=]+')

# Fluent needs a value for a message; an empty string literal stands in
EMPTY_VALUE = '{""}'
INDENT = '    '


class FtlHandler(FormatHandler):
    """
    Handler for Fluent (.ftl) resource files.

    ```
    # Shown on the start page
    welcome = Welcome, { $name }!
    login-input = Predefined value
        .placeholder = email@example.com
    multiline =
        First line
        Second line
    ```

    Attributes become "message.attribute" keys. A comment directly above a
    message is its entry comment.
    """

    @property
    def format_id(self) -> str:
        return "ftl"

    @property
    def file_extensions(self) -> list[str]:
        return [".ftl"]

    @property
    def description(self) -> str:
        return "Project Fluent"

    @property
    def supports_comments(self) -> bool:
        return True

    def infer_culture(self, path: Optional[str]) -> Optional[str]:
        """File name first, then the parent directory (locales/en-US/main.ftl)."""
        culture = super().infer_culture(path)
        if culture or not path:
            return culture
        parent = os.path.basename(os.path.dirname(os.path.abspath(path)))
        return culture_from_file_name(parent) if parent else None

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        lines = content.replace('\r\n', '\n').split('\n')
        entries: list[LocalizationEntry] = []
        comment_lines: list[str] = []

        i = 0
        while i < len(lines):
            line = lines[i]

            if not line.strip():
                comment_lines = []
                i += 1
                continue

            if line.startswith('#'):
                # Group (##) and resource (###) comments don't attach to messages
                if line.startswith('# ') or line == '#':
                    comment_lines.append(line[2:])
                else:
                    comment_lines = []
                i += 1
                continue

            match = MESSAGE_LINE.match(line)
            if not match:
                raise self.format_error(f"line {i + 1}: expected message, found '{line.strip()[:40]}'", path)

            message_id = match.group(1)
            value, i = self._read_pattern(lines, i + 1, match.group(2))

            attributes = []
            while i < len(lines):
                attr_match = ATTRIBUTE_LINE.match(lines[i])
                if not attr_match:
                    break
                attr_value, i = self._read_pattern(lines, i + 1, attr_match.group(2))
                attributes.append((attr_match.group(1), attr_value))

            comment = '\n'.join(comment_lines) if comment_lines else None
            comment_lines = []

            if value or not attributes:
                entries.append(LocalizationEntry(
                    key=message_id,
                    value='' if value == EMPTY_VALUE else value,
                    comment=comment,
                ))
                comment = None
            for name, attr_value in attributes:
                entries.append(LocalizationEntry(
                    key=f"{message_id}{KEY_SEPARATOR}{name}",
                    value='' if attr_value == EMPTY_VALUE else attr_value,
                    comment=comment,
                ))
                comment = None

        return self.new_file(path, entries)

    def _read_pattern(self, lines: list[str], i: int, first: str) -> tuple[str, int]:
        """Read indented continuation lines of a pattern; returns (value, next index)."""
        continuation: list[str] = []
        pending_blank = 0
        while i < len(lines):
            line = lines[i]
            if not line.strip():
                pending_blank += 1
                i += 1
                continue
            if not line[0].isspace() or ATTRIBUTE_LINE.match(line):
                break
            continuation.extend([''] * pending_blank)
            pending_blank = 0
            continuation.append(line)
            i += 1
        # Blank lines not followed by continuation belong to what comes next
        i -= pending_blank

        if continuation:
            indent = min(len(l) - len(l.lstrip()) for l in continuation if l)
            continuation = [l[indent:] for l in continuation]

        parts = ([first] if first.strip() else []) + continuation
        return '\n'.join(parts), i

    def write_content(self, file: LocalizationFile) -> str:
        """
        Serialize entries as Fluent messages.

        Raises:
            FormatError: A key cannot be written as a message id or
                attribute name that parses back to the same key
        """
        unreadable = [entry.key for entry in file.entries if not self._is_writable_key(entry.key)]
        if unreadable:
            raise FormatError(
                f"{len(unreadable)} key(s) cannot be written as Fluent identifiers: "
                + ", ".join(unreadable[:10]),
                file.file_path,
            )

        messages: dict[str, dict] = {}
        for entry in file.entries:
            message_id, _, attribute = entry.key.partition(KEY_SEPARATOR)
            message = messages.setdefault(message_id, {'entry': None, 'attributes': []})
            if attribute:
                message['attributes'].append((attribute, entry))
            else:
                message['entry'] = entry

        blocks = []
        for message_id, message in messages.items():
            lines = []
            entry = message['entry']
            comment = entry.comment if entry else None
            if comment is None and message['attributes']:
                comment = message['attributes'][0][1].comment
            if comment:
                lines.extend(f"# {c}".rstrip() for c in comment.split('\n'))

            if entry is not None:
                lines.append(self._format_pattern(message_id, entry.value, ''))
            else:
                lines.append(f"{message_id} =")
            for attribute, attr_entry in message['attributes']:
                lines.append(self._format_pattern(f".{attribute}", attr_entry.value, INDENT))
            blocks.append('\n'.join(lines))

        return '\n\n'.join(blocks) + '\n' if blocks else ''

    @staticmethod
    def _is_writable_key(key: str) -> bool:
        message_id, _, attribute = key.partition(KEY_SEPARATOR)
        if not IDENTIFIER.fullmatch(message_id):
            return False
        return not attribute or ATTRIBUTE_KEY.fullmatch(attribute) is not None

    def _format_pattern(self, name: str, value: Optional[str], indent: str) -> str:
        if not value:
            return f"{indent}{name} = {EMPTY_VALUE}"
        if '\n' not in value:
            return f"{indent}{name} = {value}"
        body = '\n'.join(
            f"{indent}{INDENT}{line}" if line else ''
            for line in value.split('\n')
        )
        return f"{indent}{name} =\n{body}"

    def conversion_warnings(self, file: LocalizationFile) -> list[str]:
        warnings = super().conversion_warnings(file)
        invalid = []
        for entry in file.entries:
            message_id, _, attribute = entry.key.partition(KEY_SEPARATOR)
            if not IDENTIFIER.match(message_id) or (attribute and not all(
                ATTRIBUTE_NAME.match(part) for part in attribute.split(KEY_SEPARATOR)
            )):
                invalid.append(entry.key)
        if invalid:
            warnings.append(
                f"{len(invalid)} key(s) are not valid Fluent identifiers: " + ", ".join(invalid[:10])
            )
        trailing = sum(1 for e in file.entries if e.value and e.value.endswith('\n'))
        if trailing:
            warnings.append(f"{trailing} value(s) end with a line break, which Fluent patterns drop.")
        missing = sum(1 for e in file.entries if e.value is None)
        if missing:
            warnings.append(f"{missing} entry(ies) without a value are written as empty strings.")
        return warnings
