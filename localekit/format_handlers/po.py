#!/usr/bin/env python3
"""
GNU gettext PO/POT format handler.

Handles parsing and writing of .po and .pot files used by WordPress,
Django, Rails (via gettext), and many Linux applications.
"""

import re
from typing import Optional

from ..culture import normalize_culture
from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

# Separates msgctxt from msgid in entry keys
CONTEXT_SEPARATOR = '|'


class PoHandler(FormatHandler):
    """
    Handler for GNU gettext PO/POT files.

    PO format structure:
    ```
    # Translator comment
    #. Extracted comment
    #: file.py:42
    #, fuzzy
    msgctxt "context"
    msgid "Source text"
    msgstr "Translated text"
    ```

    Mapping to the canonical model:
    - key: msgid, or "msgctxt|msgid" when a context is present
    - value: msgstr (msgstr[0] for plural entries)
    - source: msgid
    - comment: translator comments joined by newlines
    """

    @property
    def format_id(self) -> str:
        return "po"

    @property
    def file_extensions(self) -> list[str]:
        return [".po", ".pot"]

    @property
    def description(self) -> str:
        return "GNU gettext PO/POT"

    @property
    def supports_comments(self) -> bool:
        return True

    @property
    def supports_source(self) -> bool:
        return True

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse PO content into a LocalizationFile.

        Args:
            content: Raw PO file content
            path: Originating path

        Returns:
            LocalizationFile; culture comes from the "Language:" header when set
        """
        entries = []
        culture = None
        current = self._new_entry_dict()

        lines = content.split('\n')
        i = 0

        while i < len(lines):
            line = lines[i].rstrip()

            # Skip empty lines between entries
            if not line:
                if current['msgid'] is not None:
                    culture = self._finish_entry(current, entries, culture)
                    current = self._new_entry_dict()
                i += 1
                continue

            # A new comment block after a complete entry starts the next entry
            if line.startswith('#') and current['msgstr'] is not None:
                culture = self._finish_entry(current, entries, culture)
                current = self._new_entry_dict()

            # Obsolete entries
            if line.startswith('#~'):
                pass

            # Extracted comment
            elif line.startswith('#.'):
                current['extracted_comment'].append(line[2:].strip())

            # Reference, flags, previous msgid
            elif line.startswith(('#:', '#,', '#|')):
                pass

            # Translator comment
            elif line.startswith('#'):
                current['translator_comment'].append(line[1:].strip())

            elif line.startswith('msgctxt'):
                value = self._extract_string(line, 'msgctxt', path, i)
                i, current['msgctxt'] = self._read_multiline(lines, i, value, path)

            elif line.startswith('msgid_plural'):
                value = self._extract_string(line, 'msgid_plural', path, i)
                i, current['msgid_plural'] = self._read_multiline(lines, i, value, path)

            elif line.startswith('msgid'):
                if current['msgstr'] is not None:
                    culture = self._finish_entry(current, entries, culture)
                    current = self._new_entry_dict()
                value = self._extract_string(line, 'msgid', path, i)
                i, current['msgid'] = self._read_multiline(lines, i, value, path)

            elif line.startswith('msgstr['):
                match = re.match(r'msgstr\[(\d+)\]', line)
                if not match:
                    raise self.format_error(f"line {i + 1}: malformed plural msgstr", path)
                idx = int(match.group(1))
                value = self._extract_string(line, match.group(0), path, i)
                i, value = self._read_multiline(lines, i, value, path)
                current['msgstr_plural'][idx] = value
                if current['msgstr'] is None or idx == 0:
                    current['msgstr'] = current['msgstr_plural'].get(0, '')

            elif line.startswith('msgstr'):
                value = self._extract_string(line, 'msgstr', path, i)
                i, current['msgstr'] = self._read_multiline(lines, i, value, path)

            else:
                raise self.format_error(f"line {i + 1}: unexpected content '{line[:40]}'", path)

            i += 1

        # Don't forget the last entry
        if current['msgid'] is not None:
            culture = self._finish_entry(current, entries, culture)

        return self.new_file(path, entries, culture=culture)

    def _new_entry_dict(self) -> dict:
        """Create empty entry dictionary."""
        return {
            'translator_comment': [],
            'extracted_comment': [],
            'msgctxt': None,
            'msgid': None,
            'msgid_plural': None,
            'msgstr': None,
            'msgstr_plural': {},
        }

    def _extract_string(self, line: str, prefix: str, path: Optional[str], line_no: int) -> str:
        """Extract string value from PO line."""
        content = line[len(prefix):].strip()
        if len(content) >= 2 and content.startswith('"') and content.endswith('"'):
            return self._unescape_po_string(content[1:-1])
        raise self.format_error(f"line {line_no + 1}: expected quoted string after {prefix}", path)

    def _read_multiline(
        self, lines: list[str], start: int, initial: str, path: Optional[str]
    ) -> tuple[int, str]:
        """Read continuation lines for multi-line strings."""
        result = initial
        i = start + 1

        while i < len(lines):
            line = lines[i].strip()
            if line.startswith('"'):
                if len(line) < 2 or not line.endswith('"'):
                    raise self.format_error(f"line {i + 1}: unterminated string", path)
                result += self._unescape_po_string(line[1:-1])
                i += 1
            else:
                break

        return i - 1, result

    def _unescape_po_string(self, s: str) -> str:
        """Unescape PO string escapes."""
        return re.sub(
            r'\\(.)',
            lambda m: {'n': '\n', 't': '\t', 'r': '\r', '"': '"', '\\': '\\'}.get(m.group(1), m.group(0)),
            s,
        )

    def _escape_po_string(self, s: str) -> str:
        """Escape string for PO format."""
        return (
            s.replace('\\', '\\\\')
            .replace('"', '\\"')
            .replace('\n', '\\n')
            .replace('\t', '\\t')
            .replace('\r', '\\r')
        )

    def _finish_entry(self, entry_dict: dict, entries: list, culture: Optional[str]) -> Optional[str]:
        """Append the parsed entry; returns the culture from the header entry."""
        msgid = entry_dict['msgid']

        # Header entry carries metadata, not a translation
        if msgid == '' and not entry_dict['msgctxt']:
            match = re.search(r'^Language:\s*(\S+)\s*$', entry_dict['msgstr'] or '', re.MULTILINE)
            if match:
                return normalize_culture(match.group(1))
            return culture

        if entry_dict['msgctxt']:
            key = f"{entry_dict['msgctxt']}{CONTEXT_SEPARATOR}{msgid}"
        else:
            key = msgid

        comments = entry_dict['translator_comment'] or entry_dict['extracted_comment']

        entries.append(LocalizationEntry(
            key=key,
            value=entry_dict['msgstr'],
            comment='\n'.join(comments) if comments else None,
            source=msgid,
        ))
        return culture

    def _format_po_string(self, prefix: str, s: Optional[str], wrap_width: int = 76) -> list[str]:
        """
        Format a string for PO output, wrapping long strings at ~76 characters.

        Args:
            prefix: The PO prefix (e.g., 'msgid', 'msgstr')
            s: The string to format
            wrap_width: Maximum line width for wrapping (default: 76)

        Returns:
            List of formatted lines
        """
        escaped = self._escape_po_string(s or "")

        single_line = f'{prefix} "{escaped}"'
        if len(single_line) <= wrap_width and '\\n' not in escaped[:-2]:
            return [single_line]

        # msgid ""
        # "first part "
        # "second part"
        lines = [f'{prefix} ""']

        segments = escaped.split('\\n')

        for i, segment in enumerate(segments):
            if i < len(segments) - 1:
                segment += '\\n'

            while segment:
                max_chunk = wrap_width - 2
                if len(segment) <= max_chunk:
                    lines.append(f'"{segment}"')
                    break

                # Prefer breaking after a space, never inside an escape
                break_at = max_chunk
                space_pos = segment.rfind(' ', max_chunk - 20, max_chunk)
                if space_pos > 0:
                    break_at = space_pos + 1
                while break_at > 1 and segment[break_at - 1] == '\\':
                    break_at -= 1

                lines.append(f'"{segment[:break_at]}"')
                segment = segment[break_at:]

        return lines

    def write_content(self, file: LocalizationFile) -> str:
        lines = ['msgid ""', 'msgstr ""', '"Content-Type: text/plain; charset=UTF-8\\n"']
        if file.culture:
            lines.append(f'"Language: {self._escape_po_string(file.culture)}\\n"')
        lines.append('')

        for entry in file.entries:
            if entry.comment:
                for comment in entry.comment.split('\n'):
                    lines.append(f'# {comment}'.rstrip())

            msgctxt, msgid = self._split_key(entry)
            if msgctxt is not None:
                lines.extend(self._format_po_string('msgctxt', msgctxt))
            lines.extend(self._format_po_string('msgid', msgid))
            lines.extend(self._format_po_string('msgstr', entry.value))
            lines.append('')

        return '\n'.join(lines)

    def _split_key(self, entry: LocalizationEntry) -> tuple[Optional[str], str]:
        """Recover (msgctxt, msgid) from a key built by parse_content."""
        if entry.source and entry.key.endswith(CONTEXT_SEPARATOR + entry.source):
            context = entry.key[:-(len(entry.source) + 1)]
            if context:
                return context, entry.source
        return None, entry.key

    def conversion_warnings(self, file: LocalizationFile) -> list[str]:
        warnings = super().conversion_warnings(file)
        empty_keys = sum(1 for e in file.entries if e.key == '')
        if empty_keys:
            warnings.append(f"{empty_keys} entry(ies) with an empty key collide with the PO header.")
        return warnings
