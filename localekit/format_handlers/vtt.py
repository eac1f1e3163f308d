#!/usr/bin/env python3
"""
WebVTT format handler.

Cues map to entries: the cue identifier (or its 1-based position when the
cue has none) is the key, the cue text is the value and the timing line,
including cue settings, is kept in the comment.
"""

import re
from typing import Optional

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler
from .srt import default_timing

VTT_TIMING = re.compile(
    r'^\s*((?:\d{2,}:)?\d{2}:\d{2}\.\d{3})\s*-->\s*((?:\d{2,}:)?\d{2}:\d{2}\.\d{3})'
)


class VttHandler(FormatHandler):
    """
    Handler for WebVTT (.vtt) subtitle files.

    ```
    WEBVTT

    welcome
    00:00:00.000 --> 00:00:02.000 align:center
    Hello there

    00:00:02.500 --> 00:00:04.000
    Second cue without identifier
    ```

    NOTE, STYLE and REGION blocks are skipped.
    """

    @property
    def format_id(self) -> str:
        return "vtt"

    @property
    def file_extensions(self) -> list[str]:
        return [".vtt"]

    @property
    def description(self) -> str:
        return "WebVTT subtitles"

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        text = content.replace('\r\n', '\n')
        blocks = re.split(r'\n(?:[ \t]*\n)+', text.strip('\n'))

        if not blocks or not blocks[0].lstrip().startswith('WEBVTT'):
            raise self.format_error("missing WEBVTT header", path)

        entries = []
        for block in blocks[1:]:
            lines = block.split('\n')
            if not lines or not lines[0].strip():
                continue
            first = lines[0].strip()
            if first.startswith(('NOTE', 'STYLE', 'REGION')):
                continue

            if VTT_TIMING.match(lines[0]):
                identifier = None
                timing = lines[0].strip()
                cue_text = lines[1:]
            elif len(lines) > 1 and VTT_TIMING.match(lines[1]):
                identifier = first
                timing = lines[1].strip()
                cue_text = lines[2:]
            else:
                raise self.format_error(f"cue without timing line: '{first[:40]}'", path)

            entries.append(LocalizationEntry(
                key=identifier or str(len(entries) + 1),
                value='\n'.join(cue_text),
                comment=timing,
            ))

        return self.new_file(path, entries)

    def write_content(self, file: LocalizationFile) -> str:
        blocks = ['WEBVTT\n']
        for position, entry in enumerate(file.entries):
            if entry.comment and VTT_TIMING.match(entry.comment):
                timing = entry.comment.strip()
            else:
                timing = default_timing(position, separator='.')
            # Blank lines would end the cue early
            value = re.sub(r'\n\s*\n', '\n', entry.value or '')
            blocks.append(f"{entry.key}\n{timing}\n{value}\n")
        return '\n'.join(blocks)

    def conversion_warnings(self, file: LocalizationFile) -> list[str]:
        warnings = []
        blank = sum(1 for e in file.entries if e.value and re.search(r'\n\s*\n', e.value))
        if blank:
            warnings.append(f"{blank} value(s) contained blank lines, which WebVTT cues cannot hold.")
        bad_keys = sum(1 for e in file.entries if '-->' in e.key or '\n' in e.key)
        if bad_keys:
            warnings.append(f"{bad_keys} key(s) are not valid WebVTT cue identifiers.")
        untimed = sum(1 for e in file.entries if not (e.comment and VTT_TIMING.match(e.comment)))
        if untimed:
            warnings.append(f"{untimed} entry(ies) had no timing; generated 2 second cues.")
        return warnings
