#!/usr/bin/env python3
"""
SRT (SubRip) format handler.

Subtitle cues map to entries: the sequence number is the key, the cue text
is the value and the timing line is kept in the comment so SRT to SRT
round trips keep their timings.
"""

import re
from typing import Optional

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

TIMING_PATTERN = re.compile(
    r'^\s*(\d{1,2}:\d{2}:\d{2}[,.]\d{1,3})\s*-->\s*(\d{1,2}:\d{2}:\d{2}[,.]\d{1,3})'
)


def format_timestamp(milliseconds: int, separator: str = ',') -> str:
    """Format milliseconds as HH:MM:SS,mmm."""
    hours, rest = divmod(milliseconds, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}{separator}{millis:03d}"


def default_timing(position: int, separator: str = ',') -> str:
    """Two-second cues, back to back, for entries without a timing."""
    start = position * 2000
    return f"{format_timestamp(start, separator)} --> {format_timestamp(start + 2000, separator)}"


def is_cue_start(lines: list[str], i: int) -> bool:
    """True when lines[i] is a cue number followed by a timing line."""
    return (
        i + 1 < len(lines)
        and lines[i].strip().isdigit()
        and TIMING_PATTERN.match(lines[i + 1]) is not None
    )


class SrtHandler(FormatHandler):
    """
    Handler for SubRip subtitle (.srt) files.

    SRT format structure:
    ```
    1
    00:00:00,160 --> 00:00:05,120
    First subtitle text
    can be multi-line

    2
    00:00:05,200 --> 00:00:10,779
    Second subtitle text
    ```
    """

    @property
    def format_id(self) -> str:
        return "srt"

    @property
    def file_extensions(self) -> list[str]:
        return [".srt"]

    @property
    def description(self) -> str:
        return "SubRip subtitles"

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse SRT content into entries.

        A new cue starts at a sequence number followed by a timing line, so
        blank lines inside cue text (poetry, pauses) are preserved.

        Args:
            content: Raw SRT file content
            path: Originating path

        Returns:
            LocalizationFile with one entry per cue
        """
        entries = []
        lines = content.replace('\r\n', '\n').split('\n')

        i = 0
        while i < len(lines):
            # Skip empty lines between blocks
            while i < len(lines) and lines[i].strip() == "":
                i += 1

            if i >= len(lines):
                break

            if not is_cue_start(lines, i):
                raise self.format_error(
                    f"line {i + 1}: expected cue number and timing, found '{lines[i].strip()[:40]}'",
                    path,
                )

            index = lines[i].strip()
            timing = lines[i + 1].strip()
            i += 2

            # Collect text lines until the next cue block
            text_lines = []
            while i < len(lines):
                if lines[i].strip() == "":
                    lookahead = i + 1
                    while lookahead < len(lines) and lines[lookahead].strip() == "":
                        lookahead += 1
                    if lookahead >= len(lines) or is_cue_start(lines, lookahead):
                        break
                    text_lines.append("")
                else:
                    text_lines.append(lines[i])
                i += 1

            entries.append(LocalizationEntry(
                key=index,
                value="\n".join(text_lines),
                comment=timing,
            ))

        return self.new_file(path, entries)

    def write_content(self, file: LocalizationFile) -> str:
        blocks = []
        for position, entry in enumerate(file.entries):
            index = entry.key if entry.key.isdigit() else str(position + 1)
            if entry.comment and TIMING_PATTERN.match(entry.comment):
                timing = entry.comment.strip()
            else:
                timing = default_timing(position)
            blocks.append(f"{index}\n{timing}\n{entry.value or ''}\n")
        return "\n".join(blocks)

    def conversion_warnings(self, file: LocalizationFile) -> list[str]:
        warnings = []
        renumbered = sum(1 for e in file.entries if not e.key.isdigit())
        if renumbered:
            warnings.append(
                f"{renumbered} key(s) are not cue numbers and were replaced by their position."
            )
        untimed = sum(1 for e in file.entries if not (e.comment and TIMING_PATTERN.match(e.comment)))
        if untimed:
            warnings.append(f"{untimed} entry(ies) had no timing; generated 2 second cues.")
        return warnings
