#!/usr/bin/env python3
"""
Placeholder extraction used by consistency checks.

The default pattern matches brace-delimited names such as {name} and
{{count}}; an unterminated "{name" is not a placeholder.
"""

import re
from typing import Optional, Pattern

DEFAULT_PLACEHOLDER_PATTERN = r'\{+\w+\}+'

_DEFAULT_REGEX = re.compile(DEFAULT_PLACEHOLDER_PATTERN)


def default_regex() -> Pattern[str]:
    """The shared compiled default pattern."""
    return _DEFAULT_REGEX


def _utf16_key(text: str) -> bytes:
    # Big-endian UTF-16 bytes compare like the code units they encode
    return text.encode("utf-16-be", "surrogatepass")


def get_regex(pattern: Optional[str] = None) -> Pattern[str]:
    """
    Get a compiled placeholder regex.

    Args:
        pattern: Custom regex; None, "" or the default pattern string return
            the shared default instance so callers can compare by identity

    Returns:
        Compiled regex
    """
    if not pattern or pattern == DEFAULT_PLACEHOLDER_PATTERN:
        return _DEFAULT_REGEX
    return re.compile(pattern)


def extract_placeholders(
    value: Optional[str],
    regex: Optional[Pattern[str]] = None,
) -> list[str]:
    """
    Extract placeholders from a value.

    Args:
        value: Text to scan
        regex: Compiled pattern (default pattern if omitted)

    Returns:
        Matched placeholders in ordinal order, duplicates kept. Ordinal
        means UTF-16 code units, so characters outside the BMP sort below
        U+E000..U+FFFF as they do in UTF-16 based platforms.
    """
    if not value:
        return []
    if regex is None:
        regex = _DEFAULT_REGEX
    return sorted((match.group(0) for match in regex.finditer(value)), key=_utf16_key)
