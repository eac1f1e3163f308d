#!/usr/bin/env python3
"""
Culture (locale identifier) helpers.

Cultures are plain strings such as "en", "en-US" or "zh-Hant-TW". Babel's
locale data is used to validate them and to resolve richer metadata; an
unknown or malformed identifier always resolves to None.
"""

import re
from pathlib import Path
from typing import Optional

from babel import Locale, UnknownLocaleError

# Shape check before asking babel; keeps "app", "v2" or "messages" from
# being probed on every file name.
_CULTURE_SHAPE = re.compile(r'^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$')


def resolve_culture(culture: Optional[str]) -> Optional[Locale]:
    """
    Resolve a culture string to a babel Locale.

    Args:
        culture: Locale identifier using '-' or '_' separators

    Returns:
        The resolved Locale, or None if the identifier is empty or unknown
    """
    if not culture:
        return None
    try:
        return Locale.parse(culture.replace('-', '_'))
    except (UnknownLocaleError, ValueError, TypeError):
        return None


def is_valid_culture(culture: Optional[str]) -> bool:
    """True when the string looks like a locale and babel knows it."""
    if not culture or not _CULTURE_SHAPE.match(culture):
        return False
    return resolve_culture(culture) is not None


def normalize_culture(culture: Optional[str]) -> Optional[str]:
    """Normalize separators to '-' ("pt_BR" -> "pt-BR")."""
    if culture is None:
        return None
    return culture.replace('_', '-')


def culture_from_file_name(stem: str) -> Optional[str]:
    """
    Infer a culture from a file name without its extension.

    The last dotted segment wins: "app.en-US" -> "en-US", "tr" -> "tr".
    "messages" -> None.
    """
    candidate = stem.rsplit('.', 1)[-1]
    if is_valid_culture(candidate):
        return normalize_culture(candidate)
    return None


def culture_from_path(path: str, extension: str) -> Optional[str]:
    """Infer a culture from a full path, given the handler's extension."""
    name = Path(path).name
    if extension and name.lower().endswith(extension.lower()):
        stem = name[:-len(extension)]
    else:
        stem = Path(path).stem
    if not stem:
        return None
    return culture_from_file_name(stem)


def describe_culture(culture: Optional[str]) -> Optional[dict]:
    """Return display metadata for a culture, or None if it cannot be resolved."""
    locale = resolve_culture(culture)
    if locale is None:
        return None
    return {
        'culture': culture,
        'language': locale.language,
        'territory': locale.territory,
        'script': locale.script,
        'display_name': locale.get_display_name('en'),
        'english_name': locale.english_name,
    }
