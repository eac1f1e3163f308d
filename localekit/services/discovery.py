#!/usr/bin/env python3
"""
File discovery shared by the directory-scoped services.
"""

import fnmatch
import logging
import os
import threading
from typing import Iterator, Optional

from ..errors import FormatError
from ..format_handlers import FormatRegistry
from ..models import LocalizationFile

logger = logging.getLogger(__name__)


def is_cancelled(cancel_event: Optional[threading.Event]) -> bool:
    return cancel_event is not None and cancel_event.is_set()


def enumerate_files(
    directory: str,
    registry: FormatRegistry,
    recursive: bool = True,
    ignore_patterns: Optional[list[str]] = None,
) -> list[str]:
    """
    List supported files under a directory in a stable (sorted) order.

    Args:
        directory: Directory to scan
        registry: Registry deciding which files are supported
        recursive: Descend into subdirectories
        ignore_patterns: fnmatch patterns matched against file names and
            paths relative to the directory

    Returns:
        Paths of supported files
    """
    ignore_patterns = ignore_patterns or []
    found = []

    if recursive:
        walker = os.walk(directory)
    else:
        try:
            names = os.listdir(directory)
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            return []
        walker = [(directory, [], [n for n in names if os.path.isfile(os.path.join(directory, n))])]

    for root, dirs, files in walker:
        dirs.sort()
        for name in sorted(files):
            path = os.path.join(root, name)
            relative = os.path.relpath(path, directory)
            if any(fnmatch.fnmatch(name, p) or fnmatch.fnmatch(relative, p) for p in ignore_patterns):
                continue
            if registry.is_supported(path):
                found.append(path)

    return found


def load_files(
    paths: list[str],
    registry: FormatRegistry,
    cancel_event: Optional[threading.Event] = None,
) -> Iterator[LocalizationFile]:
    """
    Parse each path, skipping files that fail with I/O or format errors.

    Used only in directory mode, where unreadable files are not reported.
    """
    for path in paths:
        if is_cancelled(cancel_event):
            logger.info("Cancelled before %s", path)
            return
        handler = registry.get_format_for_file(path)
        if handler is None:
            continue
        try:
            yield handler.parse(path)
        except (OSError, UnicodeDecodeError, FormatError) as e:
            logger.debug("Skipping %s: %s", path, e)


def discover(
    path: str,
    registry: FormatRegistry,
    recursive: bool = True,
    ignore_patterns: Optional[list[str]] = None,
    cancel_event: Optional[threading.Event] = None,
) -> list[LocalizationFile]:
    """Parse a single file or every supported file under a directory."""
    if os.path.isfile(path):
        paths = [path] if registry.is_supported(path) else []
    elif os.path.isdir(path):
        paths = enumerate_files(path, registry, recursive, ignore_patterns)
    else:
        logger.warning("Path does not exist: %s", path)
        return []
    return list(load_files(paths, registry, cancel_event))
