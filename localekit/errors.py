#!/usr/bin/env python3
"""
Exception types raised by format handlers and services.

Services catch these at their public boundary and turn them into failing
result objects. Format handlers, the config loader and the two-file diff
raise them to callers directly.
"""

from typing import Optional


class LocaleKitError(Exception):
    """Base class for all localekit errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def to_dict(self) -> dict:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "path": self.path,
        }


class FormatError(LocaleKitError):
    """Content is not structurally valid for the claimed format."""


class PathError(LocaleKitError):
    """A source path is missing or a destination exists without force."""


class UnsupportedOperationError(LocaleKitError):
    """Write on a read-only format, or an unknown format identifier."""


class ConfigError(LocaleKitError):
    """The CLI configuration file could not be loaded."""
