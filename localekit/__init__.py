"""
localekit - localization resource file toolkit

Reads and writes JSON, i18n JSON, YAML, RESX, PO, XLIFF, SRT, VTT, CSV,
Fluent and VB resource files through one canonical model, and checks,
generates and converts them.

Quick start:
    localekit scan ./locales --base en
    localekit check ./locales --rules no-empty-values,no-duplicate-keys
    localekit generate tr --input ./locales --output ./locales
    localekit convert app.en.resx app.en.json --to json
"""

__version__ = "1.0.0"

from .errors import ConfigError, FormatError, LocaleKitError, PathError, UnsupportedOperationError
from .format_handlers import FormatHandler, FormatRegistry
from .models import (
    CheckReport,
    CheckViolation,
    ConvertResult,
    GenerateResult,
    LocalizationEntry,
    LocalizationFile,
    PlaceholderMismatch,
    Severity,
)
from .services import (
    CheckOptions,
    CheckRules,
    CheckService,
    ConvertOptions,
    ConvertService,
    DiffService,
    GenerateOptions,
    GenerateService,
    ScanOptions,
    ScanService,
)

__all__ = [
    "LocaleKitError",
    "FormatError",
    "PathError",
    "UnsupportedOperationError",
    "ConfigError",
    "FormatHandler",
    "FormatRegistry",
    "LocalizationEntry",
    "LocalizationFile",
    "Severity",
    "CheckViolation",
    "CheckReport",
    "PlaceholderMismatch",
    "GenerateResult",
    "ConvertResult",
    "CheckOptions",
    "CheckRules",
    "CheckService",
    "ConvertOptions",
    "ConvertService",
    "DiffService",
    "GenerateOptions",
    "GenerateService",
    "ScanOptions",
    "ScanService",
]
