#!/usr/bin/env python3
"""
Format handlers for localization file formats.

Supported formats:
- JSON: flat or nested key/value JSON
- i18n JSON: nested ".i18n.json" dialect
- YAML: Rails/Symfony i18n YAML
- RESX: .NET XML resources
- PO: GNU gettext .po/.pot files
- XLIFF: XLIFF 1.2 / 2.0
- SRT / VTT: subtitle files
- CSV: key/value tables
- FTL: Project Fluent
- VB: legacy Resources.Designer.vb wrappers (read-only)
"""

from .base import (
    FormatHandler,
    FormatRegistry,
    KEY_SEPARATOR,
    read_text,
)
from .csv_handler import CsvHandler
from .ftl import FtlHandler
from .json_handler import I18nJsonHandler, JsonHandler
from .po import PoHandler
from .resx import ResxHandler
from .srt import SrtHandler
from .vb_resources import VbResourcesHandler
from .vtt import VttHandler
from .xliff import XliffHandler
from .yaml_handler import YamlHandler


def builtin_handlers() -> list[FormatHandler]:
    """
    Fresh instances of every built-in handler.

    Order matters: ".i18n.json" must be registered before ".json".
    """
    return [
        I18nJsonHandler(),
        JsonHandler(),
        YamlHandler(),
        ResxHandler(),
        PoHandler(),
        XliffHandler(),
        SrtHandler(),
        VttHandler(),
        CsvHandler(),
        FtlHandler(),
        VbResourcesHandler(),
    ]


__all__ = [
    'FormatHandler',
    'FormatRegistry',
    'KEY_SEPARATOR',
    'read_text',
    'builtin_handlers',
    'CsvHandler',
    'FtlHandler',
    'I18nJsonHandler',
    'JsonHandler',
    'PoHandler',
    'ResxHandler',
    'SrtHandler',
    'VbResourcesHandler',
    'VttHandler',
    'XliffHandler',
    'YamlHandler',
]
