#!/usr/bin/env python3
"""
Operations over localization files: check, scan, diff, generate, convert.

Every service takes an optional FormatRegistry and falls back to the
process-wide default.
"""

from .check import CheckOptions, CheckRules, CheckService
from .convert import ConvertOptions, ConvertService
from .diff import DiffReport, DiffService
from .generate import GenerateOptions, GenerateService
from .scan import CultureScanResult, ScanOptions, ScanReport, ScanService

__all__ = [
    'CheckOptions',
    'CheckRules',
    'CheckService',
    'ConvertOptions',
    'ConvertService',
    'CultureScanResult',
    'DiffReport',
    'DiffService',
    'GenerateOptions',
    'GenerateService',
    'ScanOptions',
    'ScanReport',
    'ScanService',
]
