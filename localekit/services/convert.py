#!/usr/bin/env python3
"""
Format conversion through the canonical model.

A source file is parsed by its handler, optionally re-tagged with a culture,
and written by the target handler. Information the target format cannot
hold is reported as warnings on the result.
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import Optional

from ..errors import LocaleKitError
from ..format_handlers import FormatHandler, FormatRegistry
from ..models import ConvertResult
from .discovery import enumerate_files, is_cancelled

logger = logging.getLogger(__name__)


@dataclass
class ConvertOptions:
    """
    Options for the convert operation.

    to_format and from_format accept a format id or an extension.
    """
    to_format: str
    from_format: Optional[str] = None
    force: bool = False
    recursive: bool = True
    culture: Optional[str] = None


class ConvertService:
    """Converts localization files between formats."""

    def __init__(self, registry: Optional[FormatRegistry] = None):
        self.registry = registry or FormatRegistry.default()

    def convert(self, source_path: str, destination_path: str, options: ConvertOptions) -> ConvertResult:
        """
        Convert a single file.

        Args:
            source_path: File to read
            destination_path: File to write
            options: Formats, overwrite policy and culture override

        Returns:
            ConvertResult; failures are reported in error_message, never raised
        """
        result = ConvertResult(source_path=source_path, destination_path=destination_path)

        if options.from_format:
            source_handler = self.registry.get_format(options.from_format)
        else:
            source_handler = self.registry.get_format_for_file(source_path)
        if source_handler is None:
            result.error_message = f"Cannot determine format for '{source_path}'."
            return result

        target_handler = self.registry.get_format(options.to_format)
        if target_handler is None:
            result.error_message = f"Unsupported target format '{options.to_format}'."
            return result

        if not os.path.exists(source_path):
            result.error_message = f"Source file '{source_path}' does not exist."
            return result

        if os.path.exists(destination_path) and not options.force:
            result.error_message = (
                f"Destination file '{destination_path}' already exists. Use force to overwrite."
            )
            return result

        if not target_handler.supports_write:
            result.error_message = (
                f"Unsupported target format '{target_handler.format_id}': format is read-only."
            )
            return result

        try:
            file = source_handler.parse(source_path)
        except (LocaleKitError, OSError, UnicodeDecodeError) as e:
            detail = e.message if isinstance(e, LocaleKitError) else str(e)
            result.error_message = f"Failed to parse '{source_path}': {detail}"
            return result

        if options.culture:
            file.culture = options.culture
        file.file_path = destination_path
        file.format = target_handler.format_id

        try:
            target_handler.write(file, destination_path)
        except (LocaleKitError, OSError) as e:
            detail = e.message if isinstance(e, LocaleKitError) else str(e)
            result.error_message = f"Failed to write '{destination_path}': {detail}"
            return result

        result.warnings = target_handler.conversion_warnings(file)
        result.success = True
        for warning in result.warnings:
            logger.warning("%s: %s", destination_path, warning)
        logger.info("Converted %s (%s) -> %s (%s)", source_path, source_handler.format_id,
                    destination_path, target_handler.format_id)
        return result

    def convert_directory(
        self,
        source_dir: str,
        destination_dir: str,
        options: ConvertOptions,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[ConvertResult]:
        """
        Convert every supported file under a directory.

        The relative directory structure is kept and each file's extension
        is swapped for the target format's primary extension. Failures are
        collected per file and do not stop the batch.
        """
        if not os.path.isdir(source_dir):
            return [ConvertResult(
                source_path=source_dir,
                destination_path=destination_dir,
                error_message=f"Source directory '{source_dir}' does not exist.",
            )]

        target_handler = self.registry.get_format(options.to_format)
        if target_handler is None:
            return [ConvertResult(
                source_path=source_dir,
                destination_path=destination_dir,
                error_message=f"Unsupported target format '{options.to_format}'.",
            )]

        results = []
        for path in enumerate_files(source_dir, self.registry, options.recursive):
            if is_cancelled(cancel_event):
                logger.info("Conversion cancelled before %s", path)
                break
            destination = self._destination_for(path, source_dir, destination_dir, target_handler)
            results.append(self.convert(path, destination, options))

        return results

    def _destination_for(
        self,
        path: str,
        source_dir: str,
        destination_dir: str,
        target_handler: FormatHandler,
    ) -> str:
        relative = os.path.relpath(path, source_dir)
        handler = self.registry.get_format_for_file(path)
        extension = handler.matching_extension(path) if handler else None
        if extension:
            stem = relative[:-len(extension)]
        else:
            stem = os.path.splitext(relative)[0]
        return os.path.join(destination_dir, stem + target_handler.primary_extension)
