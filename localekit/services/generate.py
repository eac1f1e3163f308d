#!/usr/bin/env python3
"""
Skeleton generation for a target culture.

For every base-culture file, a target-culture file is created (or updated)
holding every base key. Keys missing from the target get a placeholder
value derived from the base value, or an empty string.
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import Optional

from ..errors import FormatError, LocaleKitError
from ..format_handlers import FormatHandler, FormatRegistry
from ..models import GenerateResult, LocalizationEntry, LocalizationFile
from ..path_helper import generate_target_path
from .discovery import enumerate_files, is_cancelled

logger = logging.getLogger(__name__)

DEFAULT_MISSING_PLACEHOLDER = "@@MISSING@@ {0}"


@dataclass
class GenerateOptions:
    """
    Options for the generate operation.

    placeholder_pattern is a template where "{0}" is replaced with the base
    value; use_empty_value overrides it with an empty string.
    """
    base_culture: str = "en"
    target_culture: Optional[str] = None
    placeholder_pattern: str = DEFAULT_MISSING_PLACEHOLDER
    use_empty_value: bool = False
    overwrite_existing: bool = False
    recursive: bool = True

    def missing_value(self, base_value: Optional[str]) -> str:
        if self.use_empty_value:
            return ""
        return self.placeholder_pattern.replace("{0}", base_value or "")


class GenerateService:
    """Generates or updates target-culture skeleton files."""

    def __init__(self, registry: Optional[FormatRegistry] = None):
        self.registry = registry or FormatRegistry.default()

    def generate(
        self,
        source_path: str,
        output_path: str,
        options: GenerateOptions,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[GenerateResult]:
        """
        Generate target files for every base-culture file under source_path.

        Args:
            source_path: A base-culture file or a directory of files
            output_path: Output root; subdirectory structure is preserved
            options: Cultures and missing-value policy
            cancel_event: Checked between files

        Returns:
            One result per base-culture file; files of other cultures are
            left out
        """
        if not options.target_culture:
            return [GenerateResult(file_path=source_path, error_message="Target culture is required.")]

        if not os.path.exists(source_path):
            return [GenerateResult(
                file_path=source_path,
                error_message=f"Source path '{source_path}' does not exist.",
            )]

        single_file = os.path.isfile(source_path)
        if single_file:
            candidates = [source_path]
        else:
            candidates = enumerate_files(source_path, self.registry, options.recursive)

        results = []
        for path in candidates:
            if is_cancelled(cancel_event):
                logger.info("Generation cancelled before %s", path)
                break

            handler = self.registry.get_format_for_file(path)
            if handler is None:
                results.append(GenerateResult(
                    file_path=path,
                    error_message=f"Cannot determine format for '{path}'.",
                ))
                continue

            base_file = None
            culture = handler.infer_culture(path)
            if culture is None:
                # Culture may only be known from the content (PO, XLIFF, YAML root)
                try:
                    base_file = handler.parse(path)
                except (FormatError, OSError, UnicodeDecodeError) as e:
                    if single_file:
                        results.append(self._parse_failure(path, e))
                    else:
                        logger.debug("Skipping %s: %s", path, e)
                    continue
                culture = base_file.culture

            if culture is None or culture.lower() != options.base_culture.lower():
                logger.debug("Skipping %s: culture %s is not %s", path, culture, options.base_culture)
                continue

            results.append(self._generate_file(path, handler, base_file, source_path, output_path, options))

        return results

    def _parse_failure(self, path: str, error: Exception) -> GenerateResult:
        detail = error.message if isinstance(error, LocaleKitError) else str(error)
        return GenerateResult(file_path=path, error_message=f"Failed to parse '{path}': {detail}")

    def _generate_file(
        self,
        path: str,
        handler: FormatHandler,
        base_file: Optional[LocalizationFile],
        source_path: str,
        output_path: str,
        options: GenerateOptions,
    ) -> GenerateResult:
        if base_file is None:
            try:
                base_file = handler.parse(path)
            except (FormatError, OSError, UnicodeDecodeError) as e:
                return self._parse_failure(path, e)

        target_path = path
        try:
            target_path = generate_target_path(
                path, source_path, output_path, options.base_culture, options.target_culture
            )
            existed = os.path.exists(target_path)

            if existed and not options.overwrite_existing:
                try:
                    target = handler.parse(target_path)
                except (FormatError, OSError, UnicodeDecodeError) as e:
                    return self._parse_failure(target_path, e)
                added, skipped = self._merge(base_file, target, options)
            else:
                target = self._skeleton(base_file, target_path, handler, options)
                added, skipped = target.count, 0

            target.culture = options.target_culture
            handler.write(target, target_path)
        except (LocaleKitError, OSError) as e:
            detail = e.message if isinstance(e, LocaleKitError) else str(e)
            logger.warning("Generation failed for %s: %s", path, detail)
            return GenerateResult(file_path=target_path, error_message=detail)

        logger.info("%s %s: %d added, %d skipped",
                    "Updated" if existed else "Created", target_path, added, skipped)
        return GenerateResult(
            file_path=target_path,
            created=not existed,
            keys_added=added,
            keys_skipped=skipped,
        )

    def _merge(
        self,
        base_file: LocalizationFile,
        target: LocalizationFile,
        options: GenerateOptions,
    ) -> tuple[int, int]:
        """Append missing base keys to target; existing keys are left untouched."""
        added = skipped = 0
        for entry in base_file.entries:
            if target.contains_key(entry.key):
                skipped += 1
                continue
            target.add_entry(self._missing_entry(entry, options))
            added += 1
        return added, skipped

    def _skeleton(
        self,
        base_file: LocalizationFile,
        target_path: str,
        handler: FormatHandler,
        options: GenerateOptions,
    ) -> LocalizationFile:
        """A new file holding every base key once, in base order."""
        unique = {}
        for entry in base_file.entries:
            unique.setdefault(entry.key, entry)
        return LocalizationFile(
            file_path=target_path,
            culture=options.target_culture,
            format=handler.format_id,
            entries=[self._missing_entry(entry, options) for entry in unique.values()],
        )

    def _missing_entry(self, base_entry: LocalizationEntry, options: GenerateOptions) -> LocalizationEntry:
        return LocalizationEntry(
            key=base_entry.key,
            value=options.missing_value(base_entry.value),
            comment=base_entry.comment,
            source=base_entry.source if base_entry.source is not None else base_entry.value,
        )
