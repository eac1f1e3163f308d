#!/usr/bin/env python3
"""
YAML format handler for Rails/Symfony i18n files.

Handles parsing and writing of YAML localization files commonly used in
Ruby on Rails, Symfony, and other backend frameworks.
"""

from typing import Optional

import yaml

from ..culture import is_valid_culture, normalize_culture
from ..models import LocalizationEntry, LocalizationFile
from .base import KEY_SEPARATOR, FormatHandler, flatten, nesting_conflicts, unflatten


class YamlHandler(FormatHandler):
    """
    Handler for YAML i18n files (Rails/Symfony style).

    YAML i18n structure:
    ```yaml
    en:
      welcome: Welcome
      user:
        greeting: "Hello %{name}"
    ```

    A single top-level key that is a culture is treated as the locale root:
    it sets the file culture and is not part of entry keys, unless the file
    name names a different culture. On write, files with a culture are
    wrapped in that root again; a file without a culture whose only section
    looks like a culture is written with that section flattened into its
    keys ("id.label: ID") so it is not read back as a locale root.
    """

    @property
    def format_id(self) -> str:
        return "yaml"

    @property
    def file_extensions(self) -> list[str]:
        return [".yaml", ".yml"]

    @property
    def description(self) -> str:
        return "Rails/Symfony style YAML"

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse YAML content into a LocalizationFile.

        Args:
            content: Raw YAML file content
            path: Originating path

        Returns:
            LocalizationFile with flattened keys
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise self.format_error(str(e), path)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise self.format_error("root must be a mapping", path)

        culture = None
        root_key = self._culture_root(data)
        if root_key is not None:
            root_culture = normalize_culture(root_key)
            name_culture = self.infer_culture(path)
            if name_culture is None or name_culture.lower() == root_culture.lower():
                culture = root_culture
                data = data[root_key]

        entries: list[LocalizationEntry] = []
        flatten(data, "", entries)
        return self.new_file(path, entries, culture=culture)

    def write_content(self, file: LocalizationFile) -> str:
        result = unflatten(file.entries)
        if file.culture:
            result = {file.culture: result}
        else:
            root_key = self._culture_root(result)
            if root_key is not None:
                result = {
                    f"{root_key}{KEY_SEPARATOR}{key}": value
                    for key, value in result[root_key].items()
                }
        return yaml.dump(
            result,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )

    @staticmethod
    def _culture_root(data: dict) -> Optional[str]:
        """The only top-level key, when it maps to a section and names a culture."""
        if len(data) != 1:
            return None
        root_key = next(iter(data))
        if isinstance(data[root_key], dict) and is_valid_culture(str(root_key)):
            return str(root_key)
        return None

    def conversion_warnings(self, file: LocalizationFile) -> list[str]:
        warnings = super().conversion_warnings(file)
        conflicts = nesting_conflicts(file.entries)
        if conflicts:
            warnings.append(
                f"{len(conflicts)} key(s) dropped because they are also nesting prefixes: "
                + ", ".join(conflicts)
            )
        name_culture = self.infer_culture(file.file_path)
        if file.culture and name_culture and name_culture.lower() != normalize_culture(file.culture).lower():
            warnings.append(
                f"Culture root '{file.culture}' differs from '{name_culture}' in the file name; "
                "it will be read back as a key section."
            )
        return warnings
