#!/usr/bin/env python3
"""
JSON format handlers.

JsonHandler reads flat or nested key/value JSON and writes it back flat.
I18nJsonHandler owns the ".i18n.json" dialect and writes nested objects.
"""

import json
from typing import Optional

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler, flatten, nesting_conflicts, unflatten


class JsonHandler(FormatHandler):
    """
    Handler for plain JSON localization files.

    Supports structures like:
    ```json
    {
      "welcome": "Welcome",
      "user": {
        "greeting": "Hello {name}"
      }
    }
    ```

    Nested keys are flattened to dot notation ("user.greeting") and written
    back as a flat object, so keys containing dots survive a round trip.
    """

    @property
    def format_id(self) -> str:
        return "json"

    @property
    def file_extensions(self) -> list[str]:
        return [".json"]

    @property
    def description(self) -> str:
        return "Flat or nested key/value JSON"

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        """
        Parse JSON content into a LocalizationFile.

        Args:
            content: Raw JSON file content
            path: Originating path

        Returns:
            LocalizationFile with flattened keys
        """
        data = self._load(content, path)
        entries: list[LocalizationEntry] = []
        flatten(data, "", entries)
        return self.new_file(path, entries)

    def _load(self, content: str, path: Optional[str]) -> dict:
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise self.format_error(f"{e.msg} at line {e.lineno}", path)
        if not isinstance(data, dict):
            raise self.format_error("root element must be an object", path)
        return data

    def write_content(self, file: LocalizationFile) -> str:
        result = {entry.key: entry.value for entry in file.entries}
        return json.dumps(result, indent=2, ensure_ascii=False) + "\n"


class I18nJsonHandler(JsonHandler):
    """
    Handler for nested i18n JSON (".i18n.json").

    Keys are written back as nested objects: "user.greeting" becomes
    {"user": {"greeting": ...}}.
    """

    @property
    def format_id(self) -> str:
        return "i18n-json"

    @property
    def file_extensions(self) -> list[str]:
        return [".i18n.json"]

    @property
    def description(self) -> str:
        return "Nested i18n JSON"

    def write_content(self, file: LocalizationFile) -> str:
        return json.dumps(unflatten(file.entries), indent=2, ensure_ascii=False) + "\n"

    def conversion_warnings(self, file: LocalizationFile) -> list[str]:
        warnings = super().conversion_warnings(file)
        conflicts = nesting_conflicts(file.entries)
        if conflicts:
            warnings.append(
                f"{len(conflicts)} key(s) dropped because they are also nesting prefixes: "
                + ", ".join(conflicts)
            )
        return warnings
