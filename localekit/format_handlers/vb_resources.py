#!/usr/bin/env python3
"""
Read-only handler for legacy VB.NET resource wrappers.

Visual Studio generates Resources.Designer.vb next to a .resx file. Each
string resource is a property whose XML doc comment quotes the default
value; this handler recovers key/value pairs from those properties so old
projects can be checked or converted when the .resx itself is gone.
"""

import re
from typing import Optional

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

PROPERTY_BLOCK = re.compile(
    r"((?:^[ \t]*'''.*\n)+)"                              # doc comment lines
    r"[ \t]*(?:(?:Public|Friend|Private|Shared|ReadOnly)\s+)+Property\s+\w+\(\)\s+As\s+String\s*\n"
    r"(?:.*\n)*?"
    r"[ \t]*Return\s+ResourceManager\.GetString\(\"((?:[^\"]|\"\")*)\"",
    re.MULTILINE,
)
SUMMARY_VALUE = re.compile(r'Looks up a localized string similar to (.*)\.\s*$', re.DOTALL)


class VbResourcesHandler(FormatHandler):
    """
    Handler for Resources.Designer.vb files (read-only).

    ```vb
    '''<summary>
    '''  Looks up a localized string similar to Hello World.
    '''</summary>
    Friend ReadOnly Property Greeting() As String
        Get
            Return ResourceManager.GetString("Greeting", resourceCulture)
        End Get
    End Property
    ```
    """

    @property
    def format_id(self) -> str:
        return "vb"

    @property
    def file_extensions(self) -> list[str]:
        return [".designer.vb"]

    @property
    def description(self) -> str:
        return "VB.NET Resources.Designer.vb (read-only)"

    @property
    def supports_write(self) -> bool:
        return False

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        text = content.replace('\r\n', '\n')
        if 'ResourceManager' not in text:
            raise self.format_error("no ResourceManager found; not a resource wrapper", path)

        entries = []
        for match in PROPERTY_BLOCK.finditer(text):
            doc, key = match.group(1), match.group(2).replace('""', '"')
            entries.append(LocalizationEntry(key=key, value=self._summary_value(doc)))

        return self.new_file(path, entries)

    def _summary_value(self, doc: str) -> Optional[str]:
        lines = [re.sub(r"^[ \t]*'''\s?", '', line) for line in doc.strip('\n').split('\n')]
        summary = '\n'.join(
            line for line in lines
            if line.strip() not in ('<summary>', '</summary>')
        ).strip()
        match = SUMMARY_VALUE.search(summary)
        if not match:
            return None
        return match.group(1).replace('&lt;', '<').replace('&gt;', '>').replace('&amp;', '&')
