#!/usr/bin/env python3
"""
RESX format handler.

Handles .NET XML resource files (Resources.resx, Resources.tr-TR.resx).
Only string <data> elements are translatable; typed resources (images,
file references) carry a "type" attribute and are skipped.
"""

from typing import Optional
from xml.etree import ElementTree as ET

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

XML_SPACE = '{http://www.w3.org/XML/1998/namespace}space'

RESX_HEADERS = (
    ('resmimetype', 'text/microsoft-resx'),
    ('version', '2.0'),
    ('reader', 'System.Resources.ResXResourceReader, System.Windows.Forms, '
               'Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089'),
    ('writer', 'System.Resources.ResXResourceWriter, System.Windows.Forms, '
               'Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089'),
)


class ResxHandler(FormatHandler):
    """
    Handler for .NET RESX files.

    RESX structure:
    ```xml
    <root>
      <resheader name="resmimetype"><value>text/microsoft-resx</value></resheader>
      <data name="Welcome" xml:space="preserve">
        <value>Welcome</value>
        <comment>Shown on the start page</comment>
      </data>
    </root>
    ```
    """

    @property
    def format_id(self) -> str:
        return "resx"

    @property
    def file_extensions(self) -> list[str]:
        return [".resx"]

    @property
    def description(self) -> str:
        return ".NET XML resources"

    @property
    def supports_comments(self) -> bool:
        return True

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise self.format_error(str(e), path)

        if root.tag != 'root':
            raise self.format_error(f"expected <root> element, found <{root.tag}>", path)

        entries = []
        for data in root.findall('data'):
            name = data.get('name')
            if not name or data.get('type') or data.get('mimetype'):
                continue
            value_elem = data.find('value')
            comment_elem = data.find('comment')
            entries.append(LocalizationEntry(
                key=name,
                value=value_elem.text or '' if value_elem is not None else None,
                comment=comment_elem.text if comment_elem is not None else None,
            ))

        return self.new_file(path, entries)

    def write_content(self, file: LocalizationFile) -> str:
        root = ET.Element('root')

        for name, value in RESX_HEADERS:
            header = ET.SubElement(root, 'resheader', name=name)
            ET.SubElement(header, 'value').text = value

        for entry in file.entries:
            data = ET.SubElement(root, 'data', {'name': entry.key, XML_SPACE: 'preserve'})
            ET.SubElement(data, 'value').text = entry.value or ''
            if entry.comment:
                ET.SubElement(data, 'comment').text = entry.comment

        ET.indent(root, space='  ')
        body = ET.tostring(root, encoding='unicode')
        return '<?xml version="1.0" encoding="utf-8"?>\n' + body + '\n'
