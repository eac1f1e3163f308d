#!/usr/bin/env python3
"""
XLIFF format handler.

Reads XLIFF 1.2 and 2.0 documents; writes XLIFF 1.2. The target language
of the document, when present, is the file culture.
"""

import os
from typing import Optional
from xml.etree import ElementTree as ET

from ..culture import normalize_culture
from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

XLIFF_12_NS = 'urn:oasis:names:tc:xliff:document:1.2'


def _local(tag: str) -> str:
    """Strip the namespace from an element tag."""
    return tag.rsplit('}', 1)[-1]


def _text(elem: Optional[ET.Element]) -> Optional[str]:
    """Full text content of an element including inline children."""
    if elem is None:
        return None
    return ''.join(elem.itertext())


class XliffHandler(FormatHandler):
    """
    Handler for XLIFF translation interchange files.

    XLIFF 1.2 structure:
    ```xml
    <xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
      <file source-language="en" target-language="tr" datatype="plaintext" original="messages">
        <body>
          <trans-unit id="welcome">
            <source>Welcome</source>
            <target>Hoş geldiniz</target>
            <note>Start page title</note>
          </trans-unit>
        </body>
      </file>
    </xliff>
    ```

    Mapping: id -> key, target -> value, source -> source, note -> comment.
    """

    @property
    def format_id(self) -> str:
        return "xliff"

    @property
    def file_extensions(self) -> list[str]:
        return [".xliff", ".xlf"]

    @property
    def description(self) -> str:
        return "XLIFF 1.2 / 2.0"

    @property
    def supports_comments(self) -> bool:
        return True

    @property
    def supports_source(self) -> bool:
        return True

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise self.format_error(str(e), path)

        if _local(root.tag) != 'xliff':
            raise self.format_error(f"expected <xliff> root, found <{_local(root.tag)}>", path)

        if root.get('version', '1.2').startswith('2'):
            culture = root.get('trgLang')
            entries = self._parse_v2(root)
        else:
            culture = None
            entries = []
            for file_elem in root:
                if _local(file_elem.tag) != 'file':
                    continue
                culture = culture or file_elem.get('target-language')
                entries.extend(self._parse_v1(file_elem))

        return self.new_file(path, entries, culture=normalize_culture(culture))

    def _parse_v1(self, file_elem: ET.Element) -> list[LocalizationEntry]:
        entries = []
        for unit in file_elem.iter():
            if _local(unit.tag) != 'trans-unit':
                continue
            key = unit.get('resname') or unit.get('id')
            if not key:
                continue
            children = {_local(child.tag): child for child in unit}
            entries.append(LocalizationEntry(
                key=key,
                value=_text(children.get('target')),
                comment=_text(children.get('note')),
                source=_text(children.get('source')),
            ))
        return entries

    def _parse_v2(self, root: ET.Element) -> list[LocalizationEntry]:
        entries = []
        for unit in root.iter():
            if _local(unit.tag) != 'unit' or not unit.get('id'):
                continue
            sources, targets, notes = [], [], []
            for elem in unit.iter():
                tag = _local(elem.tag)
                if tag == 'source':
                    sources.append(_text(elem))
                elif tag == 'target':
                    targets.append(_text(elem))
                elif tag == 'note':
                    notes.append(_text(elem))
            entries.append(LocalizationEntry(
                key=unit.get('id'),
                value=''.join(targets) if targets else None,
                comment='\n'.join(notes) if notes else None,
                source=''.join(sources) if sources else None,
            ))
        return entries

    def write_content(self, file: LocalizationFile) -> str:
        ET.register_namespace('', XLIFF_12_NS)
        root = ET.Element(f'{{{XLIFF_12_NS}}}xliff', version='1.2')
        file_attrs = {
            'source-language': 'en',
            'datatype': 'plaintext',
            'original': os.path.basename(file.file_path) or 'messages',
        }
        if file.culture:
            file_attrs['target-language'] = file.culture
        file_elem = ET.SubElement(root, f'{{{XLIFF_12_NS}}}file', file_attrs)
        body = ET.SubElement(file_elem, f'{{{XLIFF_12_NS}}}body')

        for entry in file.entries:
            unit = ET.SubElement(body, f'{{{XLIFF_12_NS}}}trans-unit', id=entry.key)
            source = entry.source if entry.source is not None else entry.value
            ET.SubElement(unit, f'{{{XLIFF_12_NS}}}source').text = source or ''
            if entry.value is not None:
                ET.SubElement(unit, f'{{{XLIFF_12_NS}}}target').text = entry.value
            if entry.comment:
                ET.SubElement(unit, f'{{{XLIFF_12_NS}}}note').text = entry.comment

        ET.indent(root, space='  ')
        return '<?xml version="1.0" encoding="utf-8"?>\n' + ET.tostring(root, encoding='unicode') + '\n'
