#!/usr/bin/env python3
"""
CSV format handler.

Expects a header row naming at least "key" and "value" columns; optional
"comment" and "source" columns are carried into the entry metadata.
Files without a recognizable header are read as key,value[,comment] rows.
"""

import csv
import io
from typing import Optional

from ..models import LocalizationEntry, LocalizationFile
from .base import FormatHandler

COLUMNS = ('key', 'value', 'comment', 'source')


class CsvHandler(FormatHandler):
    """
    Handler for CSV key/value tables.

    ```
    key,value,comment
    welcome,Welcome,Start page title
    farewell,Goodbye,
    ```
    """

    @property
    def format_id(self) -> str:
        return "csv"

    @property
    def file_extensions(self) -> list[str]:
        return [".csv"]

    @property
    def description(self) -> str:
        return "Comma separated key/value table"

    @property
    def supports_comments(self) -> bool:
        return True

    @property
    def supports_source(self) -> bool:
        return True

    def parse_content(self, content: str, path: Optional[str] = None) -> LocalizationFile:
        try:
            rows = list(csv.reader(io.StringIO(content), strict=True))
        except csv.Error as e:
            raise self.format_error(str(e), path)

        rows = [row for row in rows if any(cell.strip() for cell in row)]
        if not rows:
            return self.new_file(path, [])

        header = [cell.strip().lower() for cell in rows[0]]
        if 'key' in header and 'value' in header:
            positions = {name: header.index(name) for name in COLUMNS if name in header}
            data_rows = rows[1:]
        else:
            positions = {'key': 0, 'value': 1, 'comment': 2}
            data_rows = rows

        entries = []
        for line_no, row in enumerate(data_rows, start=1):
            key = self._cell(row, positions.get('key'))
            if not key:
                raise self.format_error(f"row {line_no}: missing key", path)
            entries.append(LocalizationEntry(
                key=key,
                value=self._cell(row, positions.get('value')),
                comment=self._cell(row, positions.get('comment')) or None,
                source=self._cell(row, positions.get('source')) or None,
            ))

        return self.new_file(path, entries)

    def _cell(self, row: list[str], position: Optional[int]) -> Optional[str]:
        if position is None or position >= len(row):
            return None
        return row[position]

    def write_content(self, file: LocalizationFile) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator='\n')
        with_source = any(entry.source for entry in file.entries)
        writer.writerow(COLUMNS if with_source else COLUMNS[:3])
        for entry in file.entries:
            row = [entry.key, entry.value or '', entry.comment or '']
            if with_source:
                row.append(entry.source or '')
            writer.writerow(row)
        return output.getvalue()

    def conversion_warnings(self, file: LocalizationFile) -> list[str]:
        warnings = super().conversion_warnings(file)
        missing = sum(1 for e in file.entries if e.value is None)
        if missing:
            warnings.append(f"{missing} entry(ies) without a value are written as empty cells and read back as ''.")
        return warnings
