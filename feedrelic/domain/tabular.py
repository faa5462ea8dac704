"""
feedrelic/domain/tabular.py

Domain models produced by the tabular parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Tuple

Row = Mapping[str, Any]
RowSet = Tuple[Row, ...]


class FileFormat(str, Enum):
    """
    Detected format of an uploaded file.
    """

    DELIMITED = "delimited"
    SPREADSHEET = "spreadsheet"

    @property
    def label(self) -> str:
        return "CSV" if self is FileFormat.DELIMITED else "Excel"


@dataclass(frozen=True)
class ParsedFile:
    """
    Full parsed content of one uploaded file.
    """

    file_name: str
    file_format: FileFormat
    rows: RowSet

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows
