"""
feedrelic/parsers/tabular_parser.py

Parses uploaded CSV and Excel files into row records.

Delimited text is read with the first line as header, blank lines skipped and
every value kept as text. Workbooks are read from the first sheet only, with
the header taken from the first row; fully blank rows are dropped and empty
cells are left out of the row mapping.
"""

from __future__ import annotations

import io
import logging
import math
from datetime import date, datetime, time
from pathlib import PurePath
from typing import Any

import numpy as np
import pandas as pd

from feedrelic.domain.tabular import FileFormat, ParsedFile, Row

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLS_MEDIA_TYPE = "application/vnd.ms-excel"
CSV_MEDIA_TYPE = "text/csv"

ACCEPTED_EXTENSIONS: dict[str, FileFormat] = {
    ".csv": FileFormat.DELIMITED,
    ".xlsx": FileFormat.SPREADSHEET,
    ".xls": FileFormat.SPREADSHEET,
}

ACCEPTED_MEDIA_TYPES: dict[str, FileFormat] = {
    CSV_MEDIA_TYPE: FileFormat.DELIMITED,
    XLSX_MEDIA_TYPE: FileFormat.SPREADSHEET,
    XLS_MEDIA_TYPE: FileFormat.SPREADSHEET,
}

UNSUPPORTED_FILE_MESSAGE = "Please upload a CSV or Excel file (.csv, .xlsx, .xls)."

# Legacy .xls workbooks are OLE2 compound documents.
_OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TabularParseError(ValueError):
    """
    Raised when an uploaded file cannot be turned into rows.

    The message is user-facing and is surfaced verbatim.
    """


class UnsupportedMediaTypeError(TabularParseError):
    """
    Raised before parsing when the file is neither CSV nor Excel.
    """

    def __init__(self, *, file_name: str, media_type: str | None) -> None:
        super().__init__(UNSUPPORTED_FILE_MESSAGE)
        self.file_name = file_name
        self.media_type = media_type


# ---------------------------------------------------------------------------
# Format detection
# ---------------------------------------------------------------------------


def detect_format(file_name: str, media_type: str | None) -> FileFormat:
    """
    Resolve the file format from its extension, then its declared media type.
    """

    suffix = PurePath((file_name or "").strip().lower()).suffix
    if suffix in ACCEPTED_EXTENSIONS:
        return ACCEPTED_EXTENSIONS[suffix]

    normalized_type = (media_type or "").split(";", 1)[0].strip().lower()
    if normalized_type in ACCEPTED_MEDIA_TYPES:
        return ACCEPTED_MEDIA_TYPES[normalized_type]

    raise UnsupportedMediaTypeError(file_name=file_name, media_type=media_type)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TabularParser:
    """
    Turns one uploaded file into a ``ParsedFile``.
    """

    def parse(self, *, data: bytes, file_name: str, media_type: str | None) -> ParsedFile:
        file_format = detect_format(file_name, media_type)

        if file_format is FileFormat.DELIMITED:
            rows = self._parse_delimited(data)
        else:
            rows = self._parse_spreadsheet(data)

        logger.info(
            "Parsed upload file=%r format=%s rows=%s",
            file_name,
            file_format.value,
            len(rows),
        )
        return ParsedFile(file_name=file_name, file_format=file_format, rows=tuple(rows))

    def _parse_delimited(self, data: bytes) -> list[Row]:
        try:
            frame = pd.read_csv(
                io.BytesIO(data),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding="utf-8-sig",
            )
        except UnicodeDecodeError as exc:
            raise TabularParseError("Error parsing CSV: file must be UTF-8 encoded.") from exc
        except (pd.errors.EmptyDataError, pd.errors.ParserError, ValueError) as exc:
            raise TabularParseError(f"Error parsing CSV: {exc}") from exc

        return _frame_to_rows(frame)

    def _parse_spreadsheet(self, data: bytes) -> list[Row]:
        engine = "calamine" if data.startswith(_OLE2_SIGNATURE) else "openpyxl"
        try:
            # object columns keep whole numbers as int when a column has blanks
            frame = pd.read_excel(io.BytesIO(data), sheet_name=0, engine=engine, dtype=object)
        except Exception as exc:  # noqa: BLE001
            raise TabularParseError(f"Error parsing Excel file: {exc}") from exc

        return _frame_to_rows(frame.dropna(how="all"))


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _frame_to_rows(frame: pd.DataFrame) -> list[Row]:
    columns = [str(column) for column in frame.columns]
    rows: list[Row] = []
    for values in frame.itertuples(index=False, name=None):
        row: dict[str, Any] = {}
        for column, value in zip(columns, values):
            converted = _to_scalar(value)
            if converted is not None:
                row[column] = converted
        rows.append(row)
    return rows


def _to_scalar(value: Any) -> Any:
    """
    Convert one cell to a JSON-safe Python scalar; missing cells become None.
    """

    if value is None:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, pd.Timedelta):
        return str(value)
    return value
