"""
feedrelic/services/preview_service.py

Read-only preview of a parsed upload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from feedrelic.config import PREVIEW_ROW_LIMIT
from feedrelic.domain.tabular import ParsedFile


@dataclass(frozen=True)
class DataPreview:
    """
    Table projection of the first rows of a file.
    """

    file_name: str
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    total_rows: int

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def dimensions(self) -> str:
        return f"{_plural(self.total_rows, 'row')} • {_plural(self.column_count, 'column')}"

    @property
    def summary(self) -> str:
        return f"{self.file_name} • {self.dimensions}"

    @property
    def truncation_note(self) -> str | None:
        if self.total_rows <= len(self.rows):
            return None
        return f"Showing {len(self.rows)} of {self.total_rows} rows"


def build_preview(parsed: ParsedFile, limit: int = PREVIEW_ROW_LIMIT) -> DataPreview | None:
    """
    Project ``parsed`` into a preview, or None when it holds no rows.

    Headers come from the first row; cells missing from later rows render
    as empty strings.
    """

    if parsed.is_empty:
        return None

    headers = tuple(str(key) for key in parsed.rows[0].keys())
    rows = tuple(
        tuple(_cell_text(row.get(header)) for header in headers)
        for row in parsed.rows[: max(0, limit)]
    )
    return DataPreview(
        file_name=parsed.file_name,
        headers=headers,
        rows=rows,
        total_rows=parsed.row_count,
    )


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"
