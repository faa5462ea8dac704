from __future__ import annotations

from feedrelic.domain.tabular import FileFormat, ParsedFile
from feedrelic.services.preview_service import build_preview


def _parsed(rows: list[dict], file_name: str = "data.csv") -> ParsedFile:
    return ParsedFile(file_name=file_name, file_format=FileFormat.DELIMITED, rows=tuple(rows))


def _seven_rows() -> list[dict]:
    return [{"id": str(i), "name": f"item{i}", "amount": str(i * 10)} for i in range(1, 8)]


def test_preview_shows_five_of_seven_rows() -> None:
    preview = build_preview(_parsed(_seven_rows()))

    assert preview is not None
    assert len(preview.rows) == 5
    assert preview.total_rows == 7
    assert preview.column_count == 3
    assert preview.dimensions == "7 rows • 3 columns"
    assert preview.summary == "data.csv • 7 rows • 3 columns"
    assert preview.truncation_note == "Showing 5 of 7 rows"


def test_headers_follow_first_row_order() -> None:
    preview = build_preview(_parsed([{"b": 1, "a": 2, "c": 3}]))

    assert preview is not None
    assert preview.headers == ("b", "a", "c")
    assert preview.rows == (("1", "2", "3"),)


def test_singular_counts_and_no_truncation_note() -> None:
    preview = build_preview(_parsed([{"only": "x"}]))

    assert preview is not None
    assert preview.dimensions == "1 row • 1 column"
    assert preview.truncation_note is None


def test_missing_cells_render_empty() -> None:
    preview = build_preview(_parsed([{"a": "1", "b": "2"}, {"a": "3"}, {"b": None, "z": "extra"}]))

    assert preview is not None
    assert preview.headers == ("a", "b")
    assert preview.rows == (("1", "2"), ("3", ""), ("", ""))


def test_empty_rowset_has_no_preview() -> None:
    assert build_preview(_parsed([])) is None


def test_preview_leaves_rows_untouched() -> None:
    rows = _seven_rows()
    parsed = _parsed(rows)

    first = build_preview(parsed)
    second = build_preview(parsed)

    assert first == second
    assert parsed.rows == tuple(_seven_rows())
