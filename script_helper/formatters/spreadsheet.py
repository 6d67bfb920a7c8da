"""Spreadsheet export: (title, content) rows chunked across xlsx files.

WHY: Downstream production tools ingest one spreadsheet row per topic, with
the title and the narration text together in one "input" cell. Those tools
choke on large sheets, so the rows are split across several files of at
most ``max_rows`` topics each.

HOW: build_rows() numbers every topic and joins the title with the body
lines, whitespace runs collapsed to single spaces.
chunk_rows() partitions them into consecutive chunks. Each chunk becomes
one workbook (written with openpyxl) with a header row and a sheet named
"Titles". part_suffix() disambiguates files when there is more than one.

RULES:
- Header row: ["title", "input"]
- Row: [global 1-based index, title + " " + body with whitespace collapsed]
- Characters openpyxl cannot store (C0 controls) are dropped from xlsx cells
- Indices keep counting across chunks (second file starts at max_rows + 1)
- Suffix: ".xlsx" for a single file, "_{part}of{total}.xlsx" otherwise
- max_rows must be >= 1
"""

from __future__ import annotations

import io
from typing import List, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from topic_timeline import Topic

from script_helper.config import DEFAULT_MAX_ROWS
from script_helper.formatters.base import BaseFormatter, FormatterOutput

HEADER_ROW: Tuple[str, str] = ("title", "input")
SHEET_NAME = "Titles"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def build_rows(topics: Sequence[Topic]) -> List[Tuple[int, str]]:
    """Return one (index, "title content") row per topic."""
    return [
        (index, "{} {}".format(topic.title, " ".join(topic.content.split())))
        for index, topic in enumerate(topics, 1)
    ]


def chunk_rows(rows: Sequence[Tuple[int, str]], max_rows: int) -> List[List[Tuple[int, str]]]:
    """Partition rows into consecutive chunks of at most max_rows.

    Raises:
        ValueError: If max_rows is less than 1.
    """
    if max_rows < 1:
        raise ValueError("max_rows must be at least 1, got {}".format(max_rows))
    return [list(rows[i:i + max_rows]) for i in range(0, len(rows), max_rows)]


def part_suffix(part: int, total: int, extension: str) -> str:
    """Suffix for part ``part`` (1-based) of ``total`` files."""
    if total > 1:
        return "_{}of{}{}".format(part, total, extension)
    return extension


def _clean_cell(value):
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def _workbook_bytes(rows: Sequence[Tuple[int, str]]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_NAME
    sheet.append(list(HEADER_ROW))
    for row in rows:
        sheet.append([_clean_cell(value) for value in row])

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class SpreadsheetFormatter(BaseFormatter):
    """Formatter that produces one xlsx workbook per chunk of topics.

    Args:
        max_rows: Maximum topics per workbook.
    """

    def __init__(self, max_rows: int = DEFAULT_MAX_ROWS) -> None:
        self.max_rows = max_rows

    @property
    def name(self) -> str:
        return "Spreadsheet (xlsx)"

    def format(self, topics: Sequence[Topic]) -> List[FormatterOutput]:
        chunks = chunk_rows(build_rows(topics), self.max_rows)
        total = len(chunks)
        return [
            FormatterOutput(
                suffix=part_suffix(part, total, ".xlsx"),
                content=_workbook_bytes(chunk),
                media_type=XLSX_MEDIA_TYPE,
            )
            for part, chunk in enumerate(chunks, 1)
        ]
