"""CSV export with the same rows and chunking as the spreadsheet export.

WHY: Some pipelines prefer plain CSV over xlsx. Reusing build_rows() and
chunk_rows() guarantees both exports number and split topics identically.

RULES:
- Suffix: ".csv" for a single file, "_{part}of{total}.csv" otherwise
- Media type: "text/csv"
- Line terminator "\\n"
"""

from __future__ import annotations

import csv
import io
from typing import List, Sequence, Tuple

from topic_timeline import Topic

from script_helper.config import DEFAULT_MAX_ROWS
from script_helper.formatters.base import BaseFormatter, FormatterOutput
from script_helper.formatters.spreadsheet import (
    HEADER_ROW,
    build_rows,
    chunk_rows,
    part_suffix,
)


def _csv_text(rows: Sequence[Tuple[int, str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(HEADER_ROW)
    writer.writerows(rows)
    return buffer.getvalue()


class CSVFormatter(BaseFormatter):
    """Formatter that produces one CSV file per chunk of topics."""

    def __init__(self, max_rows: int = DEFAULT_MAX_ROWS) -> None:
        self.max_rows = max_rows

    @property
    def name(self) -> str:
        return "Spreadsheet (CSV)"

    def format(self, topics: Sequence[Topic]) -> List[FormatterOutput]:
        chunks = chunk_rows(build_rows(topics), self.max_rows)
        total = len(chunks)
        return [
            FormatterOutput(
                suffix=part_suffix(part, total, ".csv"),
                content=_csv_text(chunk),
                media_type="text/csv",
            )
            for part, chunk in enumerate(chunks, 1)
        ]
