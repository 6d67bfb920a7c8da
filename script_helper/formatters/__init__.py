"""Output formatter registry: pluggable format hub.

WHY: The CLI and API layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["srt"]()``.
build_formatter() passes the options each formatter understands.

RULES:
- Keys are snake_case identifiers (used in CLI flags, API payloads, etc.)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from topic_timeline import Track

from script_helper.formatters.csv_table import CSVFormatter
from script_helper.formatters.spreadsheet import SpreadsheetFormatter
from script_helper.formatters.srt_subtitles import SRTFormatter
from script_helper.formatters.title_list import TitleListFormatter

if TYPE_CHECKING:
    from script_helper.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "title_list": TitleListFormatter,
    "srt": SRTFormatter,
    "spreadsheet": SpreadsheetFormatter,
    "csv": CSVFormatter,
}


def build_formatter(
    key: str,
    include_titles: Optional[bool] = None,
    max_rows: Optional[int] = None,
    timing_config: Optional[dict] = None,
    track: Optional[Track] = None,
) -> BaseFormatter:
    """Instantiate the formatter registered under key with matching options.

    Options left as None fall back to the formatter's own defaults.

    Raises:
        KeyError: If key is not a registered formatter.
    """
    formatter_cls = FORMATTERS[key]
    if formatter_cls is SRTFormatter:
        kwargs: dict = {"config": timing_config, "track": track}
        if include_titles is not None:
            kwargs["include_titles"] = include_titles
        return SRTFormatter(**kwargs)
    if formatter_cls in (SpreadsheetFormatter, CSVFormatter) and max_rows is not None:
        return formatter_cls(max_rows=max_rows)
    return formatter_cls()
