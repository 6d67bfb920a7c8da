"""Numbered title list formatter.

WHY: The quickest use of a script is a clean numbered list of its section
titles, e.g. for briefing an image agent or pasting into a planning doc.

HOW: One "{n}. {title}" line per topic, numbered from 1 in input order.
Any numbering the author typed was already stripped by the parser.

RULES:
- Lines joined with "\\n", no trailing newline
- Output suffix: "-titles.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List, Sequence

from topic_timeline import Topic

from script_helper.formatters.base import BaseFormatter, FormatterOutput


def generate_list(titles: Sequence[str]) -> str:
    """Return the numbered list for titles."""
    return "\n".join(
        "{}. {}".format(index, title) for index, title in enumerate(titles, 1)
    )


class TitleListFormatter(BaseFormatter):
    """Formatter that produces the numbered title list."""

    @property
    def name(self) -> str:
        return "Title List"

    def format(self, topics: Sequence[Topic]) -> List[FormatterOutput]:
        if not topics:
            return []
        return [
            FormatterOutput(
                suffix="-titles.txt",
                content=generate_list([topic.title for topic in topics]),
                media_type="text/plain",
            )
        ]
