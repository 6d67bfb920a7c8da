"""Title/topic parser: splits ``##``-marked text into ordered topics.

WHY: Scripts are written as plain text with ``##`` lines marking section
titles. Every output (numbered list, spreadsheet rows, subtitle track) starts
from the same ordered list of topics, so parsing lives in one place.

HOW: Normalize line endings, then walk the lines once with an explicit
topic-in-progress: a marker line flushes the previous topic and starts a new
one; any other line is appended to the open topic's body. Lines before the
first marker have no open topic and are dropped.

RULES:
- Marker detection runs on the trimmed line; body text keeps the raw line.
- Each body line is followed by exactly one inserted space.
- Leading numbering ("1.", "2)", "3-", "4 -", stacked "1. 2.") is stripped
  from titles, so re-numbering is idempotent.
- Topic numbers are 1..k in encounter order, independent of stripped numbering.
- An empty title becomes the placeholder; parsing never fails on content.
"""

import re
from typing import List, Optional

from .models import Topic

TITLE_MARKER = "##"
DEFAULT_PLACEHOLDER = "(No title)"

MARKER_RE = re.compile(r"^##\s*")
NUMBERING_RE = re.compile(r"^(?:\d+\s*[.)\-]\s*)+")


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def remove_numbering(title: str) -> str:
    """Strip all leading numbering patterns and surrounding whitespace.

    >>> remove_numbering("3) Closing thoughts")
    'Closing thoughts'
    """
    return NUMBERING_RE.sub("", title.strip()).strip()


def _clean_title(marker_line: str) -> str:
    return remove_numbering(MARKER_RE.sub("", marker_line))


def parse_topics(text: str, placeholder: str = DEFAULT_PLACEHOLDER) -> List[Topic]:
    """Parse raw text into an ordered list of topics.

    Args:
        text: Raw input text with ``##`` title lines.
        placeholder: Title used when a marker line has no title text.

    Returns:
        Topics numbered from 1 in source order. Empty when no marker is found.
    """
    topics = []  # type: List[Topic]
    current_title = None  # type: Optional[str]
    current_lines = []  # type: List[str]

    def flush() -> None:
        if current_title is None:
            return
        topics.append(Topic(
            number=len(topics) + 1,
            title=current_title,
            content="".join(line + " " for line in current_lines),
        ))

    for line in normalize_newlines(text).split("\n"):
        trimmed = line.strip()
        if trimmed.startswith(TITLE_MARKER):
            flush()
            current_title = _clean_title(trimmed) or placeholder
            current_lines = []
        elif current_title is not None:
            current_lines.append(line)

    flush()
    return topics


def extract_titles(text: str, placeholder: str = DEFAULT_PLACEHOLDER) -> List[str]:
    """Return just the cleaned titles, in source order."""
    return [topic.title for topic in parse_topics(text, placeholder)]
