"""Output filename derivation.

WHY: Every export is named after the script's first topic so files from
different scripts don't collide in a downloads folder. Titles can contain
characters that are invalid in filenames or spreadsheet sheet names.

RULES:
- Remove : \\ / ? * [ ] from the first topic's title
- Truncate to FILENAME_MAX_LENGTH characters
- Fall back to "subtitles" when there are no topics or nothing is left
"""

from __future__ import annotations

import re
from typing import Sequence

from topic_timeline import Topic

from script_helper.config import FALLBACK_BASENAME, FILENAME_MAX_LENGTH

_UNSAFE_CHARS_RE = re.compile(r"[:\\/?*\[\]]")


def sanitize_filename(title: str) -> str:
    return _UNSAFE_CHARS_RE.sub("", title)[:FILENAME_MAX_LENGTH]


def derive_basename(topics: Sequence[Topic]) -> str:
    """Return the base filename (no extension) for a set of topics."""
    if not topics:
        return FALLBACK_BASENAME
    return sanitize_filename(topics[0].title) or FALLBACK_BASENAME
