"""Abstract base formatter and output container.

WHY: Every output format consumes the same ordered list of topics but
produces different file content. This base class enforces a consistent
interface so the CLI and API layers can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content (string or bytes) and MIME type.
Formatter options (title blocks, rows per file, ...) are constructor
arguments, so ``FORMATTERS[key]()`` always yields a usable default.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; most formatters return one item, but
  multi-file formatters (SRT + timestamps, chunked spreadsheets) return several
- An empty topic list yields an empty list of outputs
- ``suffix`` is appended to the derived base name, e.g. ``".srt"`` or
  ``"-titles.txt"``; the caller is responsible for prepending it
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from topic_timeline import Topic


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the base name,
                e.g. ``".srt"`` → ``"Intro.srt"``.
        content: The file content as a string (SRT, plain text, CSV)
                 or bytes (xlsx workbooks).
        media_type: MIME type for the content, e.g. ``"application/x-subrip"``.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SRT Subtitles'."""

    @abstractmethod
    def format(self, topics: Sequence[Topic]) -> list[FormatterOutput]:
        """Convert parsed topics into one or more output files.

        Args:
            topics: Topics in source order, as returned by parse_topics().

        Returns:
            List of FormatterOutput objects, each containing a file suffix,
            content string/bytes, and MIME type.
        """
