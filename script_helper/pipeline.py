"""Shared parse → format pipeline for the CLI and the HTTP API.

WHY: The CLI and the API offer the same operations on a script: parse it,
run a selection of formatters, name the resulting files. Keeping that
sequence here means both front ends produce byte-identical outputs.

HOW: parse_script() runs the parser with the localized untitled
placeholder. generate_outputs() instantiates each requested formatter with
the given options and pairs every output with its final filename
(derived base name + formatter suffix).

RULES:
- Unknown format keys raise ValueError listing the available keys
- An empty topic list yields no outputs (callers report the advisory)
- Output order follows the order of format_keys
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from topic_timeline import Topic, Track, parse_topics

from script_helper.formatters import FORMATTERS, build_formatter
from script_helper.formatters.base import FormatterOutput
from script_helper.messages import translate
from script_helper.naming import derive_basename


def parse_script(text: str, language: str = "en") -> List[Topic]:
    """Parse script text, naming untitled sections in the given language."""
    return parse_topics(text, placeholder=translate("no_title", language))


def validate_format_keys(format_keys: Sequence[str]) -> None:
    """Raise ValueError if any key is not a registered formatter."""
    for key in format_keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise ValueError(
                "Unknown format '{}'. Available formats: {}".format(key, available)
            )


def generate_outputs(
    topics: Sequence[Topic],
    format_keys: Optional[Sequence[str]] = None,
    include_titles: Optional[bool] = None,
    max_rows: Optional[int] = None,
    timing_config: Optional[dict] = None,
    track: Optional[Track] = None,
) -> List[Tuple[str, FormatterOutput]]:
    """Run formatters over topics and name their outputs.

    Args:
        topics: Parsed topics.
        format_keys: Formatter keys to run; defaults to all registered.
        include_titles: Title-block option for the SRT formatter.
        max_rows: Rows per file for the tabular formatters.
        timing_config: Timing config for the SRT formatter.
        track: Prebuilt track for the SRT formatter, so callers that also
            need the timeline run the engine once.

    Returns:
        (filename, FormatterOutput) pairs in formatter order.
    """
    keys = list(format_keys) if format_keys else list(FORMATTERS.keys())
    validate_format_keys(keys)

    basename = derive_basename(topics)
    named: List[Tuple[str, FormatterOutput]] = []
    for key in keys:
        formatter = build_formatter(
            key,
            include_titles=include_titles,
            max_rows=max_rows,
            timing_config=timing_config,
            track=track,
        )
        for output in formatter.format(topics):
            named.append(("{}{}".format(basename, output.suffix), output))
    return named
