"""Script Helper: ``##`` title extraction, spreadsheet export and SRT generation.

WHY: Video scripts are drafted as plain text with ``##`` section titles.
Producing the numbered title list, the spreadsheet handed to downstream
tools, and the subtitle track with description timestamps by hand is slow
and error-prone. This package wires the topic_timeline core library to
pluggable output formatters, a CLI and an HTTP API.

HOW: Three-stage pipeline: parse (topic_timeline.parse_topics), time
(topic_timeline.generate_track), format (pluggable formatters). Each stage
is independently testable.

RULES:
- All formatters consume the same ordered list of Topic objects
- Adding a new output format = one new formatter module, no core changes
- The core library stays free of I/O; files are written here
"""

__version__ = "0.1.0"
