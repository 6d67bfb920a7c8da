"""Command-line interface for Script Helper.

WHY: Users keep scripts as text files and want the title list, the SRT track
with description timestamps, and the spreadsheet exports without opening a
browser. The CLI wires the parser, the timing engine and the pluggable
formatters behind a single command.

HOW: Uses argparse to accept an input file (or "-" for stdin), output format
selection, the title-block option, rows per spreadsheet, message language
and output directory. Status messages go to stderr; output files are saved
next to the input (or to --output-dir) with conflict-free names. --print
writes the text outputs to stdout instead.

RULES:
- Positional argument: input text file path, or "-" for stdin
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {first title}{suffix}, numeric suffix for conflicts
  (Intro.srt → Intro-2.srt)
- No topics found: localized advisory on stderr, exit 1, nothing written
- Status output goes to stderr (not stdout)
- Python 3.9.6 compatible: no match/case, no X | Y unions, no slots=True
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from topic_timeline import generate_track

from script_helper.config import (
    DEFAULT_INCLUDE_TITLES,
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_ROWS,
    SUPPORTED_LANGUAGES,
    load_timing_config,
)
from script_helper.formatters import FORMATTERS
from script_helper.formatters.base import FormatterOutput
from script_helper.formatters.title_list import generate_list
from script_helper.messages import translate
from script_helper.pipeline import generate_outputs, parse_script, validate_format_keys


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(filename: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    WHY: Users may run the helper several times on the same script.
    Overwriting previous output would lose work. Numeric suffixes
    (Intro-2.srt) prevent data loss.

    HOW: Check if the name exists. If so, increment a counter and insert
    it before the file extension until a free name is found.

    RULES:
    - First attempt: the filename as given
    - Conflict: insert "-{counter}" before the extension, counter from 2
    """
    base_path = output_dir / filename
    if not base_path.exists():
        return base_path

    dot_idx = filename.rfind(".")
    if dot_idx > 0:
        name, ext = filename[:dot_idx], filename[dot_idx:]
    else:
        name, ext = filename, ""

    counter = 2
    while True:
        candidate = output_dir / "{}-{}{}".format(name, counter, ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, filename: str, output_dir: Path) -> Path:
    """Write one formatter output, text as UTF-8 or raw bytes."""
    path = _resolve_output_path(filename, output_dir)
    if isinstance(output.content, bytes):
        path.write_bytes(output.content)
    else:
        path.write_text(output.content, encoding="utf-8")
    return path


def _read_input(input_file: str) -> str:
    if input_file == "-":
        return sys.stdin.read()
    with open(input_file, "r", encoding="utf-8") as f:
        return f.read()


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Kept separate from main() so tests can inspect the parser without
    running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="script-helper",
        description="Extract '##' titles from a script and generate a numbered "
                    "list, spreadsheet exports, and an SRT track with timestamps.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the script text file, or '-' to read stdin.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file, "
             "or the current directory for stdin).",
    )

    parser.add_argument(
        "--include-titles",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_INCLUDE_TITLES,
        help="Include topic titles in the SRT as separate entries (default: %(default)s).",
    )

    parser.add_argument(
        "--max-rows",
        type=int,
        default=DEFAULT_MAX_ROWS,
        help="Maximum topics per spreadsheet file (default: %(default)s).",
    )

    parser.add_argument(
        "--language",
        choices=SUPPORTED_LANGUAGES,
        default=DEFAULT_LANGUAGE if DEFAULT_LANGUAGE in SUPPORTED_LANGUAGES else "en",
        help="Language for messages and the untitled placeholder (default: %(default)s).",
    )

    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print the title list, timestamps and SRT to stdout instead of saving files.",
    )

    return parser


def run(args: argparse.Namespace) -> int:
    """Execute the pipeline for parsed arguments and return an exit code."""
    lang = args.language

    if args.max_rows < 1:
        _status("Error: --max-rows must be at least 1")
        return 1

    format_keys: Optional[List[str]] = None
    if args.formats:
        format_keys = [f.strip() for f in args.formats.split(",") if f.strip()]
        try:
            validate_format_keys(format_keys)
        except ValueError as e:
            _status("Error: {}".format(e))
            return 1

    if args.input_file != "-" and not Path(args.input_file).is_file():
        _status("Error: File not found: {}".format(args.input_file))
        return 1

    try:
        timing_config = load_timing_config()
    except ValueError as e:
        _status("Error: {}".format(e))
        return 1

    topics = parse_script(_read_input(args.input_file), lang)
    if not topics:
        _status(translate("no_topics_found", lang))
        return 1
    _status(translate("topics_found", lang, count=len(topics)))

    if args.print_only:
        track = generate_track(topics, include_titles=args.include_titles, config=timing_config)
        print(generate_list([topic.title for topic in topics]))
        print()
        print(track.timestamps)
        print()
        print(track.srt)
        return 0

    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()
    elif args.input_file == "-":
        output_dir = Path.cwd()
    else:
        output_dir = Path(args.input_file).resolve().parent
    if not output_dir.is_dir():
        _status("Error: Output directory does not exist: {}".format(output_dir))
        return 1

    outputs = generate_outputs(
        topics,
        format_keys=format_keys,
        include_titles=args.include_titles,
        max_rows=args.max_rows,
        timing_config=timing_config,
    )

    saved_files: List[Path] = []
    for filename, output in outputs:
        if output.suffix == ".srt" and not output.content:
            _status(translate("no_srt_to_download", lang))
            continue
        saved_path = _save_output(output, filename, output_dir)
        saved_files.append(saved_path)
        _status("  Saved: {}".format(saved_path.name))

    if any(output.suffix.endswith((".xlsx", ".csv")) for _, output in outputs):
        _status(translate("spreadsheet_generated", lang, count=len(topics)))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
