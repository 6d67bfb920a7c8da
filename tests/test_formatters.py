"""Unit tests for all formatter modules.

WHY: Each formatter turns the parsed topics into a specific file. A wrong
suffix breaks naming, a wrong row index breaks downstream imports, and a
formatter that emits empty files on empty input hides the "no titles"
advisory from the user.

HOW: Tests run each formatter against the sample topics (and a generated
list of many topics for chunking), then read the content back: xlsx via
openpyxl, CSV via the csv module, SRT and text directly.
"""

import csv
import io

import pytest
from openpyxl import load_workbook

from topic_timeline import PRESET_DEFAULT, Topic, generate_track, parse_topics
from script_helper.formatters import FORMATTERS, build_formatter
from script_helper.formatters.csv_table import CSVFormatter
from script_helper.formatters.spreadsheet import (
    SpreadsheetFormatter,
    build_rows,
    chunk_rows,
    part_suffix,
)
from script_helper.formatters.srt_subtitles import SRTFormatter
from script_helper.formatters.title_list import TitleListFormatter, generate_list


def _many_topics(count):
    return [Topic(i, "Topic {}".format(i), "Body {}. ".format(i)) for i in range(1, count + 1)]


def _read_xlsx(content):
    workbook = load_workbook(io.BytesIO(content))
    sheet = workbook["Titles"]
    return [tuple(row) for row in sheet.iter_rows(values_only=True)]


# =========================================================================
# Title list
# =========================================================================

class TestTitleList:

    def test_generate_list(self):
        assert generate_list(["Intro", "Topic Two"]) == "1. Intro\n2. Topic Two"

    def test_generate_list_empty(self):
        assert generate_list([]) == ""

    def test_formatter_output(self, sample_topics):
        outputs = TitleListFormatter().format(sample_topics)
        assert len(outputs) == 1
        assert outputs[0].suffix == "-titles.txt"
        assert outputs[0].content == "1. Intro\n2. Topic Two"
        assert outputs[0].media_type == "text/plain"

    def test_no_topics_no_output(self):
        assert TitleListFormatter().format([]) == []


# =========================================================================
# SRT
# =========================================================================

class TestSRTFormatter:

    def test_two_outputs(self, sample_topics, expected_srt_with_titles):
        outputs = SRTFormatter(include_titles=True).format(sample_topics)
        assert [o.suffix for o in outputs] == [".srt", "-timestamps.txt"]
        assert outputs[0].content == expected_srt_with_titles
        assert outputs[0].media_type == "application/x-subrip"
        assert outputs[1].content == "0:00 - 1. Intro\n0:40 - 2. Topic Two"

    def test_without_titles(self, sample_topics, expected_srt_without_titles):
        outputs = SRTFormatter(include_titles=False).format(sample_topics)
        assert outputs[0].content == expected_srt_without_titles

    def test_custom_timing_config(self, sample_topics):
        config = dict(PRESET_DEFAULT, title_duration=2)
        outputs = SRTFormatter(include_titles=True, config=config).format(sample_topics)
        assert "00:00:00,000 --> 00:00:02,000" in outputs[0].content

    def test_reads_env_timing_when_no_config(self, sample_topics, monkeypatch):
        monkeypatch.setenv("SCRIPT_HELPER_TITLE_DURATION", "3")
        outputs = SRTFormatter(include_titles=True).format(sample_topics)
        assert "00:00:00,000 --> 00:00:03,000" in outputs[0].content

    def test_reuses_prebuilt_track(self, sample_topics):
        track = generate_track(
            sample_topics, include_titles=True,
            config=dict(PRESET_DEFAULT, title_duration=2),
        )
        outputs = SRTFormatter(include_titles=True, track=track).format(sample_topics)
        assert outputs[0].content is track.srt
        assert outputs[1].content is track.timestamps

    def test_no_topics_no_output(self):
        assert SRTFormatter().format([]) == []


# =========================================================================
# Tabular rows
# =========================================================================

class TestTabularRows:

    def test_build_rows(self, sample_topics):
        assert build_rows(sample_topics) == [
            (1, "Intro Hello world. This is a test."),
            (2, "Topic Two More content here."),
        ]

    def test_row_for_empty_content_keeps_separator(self):
        assert build_rows([Topic(1, "Alone", "")]) == [(1, "Alone ")]

    def test_row_trims_every_body_line(self):
        topics = parse_topics("## Intro\n    indented line\n\tsecond line\n\nlast\n")
        assert build_rows(topics) == [(1, "Intro indented line second line last")]

    def test_chunk_rows(self):
        rows = build_rows(_many_topics(45))
        chunks = chunk_rows(rows, 20)
        assert [len(c) for c in chunks] == [20, 20, 5]
        assert chunks[1][0][0] == 21

    def test_chunk_rows_exact_multiple(self):
        assert [len(c) for c in chunk_rows(build_rows(_many_topics(40)), 20)] == [20, 20]

    def test_chunk_rows_rejects_zero(self):
        with pytest.raises(ValueError):
            chunk_rows([], 0)

    @pytest.mark.parametrize("part, total, expected", [
        (1, 1, ".xlsx"),
        (1, 3, "_1of3.xlsx"),
        (3, 3, "_3of3.xlsx"),
    ])
    def test_part_suffix(self, part, total, expected):
        assert part_suffix(part, total, ".xlsx") == expected


# =========================================================================
# Spreadsheet (xlsx)
# =========================================================================

class TestSpreadsheetFormatter:

    def test_single_file(self, sample_topics):
        outputs = SpreadsheetFormatter(max_rows=20).format(sample_topics)
        assert len(outputs) == 1
        assert outputs[0].suffix == ".xlsx"
        assert isinstance(outputs[0].content, bytes)
        assert _read_xlsx(outputs[0].content) == [
            ("title", "input"),
            (1, "Intro Hello world. This is a test."),
            (2, "Topic Two More content here."),
        ]

    def test_control_characters_are_dropped(self):
        topics = parse_topics("## Intro\x07\nline one\x07line two\x01\n")
        outputs = SpreadsheetFormatter().format(topics)
        assert _read_xlsx(outputs[0].content)[1] == (1, "Intro line oneline two")

    def test_soft_line_break_becomes_space(self):
        topics = parse_topics("## Intro\nline one\x0bline two\n")
        outputs = SpreadsheetFormatter().format(topics)
        assert _read_xlsx(outputs[0].content)[1] == (1, "Intro line one line two")

    def test_multiple_files(self):
        outputs = SpreadsheetFormatter(max_rows=20).format(_many_topics(45))
        assert [o.suffix for o in outputs] == ["_1of3.xlsx", "_2of3.xlsx", "_3of3.xlsx"]

        second = _read_xlsx(outputs[1].content)
        assert second[0] == ("title", "input")
        assert second[1] == (21, "Topic 21 Body 21.")
        assert len(second) == 21

        third = _read_xlsx(outputs[2].content)
        assert len(third) == 6

    def test_no_topics_no_output(self):
        assert SpreadsheetFormatter().format([]) == []


# =========================================================================
# CSV
# =========================================================================

class TestCSVFormatter:

    def test_single_file(self, sample_topics):
        outputs = CSVFormatter(max_rows=20).format(sample_topics)
        assert len(outputs) == 1
        assert outputs[0].suffix == ".csv"
        rows = list(csv.reader(io.StringIO(outputs[0].content)))
        assert rows == [
            ["title", "input"],
            ["1", "Intro Hello world. This is a test."],
            ["2", "Topic Two More content here."],
        ]

    def test_multiple_files(self):
        outputs = CSVFormatter(max_rows=2).format(_many_topics(5))
        assert [o.suffix for o in outputs] == ["_1of3.csv", "_2of3.csv", "_3of3.csv"]
        last = list(csv.reader(io.StringIO(outputs[2].content)))
        assert last == [["title", "input"], ["5", "Topic 5 Body 5."]]

    def test_quotes_commas(self):
        outputs = CSVFormatter().format([Topic(1, "A, B", "c")])
        rows = list(csv.reader(io.StringIO(outputs[0].content)))
        assert rows[1] == ["1", "A, B c"]


# =========================================================================
# Registry
# =========================================================================

class TestRegistry:

    def test_keys(self):
        assert set(FORMATTERS) == {"title_list", "srt", "spreadsheet", "csv"}

    def test_every_formatter_has_a_name(self):
        for formatter_cls in FORMATTERS.values():
            assert formatter_cls().name

    def test_build_formatter_passes_options(self):
        srt = build_formatter("srt", include_titles=False)
        assert isinstance(srt, SRTFormatter)
        assert srt.include_titles is False

        sheet = build_formatter("spreadsheet", max_rows=7)
        assert sheet.max_rows == 7

        assert isinstance(build_formatter("title_list", max_rows=7), TitleListFormatter)

    def test_build_formatter_unknown(self):
        with pytest.raises(KeyError):
            build_formatter("nope")
