"""Unit tests for configuration, localized messages and filename derivation."""

import pytest

from topic_timeline import PRESET_DEFAULT, Topic, generate_track, parse_topics
from script_helper.config import load_timing_config
from script_helper.messages import MESSAGES, translate
from script_helper.naming import derive_basename, sanitize_filename
from script_helper.pipeline import generate_outputs, parse_script, validate_format_keys


class TestLoadTimingConfig:

    def test_defaults_match_preset(self):
        assert load_timing_config() == PRESET_DEFAULT

    def test_returns_fresh_dict(self):
        config = load_timing_config()
        config["block_duration"] = 1
        assert load_timing_config()["block_duration"] == PRESET_DEFAULT["block_duration"]

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SCRIPT_HELPER_BLOCK_DURATION", "12.5")
        monkeypatch.setenv("SCRIPT_HELPER_WORDS_PER_BLOCK", "40")
        config = load_timing_config()
        assert config["block_duration"] == 12.5
        assert config["max_block_words"] == 40

    def test_blank_value_keeps_default(self, monkeypatch):
        monkeypatch.setenv("SCRIPT_HELPER_TOPIC_INTERVAL", "  ")
        assert load_timing_config()["topic_interval"] == PRESET_DEFAULT["topic_interval"]

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("SCRIPT_HELPER_CHARS_PER_BLOCK", "lots")
        with pytest.raises(ValueError, match="SCRIPT_HELPER_CHARS_PER_BLOCK"):
            load_timing_config()


class TestTranslate:

    def test_english(self):
        assert translate("topics_found", count=3) == "3 topics found!"

    def test_portuguese(self):
        assert translate("topics_found", "pt", count=3) == "3 tópicos encontrados!"

    def test_unknown_language_falls_back_to_english(self):
        assert translate("no_title", "xx") == "(No title)"

    def test_unknown_key_returns_key(self):
        assert translate("missing_key") == "missing_key"

    def test_all_languages_share_english_keys(self):
        for lang, messages in MESSAGES.items():
            assert set(messages) <= set(MESSAGES["en"]), lang


class TestNaming:

    def test_strips_unsafe_characters(self):
        assert sanitize_filename("What: is [this]? a/b\\c*") == "What is this abc"

    def test_truncates(self):
        assert len(sanitize_filename("x" * 80)) == 50

    def test_basename_from_first_topic(self, sample_topics):
        assert derive_basename(sample_topics) == "Intro"

    def test_fallback_without_topics(self):
        assert derive_basename([]) == "subtitles"

    def test_fallback_when_nothing_left(self):
        assert derive_basename([Topic(1, "???", "")]) == "subtitles"


class TestPipeline:

    def test_parse_script_localizes_placeholder(self):
        assert parse_script("##", "pt")[0].title == "(Sem título)"

    def test_generate_outputs_names_files(self, sample_topics):
        outputs = generate_outputs(sample_topics, include_titles=True, max_rows=20)
        assert [name for name, _ in outputs] == [
            "Intro-titles.txt",
            "Intro.srt",
            "Intro-timestamps.txt",
            "Intro.xlsx",
            "Intro.csv",
        ]

    def test_generate_outputs_selected_formats(self, sample_topics):
        outputs = generate_outputs(sample_topics, format_keys=["csv"])
        assert [name for name, _ in outputs] == ["Intro.csv"]

    def test_generate_outputs_passes_track_to_srt(self, sample_topics):
        track = generate_track(sample_topics, include_titles=False)
        outputs = dict(generate_outputs(sample_topics, format_keys=["srt"], track=track))
        assert outputs["Intro.srt"].content is track.srt

    def test_spreadsheet_accepts_control_characters(self):
        topics = parse_topics("## Intro\nline one\x0bline two\x07\n")
        outputs = generate_outputs(topics, format_keys=["spreadsheet"])
        assert [name for name, _ in outputs] == ["Intro.xlsx"]

    def test_generate_outputs_no_topics(self):
        assert generate_outputs([]) == []

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format 'pdf'"):
            validate_format_keys(["srt", "pdf"])
