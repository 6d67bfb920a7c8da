"""Shared test fixtures for the script_helper / topic_timeline test suite.

WHY: Most test modules need the same small script and its parsed topics.
Centralizing them here keeps the expected values (titles, block times,
timestamps) consistent across parser, engine, formatter, CLI and API tests.

HOW: Pytest fixtures provide the raw script text, the parsed topics, and a
copy of the default timing config. An autouse fixture removes any
SCRIPT_HELPER_* timing overrides from the environment so a developer's
.env never changes expected timings.

RULES:
- SAMPLE_SCRIPT has no trailing newline (so the last body ends in one space).
- Expected values in tests assume the default preset.
"""

import pytest

from topic_timeline import PRESET_DEFAULT, Topic
from script_helper.config import TIMING_ENV_VARS

SAMPLE_SCRIPT = (
    "## Intro\n"
    "Hello world. This is a test.\n"
    "## Topic Two\n"
    "More content here."
)

SAMPLE_TOPICS = [
    Topic(number=1, title="Intro", content="Hello world. This is a test. "),
    Topic(number=2, title="Topic Two", content="More content here. "),
]

# Subtitle track for SAMPLE_SCRIPT with the default preset and title blocks on
SAMPLE_SRT_WITH_TITLES = (
    "1\n"
    "00:00:00,000 --> 00:00:05,000\n"
    "1. Intro...\n"
    "\n"
    "2\n"
    "00:00:35,000 --> 00:01:10,000\n"
    "Hello world. This is a test.\n"
    "\n"
    "3\n"
    "00:03:00,000 --> 00:03:05,000\n"
    "2. Topic Two...\n"
    "\n"
    "4\n"
    "00:03:35,000 --> 00:04:10,000\n"
    "More content here."
)

SAMPLE_SRT_WITHOUT_TITLES = (
    "1\n"
    "00:00:00,000 --> 00:00:35,000\n"
    "Hello world. This is a test.\n"
    "\n"
    "2\n"
    "00:03:00,000 --> 00:03:35,000\n"
    "More content here."
)


@pytest.fixture(autouse=True)
def _clear_timing_env(monkeypatch):
    """Ignore SCRIPT_HELPER_* timing overrides from the developer's shell."""
    for env_var in TIMING_ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def sample_script():
    return SAMPLE_SCRIPT


@pytest.fixture
def sample_topics():
    return list(SAMPLE_TOPICS)


@pytest.fixture
def timing_config():
    """A private copy of the default timing preset."""
    return dict(PRESET_DEFAULT)


@pytest.fixture
def expected_srt_with_titles():
    return SAMPLE_SRT_WITH_TITLES


@pytest.fixture
def expected_srt_without_titles():
    return SAMPLE_SRT_WITHOUT_TITLES
