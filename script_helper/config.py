"""Configuration constants and .env loading.

WHY: Centralizes every configurable value so it is easy to find, update and
override. Timing heuristics, export limits and server settings are plain
values here, not buried in logic, so they can be tuned per deployment
without code changes.

HOW: python-dotenv loads the .env file on import. Constants are read from
environment variables with defaults. load_timing_config() layers the
SCRIPT_HELPER_* timing overrides on top of the library's default preset.

RULES:
- All defaults can be overridden via environment variables
- Timing overrides are read at call time, so tests can monkeypatch os.environ
- Malformed numbers raise ValueError naming the offending variable
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from topic_timeline import PRESET_DEFAULT

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Application defaults
# ---------------------------------------------------------------------------

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "pt")

DEFAULT_LANGUAGE = os.getenv("SCRIPT_HELPER_LANGUAGE", "en")
DEFAULT_INCLUDE_TITLES = os.getenv("SCRIPT_HELPER_INCLUDE_TITLES", "true").lower() == "true"
DEFAULT_MAX_ROWS = int(os.getenv("SCRIPT_HELPER_MAX_ROWS", "20"))

FILENAME_MAX_LENGTH = 50
FALLBACK_BASENAME = "subtitles"

SERVER_HOST = os.getenv("SCRIPT_HELPER_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SCRIPT_HELPER_PORT", "8000"))

# ---------------------------------------------------------------------------
# Timing overrides: config key → environment variable
# ---------------------------------------------------------------------------

TIMING_ENV_VARS: dict[str, str] = {
    "max_block_chars": "SCRIPT_HELPER_CHARS_PER_BLOCK",
    "max_block_words": "SCRIPT_HELPER_WORDS_PER_BLOCK",
    "block_duration": "SCRIPT_HELPER_BLOCK_DURATION",
    "block_interval": "SCRIPT_HELPER_BLOCK_INTERVAL",
    "topic_interval": "SCRIPT_HELPER_TOPIC_INTERVAL",
    "title_duration": "SCRIPT_HELPER_TITLE_DURATION",
}

_INTEGER_KEYS = ("max_block_chars", "max_block_words")


def load_timing_config() -> dict:
    """Build the timing config from the default preset and env overrides.

    WHY: Block limits and durations are heuristics that differ between
    channels. Operators tune them in .env; the library stays unaware.

    HOW: Copies PRESET_DEFAULT, then replaces any key whose environment
    variable is set. Limits are parsed as int, durations as float.

    RULES:
    - Returns a fresh dict on every call
    - Unset or blank variables keep the preset value
    - Raises ValueError if a variable is not a valid number
    """
    config = dict(PRESET_DEFAULT)
    for key, env_var in TIMING_ENV_VARS.items():
        raw = os.getenv(env_var, "").strip()
        if not raw:
            continue
        parse = int if key in _INTEGER_KEYS else float
        try:
            config[key] = parse(raw)
        except ValueError:
            raise ValueError(
                "{} must be a number, got '{}'.".format(env_var, raw)
            ) from None
    return config
