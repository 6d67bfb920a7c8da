"""Timing presets for subtitle block segmentation.

WHY: Block length limits and display durations are heuristics, not values
derived from audio. Keeping them as one named, importable preset (instead of
literals scattered through the engine) lets callers override any of them per
call without touching library code.

HOW: Each preset is a plain dict of named constants. PRESETS maps preset
names to their dicts. REQUIRED_KEYS lists every key the engine reads, so a
custom config can be validated before segmentation starts.

RULES:
- Presets are frozen constants; never mutate them at runtime.
- Callers must copy a preset before modifying it (generate_track() does this).
- Durations and intervals are seconds; limits are counts.
"""

from typing import Dict, Tuple

PRESET_DEFAULT: Dict = {
    "max_block_chars": 500,   # characters per block
    "max_block_words": 100,   # words per block
    "block_duration": 35,     # display time of a content block
    "block_interval": 30,     # padding after every block (subtitle clock only)
    "topic_interval": 60,     # padding after the minute round-up between topics
    "title_duration": 5,      # display time of a title block
}

PRESETS: Dict[str, Dict] = {
    "default": PRESET_DEFAULT,
}

REQUIRED_KEYS: Tuple[str, ...] = (
    "max_block_chars",
    "max_block_words",
    "block_duration",
    "block_interval",
    "topic_interval",
    "title_duration",
)
