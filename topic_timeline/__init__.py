"""Topic timeline library: ``##`` scripts to subtitle tracks and timestamps.

WHY: Narrated scripts are written as plain text with ``##`` section titles.
Publishing the video needs a timed subtitle track and a list of topic
timestamps for the description. This package is the pure core that turns
topics into both, with no I/O and no global state, so it can be called from
the CLI, the HTTP API and tests alike.

HOW: The single public entry point for timing is generate_track(topics,
include_titles, preset). It resolves the preset to a config dict, validates
it, runs the segmentation engine and renders the subtitle text and the
timestamp list. parse_topics() turns raw text into topics.

RULES:
- generate_track() is the ONLY public API for producing a subtitle track.
- Preset names: "default".
- Never mutate the preset constants; copies are made internally.
- Configuration problems raise ValueError; content never does.
- Python 3.9.6 compatible (no slots=True, no match/case, no X | Y unions).
"""

import copy
from typing import Dict, Optional, Sequence

from .core import build_track, render_srt, render_timestamps, split_content
from .models import ClockState, TimedBlock, Topic, TopicTimelineEntry, Track
from .parser import extract_titles, parse_topics, remove_numbering
from .presets import PRESET_DEFAULT, PRESETS, REQUIRED_KEYS
from .timecode import format_short, format_subtitle_clock, next_topic_start

__all__ = [
    "generate_track",
    "resolve_config",
    "parse_topics",
    "extract_titles",
    "remove_numbering",
    "format_subtitle_clock",
    "format_short",
    "next_topic_start",
    "split_content",
    "Topic",
    "TimedBlock",
    "TopicTimelineEntry",
    "ClockState",
    "Track",
    "PRESETS",
    "PRESET_DEFAULT",
]

__version__ = "0.1.0"

_POSITIVE_KEYS = ("max_block_chars", "max_block_words", "block_duration", "title_duration")
_NON_NEGATIVE_KEYS = ("block_interval", "topic_interval")


def resolve_config(preset: str = "default", config: Optional[Dict] = None) -> Dict:
    """Return a validated private copy of the timing config.

    Args:
        preset: Preset name, used when config is None.
        config: Optional custom config dict. If provided, preset is ignored.

    Raises:
        ValueError: Unknown preset, missing key, or out-of-range value.
    """
    if config is not None:
        cfg = copy.deepcopy(config)
    else:
        if preset not in PRESETS:
            raise ValueError(
                "Unknown preset '{}'. Available: {}".format(
                    preset, ", ".join(PRESETS.keys())
                )
            )
        cfg = copy.deepcopy(PRESETS[preset])

    missing = [key for key in REQUIRED_KEYS if key not in cfg]
    if missing:
        raise ValueError("Timing config is missing: {}".format(", ".join(missing)))

    for key in _POSITIVE_KEYS:
        if cfg[key] <= 0:
            raise ValueError("{} must be positive, got {}".format(key, cfg[key]))
    for key in _NON_NEGATIVE_KEYS:
        if cfg[key] < 0:
            raise ValueError("{} must not be negative, got {}".format(key, cfg[key]))

    return cfg


def generate_track(
    topics: Sequence[Topic],
    include_titles: bool = True,
    preset: str = "default",
    config: Optional[Dict] = None,
) -> Track:
    """Build the subtitle track and timestamp list for a list of topics.

    WHY: Callers want the finished artifacts, not the engine's internals.
    This wraps config resolution, segmentation and rendering in one call.

    HOW: resolve_config() -> build_track() -> render_srt() and
    render_timestamps(). Every call builds its own ClockState, so concurrent
    or repeated calls never share counters.

    Args:
        topics: Parsed topics, in order.
        include_titles: Emit each topic title as its own subtitle block.
        preset: Preset name ("default").
        config: Optional custom timing config. If provided, preset is ignored.

    Returns:
        Track with srt, timestamps, blocks, timeline and the final clock.
        An empty topic list gives an empty Track.

    Raises:
        ValueError: If the preset or config is invalid.
    """
    cfg = resolve_config(preset, config)
    track = build_track(topics, include_titles, cfg)
    track.srt = render_srt(track.blocks)
    track.timestamps = render_timestamps(track.timeline)
    return track
