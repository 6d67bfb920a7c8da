"""Timestamp formatting and topic spacing.

WHY: The subtitle file and the human-readable timestamp list show the same
kind of value (seconds) in two different notations. Both conversions, and
the minute-aligned spacing between topics, are pure functions kept apart
from the segmentation engine so they can be tested on their own.

HOW: to_components() does a floor-based decomposition; the two formatters
render from it. next_topic_start() rounds up to the next whole minute and
adds the configured topic interval.

RULES:
- Inputs are non-negative seconds (int or float).
- format_subtitle_clock() is always HH:MM:SS,mmm (2/2/2/3 digits).
- format_short() is M:SS below one hour, H:MM:SS from one hour on.
"""

import math
from typing import Dict, NamedTuple


class TimeComponents(NamedTuple):
    hours: int
    minutes: int
    seconds: int
    milliseconds: int


def to_components(seconds: float) -> TimeComponents:
    """Split seconds into hours, minutes, seconds and milliseconds (floored)."""
    return TimeComponents(
        hours=int(math.floor(seconds / 3600)),
        minutes=int(math.floor((seconds % 3600) / 60)),
        seconds=int(math.floor(seconds % 60)),
        milliseconds=int(math.floor((seconds % 1) * 1000)),
    )


def format_subtitle_clock(seconds: float) -> str:
    """Format seconds as an SRT timestamp: HH:MM:SS,mmm"""
    t = to_components(seconds)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(
        t.hours, t.minutes, t.seconds, t.milliseconds
    )


def format_short(seconds: float) -> str:
    """Format seconds for video descriptions: M:SS or H:MM:SS."""
    t = to_components(seconds)
    if t.hours > 0:
        return "{}:{:02d}:{:02d}".format(t.hours, t.minutes, t.seconds)
    return "{}:{:02d}".format(t.minutes, t.seconds)


def next_topic_start(current_end: float, config: Dict) -> float:
    """Start time of the next topic on the subtitle clock.

    Rounds current_end up to a multiple of 60, then adds
    config["topic_interval"]. A value already on a minute boundary is not
    pushed to the following minute.
    """
    next_minute = math.ceil(current_end / 60) * 60
    return next_minute + config["topic_interval"]
