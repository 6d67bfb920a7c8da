"""Data models for the topic timeline library.

WHY: The parser, the segmentation engine and the output sinks all need a
shared vocabulary: what a topic is, what a timed block is, and what the
per-topic timeline looks like. Plain dataclasses keep these contracts
explicit and easy to construct in tests.

HOW: Five dataclasses:
  Topic             : one ``##`` section: number, cleaned title, raw body
  TimedBlock        : one subtitle entry on the padded subtitle clock
  TopicTimelineEntry: where a topic starts on the unpadded content clock
  ClockState        : the counters threaded through one generation run
  Track             : everything one generation run produces

RULES:
- Topic is frozen; the engine reads topics but never mutates them.
- Topic.content is kept untrimmed (one inserted space per source line).
- All times are float seconds.
- ClockState is created fresh per run; never share one between runs.
- Python 3.9.6 compatible (no slots=True, no match/case, no X | Y unions).
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Topic:
    """A title-marked section of the input text.

    Attributes:
        number: 1-based position in source order.
        title: Cleaned title (marker and leading numbering stripped).
        content: Accumulated body text, each source line followed by a space.
    """
    number: int
    title: str
    content: str


@dataclass
class TimedBlock:
    """One timed unit of subtitle text.

    Attributes:
        sequence_index: Global 1-based entry number across all topics.
        start: Start on the subtitle clock, in seconds.
        end: End on the subtitle clock, in seconds (always > start).
        text: Block text, already trimmed.
    """
    sequence_index: int
    start: float
    end: float
    text: str


@dataclass
class TopicTimelineEntry:
    """Start of a topic on the real (content) clock."""
    number: int
    title: str
    real_time: float


@dataclass
class ClockState:
    """Mutable counters for one generation run.

    counter is the next block sequence number. srt_time includes inter-block
    and inter-topic padding; real_time only accumulates block durations.
    """
    counter: int = 1
    srt_time: float = 0.0
    real_time: float = 0.0


@dataclass
class Track:
    """Result of one generation run.

    Attributes:
        blocks: Every emitted block, in order.
        timeline: One entry per input topic, same order as the input.
        clock: Final clock state after the last block.
        srt: Rendered subtitle file content.
        timestamps: Rendered human-readable timestamp list.
    """
    blocks: List[TimedBlock] = field(default_factory=list)
    timeline: List[TopicTimelineEntry] = field(default_factory=list)
    clock: ClockState = field(default_factory=ClockState)
    srt: str = ""
    timestamps: str = ""
