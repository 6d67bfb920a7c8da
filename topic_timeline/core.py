"""Segmentation and timeline engine.

WHY: A narrated script has to be turned into subtitle entries that are short
enough to read, break at sentence ends where possible, and are paced with
pauses for playback. At the same time the video description needs topic
timestamps that reflect narration time only, without those pauses. This
module produces both from one pass over the topics.

HOW: The pipeline has three stages:
  1. split_content(): greedy word accumulation into block texts, falling
     back to the last period in the buffer when a limit would be exceeded.
  2. build_track(): walks the topics, emits an optional title block plus
     the content blocks for each, and advances two clocks held in an
     explicit ClockState.
  3. render_srt() / render_timestamps(): serialize the blocks and the
     timeline into their text formats, joined once at the end.

RULES:
- ALL functions take an explicit ``config`` dict; no module-level state.
- srt_time advances by duration + block_interval per block and is aligned
  to the next padded minute between topics (not after the last one).
- real_time advances by the block duration only.
- A topic's timeline entry records real_time before its title block.
- An empty buffer always accepts the next word, however long it is.
"""

import re
from typing import Dict, Iterator, List, Sequence

from .models import ClockState, TimedBlock, Topic, TopicTimelineEntry, Track
from .timecode import format_short, format_subtitle_clock, next_topic_start

WHITESPACE_RE = re.compile(r"\s+")


# =============================================================================
# Block splitting
# =============================================================================

def split_content(content: str, config: Dict) -> Iterator[str]:
    """Split a topic body into block texts.

    WHY: Blocks must respect the character and word limits, but cutting in
    the middle of a sentence reads badly. When a limit is hit, the buffer is
    cut after its last period if there is text after it; the tail carries
    over into the next block.

    HOW: Words are appended with one trailing space while
    len(buffer) + len(word) <= max_block_chars and the word count is below
    max_block_words. On overflow:
      - last period found and not the final character: yield up to and
        including the period; the remainder plus the pending word starts the
        next buffer, and the word count becomes the number of
        whitespace-split pieces of the remainder plus one.
      - otherwise: yield the whole buffer; the pending word starts the next.

    RULES:
    - Yielded texts are trimmed and never empty.
    - The remainder word count keeps the empty edge pieces produced by
      splitting on whitespace, so it can overcount by up to two.

    Args:
        content: Raw topic body.
        config: Timing config with max_block_chars and max_block_words.

    Yields:
        Block texts in order.
    """
    max_chars = config["max_block_chars"]
    max_words = config["max_block_words"]

    buffer = ""
    words_in_block = 0

    for word in content.split():
        fits = (len(buffer) + len(word) <= max_chars
                and words_in_block < max_words)
        if fits or not buffer:
            buffer += word + " "
            words_in_block += 1
            continue

        last_period = buffer.rfind(".")
        if last_period != -1 and last_period != len(buffer) - 1:
            remainder = buffer[last_period + 1:]
            yield buffer[:last_period + 1].strip()
            buffer = remainder + word + " "
            words_in_block = len(WHITESPACE_RE.split(remainder)) + 1
        else:
            yield buffer.strip()
            buffer = word + " "
            words_in_block = 1

    if buffer.strip():
        yield buffer.strip()


# =============================================================================
# Timeline
# =============================================================================

def _emit_block(
    clock: ClockState, blocks: List[TimedBlock], text: str,
    duration: float, config: Dict
) -> None:
    """Append one block at the current subtitle time and advance both clocks."""
    end = clock.srt_time + duration
    blocks.append(TimedBlock(
        sequence_index=clock.counter,
        start=clock.srt_time,
        end=end,
        text=text,
    ))
    clock.counter += 1
    clock.srt_time += duration + config["block_interval"]
    clock.real_time += duration


def title_block_text(topic: Topic) -> str:
    return "{}. {}...".format(topic.number, topic.title)


def build_track(
    topics: Sequence[Topic], include_titles: bool, config: Dict
) -> Track:
    """Segment topics into timed blocks and per-topic timeline entries.

    WHY: This is the heart of the library. One pass produces both the
    padded subtitle timing and the unpadded topic timestamps, so the two
    can never drift apart in how blocks are counted.

    HOW: A fresh ClockState is threaded through the run. For each topic:
    record real_time, emit the title block (title_duration) if requested,
    emit every split_content() block (block_duration), add the timeline
    entry, and align srt_time to next_topic_start() unless this was the
    last topic.

    Args:
        topics: Parsed topics, in order. Never mutated.
        include_titles: Emit "{number}. {title}..." as its own block.
        config: Timing config (see presets.REQUIRED_KEYS).

    Returns:
        Track with blocks, timeline and final clock. srt/timestamps are
        left empty; render them with render_srt()/render_timestamps().
    """
    clock = ClockState()
    blocks = []  # type: List[TimedBlock]
    timeline = []  # type: List[TopicTimelineEntry]

    for index, topic in enumerate(topics):
        topic_start = clock.real_time

        if include_titles:
            _emit_block(clock, blocks, title_block_text(topic),
                        config["title_duration"], config)

        for text in split_content(topic.content, config):
            _emit_block(clock, blocks, text, config["block_duration"], config)

        timeline.append(TopicTimelineEntry(
            number=topic.number,
            title=topic.title,
            real_time=topic_start,
        ))

        if index < len(topics) - 1:
            clock.srt_time = next_topic_start(clock.srt_time, config)

    return Track(blocks=blocks, timeline=timeline, clock=clock)


# =============================================================================
# Rendering
# =============================================================================

def render_srt(blocks: Sequence[TimedBlock]) -> str:
    """Render blocks as SRT: index, time range, text, blank separator.

    The overall output has no leading or trailing blank lines.
    """
    lines = []  # type: List[str]
    for block in blocks:
        lines.append(str(block.sequence_index))
        lines.append("{} --> {}".format(
            format_subtitle_clock(block.start), format_subtitle_clock(block.end)
        ))
        lines.append(block.text)
        lines.append("")
    return "\n".join(lines).strip()


def render_timestamps(timeline: Sequence[TopicTimelineEntry]) -> str:
    """One "{M:SS} - {number}. {title}" line per topic."""
    return "\n".join(
        "{} - {}. {}".format(format_short(entry.real_time), entry.number, entry.title)
        for entry in timeline
    )
