"""SRT subtitle formatter with companion timestamp list.

WHY: A narrated script needs a subtitle track paced for playback, and the
video description needs topic timestamps. Both come from one run of the
segmentation engine in topic_timeline, so this formatter is the bridge
between the parsed topics and that library.

HOW: Calls generate_track() once with the configured title-block option and
timing config, and returns the rendered subtitle track and the timestamp
list as two outputs.

RULES:
- Always produces TWO files: {base}.srt and {base}-timestamps.txt.
- Registered as "srt" in the FORMATTERS dict.
- Never modifies the topics.
- The timing config defaults to load_timing_config() (preset + .env).
- A prebuilt track passed to the constructor is used as is.
"""

from typing import Dict, List, Optional, Sequence

from topic_timeline import Topic, Track, generate_track

from script_helper.config import DEFAULT_INCLUDE_TITLES, load_timing_config
from script_helper.formatters.base import BaseFormatter, FormatterOutput


class SRTFormatter(BaseFormatter):
    """Formatter that produces the subtitle track and the timestamp list.

    Args:
        include_titles: Emit each topic title as its own subtitle entry.
        config: Timing config; defaults to load_timing_config().
        track: A track already built for the same topics; reused instead of
            running the engine again.
    """

    def __init__(
        self,
        include_titles: bool = DEFAULT_INCLUDE_TITLES,
        config: Optional[Dict] = None,
        track: Optional[Track] = None,
    ) -> None:
        self.include_titles = include_titles
        self.config = config
        self.track = track

    @property
    def name(self) -> str:
        return "SRT Subtitles"

    def build_track(self, topics: Sequence[Topic]) -> Track:
        if self.track is not None:
            return self.track
        config = self.config if self.config is not None else load_timing_config()
        return generate_track(topics, include_titles=self.include_titles, config=config)

    def format(self, topics: Sequence[Topic]) -> List[FormatterOutput]:
        """Run the segmentation engine and return the SRT and timestamp files."""
        if not topics:
            return []

        track = self.build_track(topics)
        return [
            FormatterOutput(
                suffix=".srt",
                content=track.srt,
                media_type="application/x-subrip",
            ),
            FormatterOutput(
                suffix="-timestamps.txt",
                content=track.timestamps,
                media_type="text/plain",
            ),
        ]
