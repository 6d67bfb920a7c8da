"""In-memory session store with TTL cleanup.

WHY: After a script is generated, clients toggle display options (title
blocks on or off) and download the produced files. Re-uploading and
re-parsing the text for each of those actions would be wasteful, so the
API keeps the last parsed topics and generated outputs per session. An
in-memory store is sufficient for a single-team tool with no persistence
requirements.

HOW: Two components work together:
  Session     : dataclass holding the topics, options and generated outputs
  SessionStore: thread-safe dict-based store with create/get/list/update/
                 delete and TTL cleanup

RULES:
- All store mutations are protected by threading.Lock for thread safety
- Session IDs are UUID4 hex strings generated at creation time
- Topics are immutable once stored; regeneration only replaces outputs
- TTL is measured from updated_at, so an actively used session stays alive
- Default TTL is 1 hour (3600 seconds)
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from topic_timeline import Topic, TopicTimelineEntry

from script_helper.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)

# Default time-to-live for idle sessions (seconds)
DEFAULT_TTL_SECONDS = 3600


@dataclass
class Session:
    """The cached state of one script generation.

    RULES:
    - id: UUID4 hex string, unique and immutable after creation
    - topics: parsed topics, never mutated after creation
    - include_titles / language / max_rows: options used for the outputs
    - basename: derived filename base (see script_helper.naming)
    - srt / timestamps: last generated subtitle track and timestamp list
    - timeline: per-topic start on the content clock from the last generation
    - outputs: filename → FormatterOutput for every downloadable file
    """

    id: str
    topics: List[Topic]
    include_titles: bool
    language: str
    max_rows: int
    basename: str
    created_at: float
    updated_at: float
    srt: str = ""
    timestamps: str = ""
    timeline: List[TopicTimelineEntry] = field(default_factory=list)
    outputs: Dict[str, FormatterOutput] = field(default_factory=dict)


class SessionStore:
    """Thread-safe in-memory store for generation sessions.

    RULES:
    - All public methods that touch state acquire self._lock
    - get_session() returns None for missing session IDs (no exceptions)
    - create_session() raises ValueError when max_sessions is reached
    - cleanup_expired() removes sessions idle for longer than the TTL
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_sessions: int = 100,
    ) -> None:
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()
        self._ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions

    def create_session(
        self,
        topics: List[Topic],
        basename: str,
        include_titles: bool = True,
        language: str = "en",
        max_rows: int = 20,
    ) -> Session:
        """Store a new session for the given topics.

        Raises:
            ValueError: If the store already holds max_sessions sessions.
        """
        with self._lock:
            if len(self._sessions) >= self.max_sessions:
                raise ValueError(
                    "Maximum number of sessions ({}) reached".format(
                        self.max_sessions
                    )
                )

            session_id = uuid.uuid4().hex
            now = time.time()
            session = Session(
                id=session_id,
                topics=list(topics),
                include_titles=include_titles,
                language=language,
                max_rows=max_rows,
                basename=basename,
                created_at=now,
                updated_at=now,
            )
            self._sessions[session_id] = session

        logger.info("Created session %s with %d topics", session_id, len(topics))
        return session

    def get_session(self, session_id: str) -> Optional[Session]:
        """Retrieve a session by ID, or None if not found.

        The returned Session is the live instance (not a copy).
        """
        with self._lock:
            return self._sessions.get(session_id)

    def list_sessions(self) -> List[Session]:
        """Return all sessions, oldest first."""
        with self._lock:
            return sorted(self._sessions.values(), key=lambda s: s.created_at)

    def update_session(
        self,
        session_id: str,
        include_titles: Optional[bool] = None,
        srt: Optional[str] = None,
        timestamps: Optional[str] = None,
        timeline: Optional[List[TopicTimelineEntry]] = None,
        outputs: Optional[Dict[str, FormatterOutput]] = None,
    ) -> Optional[Session]:
        """Apply non-None updates and bump updated_at.

        Returns:
            The updated Session, or None if session_id is not found.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None

            if include_titles is not None:
                session.include_titles = include_titles
            if srt is not None:
                session.srt = srt
            if timestamps is not None:
                session.timestamps = timestamps
            if timeline is not None:
                session.timeline = list(timeline)
            if outputs is not None:
                session.outputs = outputs

            session.updated_at = time.time()
            return session

    def delete_session(self, session_id: str) -> bool:
        """Delete a session. Returns True if it existed."""
        with self._lock:
            session = self._sessions.pop(session_id, None)

        if session is None:
            return False

        logger.info("Deleted session %s", session_id)
        return True

    def cleanup_expired(self) -> int:
        """Remove every session idle for longer than the TTL.

        Returns:
            The number of removed sessions.
        """
        now = time.time()
        expired: List[Session] = []

        with self._lock:
            for session_id, session in list(self._sessions.items()):
                if now - session.updated_at > self._ttl_seconds:
                    expired.append(self._sessions.pop(session_id))

        for session in expired:
            logger.info(
                "Expired session %s (idle %.0fs)", session.id, now - session.updated_at
            )

        return len(expired)
