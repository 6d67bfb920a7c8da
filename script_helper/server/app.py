"""FastAPI application exposing title extraction and SRT generation.

WHY: Editors paste scripts into a web front end or call the service from
automation (n8n, curl). An HTTP API gives them the numbered title list, the
subtitle track with description timestamps, and the spreadsheet exports
without installing anything. FastAPI provides automatic OpenAPI
documentation and request validation.

HOW: POST /titles is stateless. POST /sessions parses the script, runs all
formatters and caches topics and outputs in the session store, so that
toggling the title-block option (PATCH) regenerates from the cached topics
and downloads are served from memory.

RULES:
- All endpoints have OpenAPI descriptions on every parameter and response
- Error responses use a consistent ErrorResponse schema
- "No titles" is reported as 422 with the localized advisory, never as an
  empty artifact
- The session store is a singleton created at import time
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from topic_timeline import extract_titles, format_short, generate_track

from script_helper import __version__
from script_helper.config import (
    DEFAULT_INCLUDE_TITLES,
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_ROWS,
    SERVER_HOST,
    SERVER_PORT,
    SUPPORTED_LANGUAGES,
    load_timing_config,
)
from script_helper.formatters import FORMATTERS
from script_helper.formatters.base import FormatterOutput
from script_helper.formatters.title_list import generate_list
from script_helper.messages import translate
from script_helper.naming import derive_basename
from script_helper.pipeline import generate_outputs, parse_script
from script_helper.server.models import (
    ErrorResponse,
    FileInfo,
    FileListResponse,
    FormatInfo,
    HealthResponse,
    SessionCreateRequest,
    SessionResponse,
    SessionUpdateRequest,
    TitlesRequest,
    TitlesResponse,
    TopicInfo,
)
from script_helper.server.sessions import Session, SessionStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and store setup
# ---------------------------------------------------------------------------

session_store = SessionStore()


async def _periodic_cleanup() -> None:
    """Run session cleanup every 5 minutes."""
    while True:
        await asyncio.sleep(300)
        session_store.cleanup_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start periodic cleanup on startup, cancel on shutdown."""
    task = asyncio.create_task(_periodic_cleanup())
    yield
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


app = FastAPI(
    lifespan=lifespan,
    title="Script Helper API",
    description=(
        "Extract '##' titles from a script and generate a numbered list, "
        "spreadsheet exports, and a paced SRT subtitle track with timestamps "
        "for the video description."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_language(language: Optional[str]) -> str:
    """Return a supported language code or raise HTTPException(400)."""
    lang = language or DEFAULT_LANGUAGE
    if lang not in SUPPORTED_LANGUAGES:
        raise HTTPException(
            status_code=400,
            detail="Unsupported language '{}'. Supported: {}".format(
                lang, ", ".join(SUPPORTED_LANGUAGES)
            ),
        )
    return lang


def _file_infos(outputs: Dict[str, FormatterOutput]) -> List[FileInfo]:
    infos = []
    for filename, output in outputs.items():
        content = output.content
        size = len(content) if isinstance(content, bytes) else len(content.encode("utf-8"))
        infos.append(FileInfo(filename=filename, media_type=output.media_type, size=size))
    return infos


def _load_timing_config() -> Dict:
    """Return the timing config or raise HTTPException(500) if .env is invalid."""
    try:
        return load_timing_config()
    except ValueError as exc:
        logger.exception("Invalid timing configuration")
        raise HTTPException(
            status_code=500, detail="Invalid server configuration: {}".format(exc)
        )


def _regenerate(session: Session, timing_config: Dict) -> Session:
    """Rebuild every output for a session from its cached topics.

    WHY: Toggling the title-block option must not require the client to
    resend the script. Topics are cached; only the outputs change.

    HOW: Runs generate_track() once and hands the track to the formatter
    pipeline, so the inline SRT/timestamp text and the downloadable files
    come from the same run. Both are then stored on the session.
    """
    track = generate_track(
        session.topics, include_titles=session.include_titles, config=timing_config
    )
    outputs = dict(generate_outputs(
        session.topics,
        include_titles=session.include_titles,
        max_rows=session.max_rows,
        timing_config=timing_config,
        track=track,
    ))
    updated = session_store.update_session(
        session.id,
        srt=track.srt,
        timestamps=track.timestamps,
        timeline=track.timeline,
        outputs=outputs,
    )
    return updated if updated is not None else session


def _session_to_response(session: Session, message: str) -> SessionResponse:
    """Convert an internal Session dataclass to a SessionResponse model."""
    return SessionResponse(
        id=session.id,
        include_titles=session.include_titles,
        language=session.language,
        topics=[
            TopicInfo(
                number=entry.number,
                title=entry.title,
                start=format_short(entry.real_time),
            )
            for entry in session.timeline
        ],
        srt=session.srt,
        timestamps=session.timestamps,
        files=_file_infos(session.outputs),
        message=message,
    )


def _get_session_or_404(session_id: str) -> Session:
    session = session_store.get_session(session_id)
    if session is None:
        raise HTTPException(
            status_code=404, detail="Session not found: {}".format(session_id)
        )
    return session


# ---------------------------------------------------------------------------
# Endpoints: Titles
# ---------------------------------------------------------------------------


@app.post(
    "/titles",
    response_model=TitlesResponse,
    tags=["titles"],
    summary="Extract titles as a numbered list",
    description=(
        "Extract every '##' title from the script, strip existing numbering, "
        "and return the titles plus a freshly numbered list."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported language"},
        422: {"model": ErrorResponse, "description": "No titles found"},
    },
)
def create_title_list(request: TitlesRequest) -> TitlesResponse:
    lang = _resolve_language(request.language)
    titles = extract_titles(request.text, placeholder=translate("no_title", lang))
    if not titles:
        raise HTTPException(status_code=422, detail=translate("no_titles_found", lang))

    return TitlesResponse(
        count=len(titles),
        titles=titles,
        numbered_list=generate_list(titles),
        message=translate("titles_extracted", lang, count=len(titles)),
    )


# ---------------------------------------------------------------------------
# Endpoints: Sessions
# ---------------------------------------------------------------------------


@app.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=201,
    tags=["sessions"],
    summary="Generate all outputs for a script",
    description=(
        "Parse the script into topics, generate the SRT track, timestamp "
        "list, title list and spreadsheet exports, and cache them under a "
        "session ID for later regeneration and download."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported language"},
        422: {"model": ErrorResponse, "description": "No topics found"},
        429: {"model": ErrorResponse, "description": "Too many sessions"},
        500: {"model": ErrorResponse, "description": "Invalid timing configuration"},
    },
)
def create_session(request: SessionCreateRequest) -> SessionResponse:
    lang = _resolve_language(request.language)
    topics = parse_script(request.text, lang)
    if not topics:
        raise HTTPException(status_code=422, detail=translate("no_topics_found", lang))
    timing_config = _load_timing_config()

    include_titles = (
        request.include_titles if request.include_titles is not None
        else DEFAULT_INCLUDE_TITLES
    )
    try:
        session = session_store.create_session(
            topics,
            basename=derive_basename(topics),
            include_titles=include_titles,
            language=lang,
            max_rows=request.max_rows or DEFAULT_MAX_ROWS,
        )
    except ValueError as exc:
        raise HTTPException(status_code=429, detail=str(exc))

    session = _regenerate(session, timing_config)
    return _session_to_response(
        session, translate("topics_found", lang, count=len(topics))
    )


@app.get(
    "/sessions/{session_id}",
    response_model=SessionResponse,
    tags=["sessions"],
    summary="Get a session",
    description="Return the cached topics and the last generated outputs.",
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def get_session(session_id: str) -> SessionResponse:
    session = _get_session_or_404(session_id)
    return _session_to_response(
        session, translate("topics_found", session.language, count=len(session.topics))
    )


@app.patch(
    "/sessions/{session_id}",
    response_model=SessionResponse,
    tags=["sessions"],
    summary="Change display options and regenerate",
    description=(
        "Toggle whether topic titles appear as separate SRT entries. The "
        "subtitle track and files are regenerated from the cached topics."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
        500: {"model": ErrorResponse, "description": "Invalid timing configuration"},
    },
)
def update_session(
    session_id: str,
    request: SessionUpdateRequest,
) -> SessionResponse:
    _get_session_or_404(session_id)
    timing_config = _load_timing_config()
    session = session_store.update_session(
        session_id, include_titles=request.include_titles
    )
    if session is None:
        raise HTTPException(
            status_code=404, detail="Session not found: {}".format(session_id)
        )
    session = _regenerate(session, timing_config)
    return _session_to_response(session, translate("srt_updated", session.language))


@app.get(
    "/sessions/{session_id}/files",
    response_model=FileListResponse,
    tags=["sessions"],
    summary="List output files for a session",
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def list_session_files(session_id: str) -> FileListResponse:
    session = _get_session_or_404(session_id)
    return FileListResponse(session_id=session.id, files=_file_infos(session.outputs))


@app.get(
    "/sessions/{session_id}/files/{filename}",
    tags=["sessions"],
    summary="Download a single output file",
    description=(
        "Download one output file. The filename must match one of the files "
        "listed for the session."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid filename"},
        404: {"model": ErrorResponse, "description": "Session or file not found"},
    },
)
def download_session_file(session_id: str, filename: str) -> Response:
    # Path separators and bare dot names; the lookup below is exact.
    if "/" in filename or "\\" in filename or filename in (".", ".."):
        raise HTTPException(status_code=400, detail="Invalid filename")

    session = _get_session_or_404(session_id)
    output = session.outputs.get(filename)
    if output is None:
        raise HTTPException(
            status_code=404,
            detail="File '{}' not found in session output files.".format(filename),
        )
    if output.suffix == ".srt" and not output.content:
        raise HTTPException(
            status_code=404, detail=translate("no_srt_to_download", session.language)
        )

    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(ascii_name)},
    )


@app.delete(
    "/sessions/{session_id}",
    status_code=204,
    tags=["sessions"],
    summary="Delete a session",
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def delete_session(session_id: str) -> Response:
    if not session_store.delete_session(session_id):
        raise HTTPException(
            status_code=404, detail="Session not found: {}".format(session_id)
        )
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Endpoints: Formats and health
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
)
async def list_formats() -> List[FormatInfo]:
    return [
        FormatInfo(key=key, name=formatter_cls().name)
        for key, formatter_cls in sorted(FORMATTERS.items())
    ]


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api() -> None:
    """Entry point for the script-helper-api console script."""
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
