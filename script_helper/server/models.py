"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: Each endpoint pair (request + response) has its own model. All models
include Field descriptions for rich OpenAPI docs.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Response models never expose internal implementation details
- Optional request fields default to None and fall back to server config
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TitlesRequest(BaseModel):
    """Raw script text for title extraction."""

    text: str = Field(description="Script text with titles marked by '##'.")
    language: Optional[str] = Field(
        default=None,
        description="Language for messages and the untitled placeholder ('en', 'pt').",
    )


class SessionCreateRequest(BaseModel):
    """Raw script text plus generation options.

    RULES:
    - include_titles defaults to the server's SCRIPT_HELPER_INCLUDE_TITLES
    - max_rows defaults to the server's SCRIPT_HELPER_MAX_ROWS
    """

    text: str = Field(description="Script text with titles marked by '##'.")
    include_titles: Optional[bool] = Field(
        default=None,
        description="Include each topic title as a separate subtitle entry.",
    )
    language: Optional[str] = Field(
        default=None,
        description="Language for messages and the untitled placeholder ('en', 'pt').",
    )
    max_rows: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum topics per spreadsheet file.",
    )


class SessionUpdateRequest(BaseModel):
    """Display options that can change after generation."""

    include_titles: bool = Field(
        description="Include each topic title as a separate subtitle entry.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class TitlesResponse(BaseModel):
    """Extracted titles and the numbered list."""

    count: int = Field(description="Number of titles found.")
    titles: List[str] = Field(description="Cleaned titles in source order.")
    numbered_list: str = Field(description="Numbered list, one '{n}. {title}' per line.")
    message: str = Field(description="Localized advisory message.")


class TopicInfo(BaseModel):
    """A parsed topic and its start on the content clock."""

    number: int = Field(description="1-based topic number.")
    title: str = Field(description="Cleaned topic title.")
    start: str = Field(description="Start time in M:SS or H:MM:SS (narration time).")


class FileInfo(BaseModel):
    """Metadata for a downloadable output file."""

    filename: str = Field(description="Output filename.")
    media_type: str = Field(description="MIME type of the file.")
    size: int = Field(description="File size in bytes.")


class SessionResponse(BaseModel):
    """Generated outputs for a session."""

    id: str = Field(description="Unique session identifier.")
    include_titles: bool = Field(description="Whether title entries are in the SRT.")
    language: str = Field(description="Language used for messages and placeholders.")
    topics: List[TopicInfo] = Field(description="Parsed topics in source order.")
    srt: str = Field(description="Complete subtitle track in SRT format.")
    timestamps: str = Field(description="Timestamp list for the video description.")
    files: List[FileInfo] = Field(description="Downloadable output files.")
    message: str = Field(description="Localized advisory message.")


class FileListResponse(BaseModel):
    """List of output files for a session."""

    session_id: str = Field(description="Session identifier.")
    files: List[FileInfo] = Field(description="Downloadable output files.")


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier.")
    name: str = Field(description="Human-readable format name.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status.")
    version: str = Field(description="Application version.")


class ErrorResponse(BaseModel):
    """Consistent error response body."""

    detail: str = Field(description="Human-readable error message.")
